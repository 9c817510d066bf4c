"""
sessionhub: Browser Session Lifecycle for Parallel Test Runs

Binds each test thread to one live browser-automation session, finds
sessions by thread or by remote session id, derives grid resource URLs for
supergrid deployments and tears sessions down exactly once.

Key Components:
- Core: session records, the thread-keyed registry, lifecycle manager
- Browser: Playwright/Selenium driver factory and event hooks
- Config: YAML/environment property providers
"""

from .capabilities import USER_CAPABILITY, VIEW_ONLY_USER, with_user
from .config import SessionSettings, StaticConfigProvider, YamlConfigProvider
from .core.session import SessionRecord, SessionRegistry, derive_grid_url, is_grid_enabled, release
from .core.session.manager import SessionManager
from .errors import (
    ConfigurationError,
    GridUrlUnavailable,
    NoActiveSession,
    ReleaseFailure,
    SessionHubError,
    SessionNotFound,
    SessionStartFailure,
)

__version__ = "1.0.0"

__all__ = [
    # Core
    'SessionManager', 'SessionRecord', 'SessionRegistry',
    'derive_grid_url', 'is_grid_enabled', 'release',

    # Configuration
    'SessionSettings', 'StaticConfigProvider', 'YamlConfigProvider',

    # Capabilities
    'USER_CAPABILITY', 'VIEW_ONLY_USER', 'with_user',

    # Errors
    'SessionHubError', 'ConfigurationError', 'SessionStartFailure',
    'NoActiveSession', 'SessionNotFound', 'GridUrlUnavailable', 'ReleaseFailure',
]
