"""
Configuration Management

Property providers and the typed settings view used by the session manager.
"""

from .settings import (
    ConfigProvider,
    SessionSettings,
    StaticConfigProvider,
    YamlConfigProvider,
)

__all__ = [
    'ConfigProvider', 'SessionSettings',
    'StaticConfigProvider', 'YamlConfigProvider',
]
