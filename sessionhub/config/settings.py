"""
Session Configuration

Read-only configuration consumed by the session manager. Values come from a
``sessionhub.yml`` file, overridden by environment variables (a ``.env``
file is loaded first), and are always handed out as strings through
``get_property`` so providers stay interchangeable.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Protocol

import yaml
from dotenv import load_dotenv

from ..core.session.grid import DEFAULT_GRID_MARKER, is_grid_enabled
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "sessionhub.yml"
DEFAULT_IMPLICIT_WAIT = 30.0
DEFAULT_REMOTE_PATH = "/wd/hub"

# property key -> environment variable
ENV_OVERRIDES = {
    "host": "SESSIONHUB_HOST",
    "implicitWaitTime": "SESSIONHUB_IMPLICIT_WAIT_TIME",
    "gridMarker": "SESSIONHUB_GRID_MARKER",
    "remotePath": "SESSIONHUB_REMOTE_PATH",
    "browserName": "SESSIONHUB_BROWSER",
    "headless": "SESSIONHUB_HEADLESS",
}


class ConfigProvider(Protocol):
    """Anything that can answer property lookups."""

    def get_property(self, key: str) -> Optional[str]:
        ...


class StaticConfigProvider:
    """Configuration from an in-memory mapping."""

    def __init__(self, properties: Optional[Mapping[str, Any]] = None):
        self._properties = {k: v for k, v in (properties or {}).items() if v is not None}

    def get_property(self, key: str) -> Optional[str]:
        value = self._properties.get(key)
        return None if value is None else str(value)


class YamlConfigProvider:
    """Handles sessionhub.yml parsing with environment overrides."""

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH, use_env: bool = True):
        self.config_path = config_path
        self.use_env = use_env
        self.config: Dict[str, Any] = {}
        if use_env:
            load_dotenv()
        self.load_config()

    def load_config(self) -> None:
        """Load and parse the configuration file."""
        try:
            with open(self.config_path, 'r') as file:
                loaded = yaml.safe_load(file) or {}
            logger.info(f"Loaded configuration from {self.config_path}")
        except FileNotFoundError:
            logger.debug(f"No {self.config_path} found, using defaults")
            loaded = {}
        except yaml.YAMLError as e:
            logger.error(f"Error parsing {self.config_path}: {e}")
            raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}") from e

        if not isinstance(loaded, dict):
            raise ConfigurationError(f"{self.config_path} must contain a mapping, got {type(loaded).__name__}")
        self.config = loaded.get("session", loaded)

    def get_property(self, key: str) -> Optional[str]:
        if self.use_env:
            env_name = ENV_OVERRIDES.get(key)
            if env_name and os.getenv(env_name):
                return os.getenv(env_name)
        value = self.config.get(key)
        return None if value is None else str(value)


@dataclass
class SessionSettings:
    """Typed view of the properties the session manager needs."""
    host: Optional[str] = None
    implicit_wait: float = DEFAULT_IMPLICIT_WAIT
    grid_marker: str = DEFAULT_GRID_MARKER
    remote_path: str = DEFAULT_REMOTE_PATH
    browser_name: str = "chromium"
    headless: bool = True

    @property
    def grid_enabled(self) -> bool:
        return is_grid_enabled(self.host, self.grid_marker)

    @property
    def remote_url(self) -> Optional[str]:
        """WebDriver endpoint on the configured host, None for local runs."""
        if not self.host:
            return None
        path = self.remote_path if self.remote_path.startswith('/') else f"/{self.remote_path}"
        return f"https://{self.host}{path}"

    @classmethod
    def from_provider(cls, provider: ConfigProvider) -> "SessionSettings":
        """
        Read settings from a provider, filling in defaults.

        Raises:
            ConfigurationError: A value is present but malformed
        """
        wait_raw = provider.get_property("implicitWaitTime")
        if wait_raw is None or not wait_raw.strip():
            implicit_wait = DEFAULT_IMPLICIT_WAIT
        else:
            try:
                implicit_wait = float(wait_raw)
            except ValueError as e:
                raise ConfigurationError(f"implicitWaitTime must be a number of seconds, got '{wait_raw}'") from e
            if implicit_wait < 0:
                raise ConfigurationError(f"implicitWaitTime cannot be negative, got {implicit_wait}")

        headless_raw = provider.get_property("headless")
        headless = True if headless_raw is None else headless_raw.strip().lower() not in ("false", "0", "no")

        return cls(
            host=(provider.get_property("host") or "").strip() or None,
            implicit_wait=implicit_wait,
            grid_marker=provider.get_property("gridMarker") or DEFAULT_GRID_MARKER,
            remote_path=provider.get_property("remotePath") or DEFAULT_REMOTE_PATH,
            browser_name=provider.get_property("browserName") or "chromium",
            headless=headless,
        )
