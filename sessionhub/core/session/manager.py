"""
Session Lifecycle Manager

Public entry point for test code and framework hooks: starts sessions
through a driver factory, registers them for the calling thread and retires
them again.
"""

import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

from ...capabilities import with_user
from ...config.settings import ConfigProvider, SessionSettings, YamlConfigProvider
from ...errors import (
    ConfigurationError,
    GridUrlUnavailable,
    NoActiveSession,
    ReleaseFailure,
    SessionStartFailure,
)
from .record import SessionRecord
from .registry import SessionRegistry
from .release import release

logger = logging.getLogger(__name__)

WrapHook = Callable[[Any], Any]


class SessionManager:
    """
    Composes driver factory, configuration and registry.

    One manager is created per test run and shared by every worker thread;
    each thread sees only its own current session.
    """

    def __init__(
        self,
        factory,
        config: ConfigProvider,
        registry: Optional[SessionRegistry] = None,
        wrap_hooks: Optional[List[WrapHook]] = None,
    ):
        """
        Initialize the session manager.

        Args:
            factory: Driver factory with ``create`` and ``connect_remote``
            config: Property provider queried for ``host`` and ``implicitWaitTime``
            registry: Registry to use; a fresh one is created if omitted
            wrap_hooks: Callables applied to each new driver, in order,
                before it is registered (e.g. ``EventHandler.wrap``)
        """
        self.factory = factory
        self.config = config
        self.registry = registry if registry is not None else SessionRegistry()
        self.wrap_hooks: List[WrapHook] = list(wrap_hooks or [])

    @classmethod
    def from_config(cls, provider: Optional[ConfigProvider] = None, **kwargs) -> "SessionManager":
        """Build a manager using the default Playwright/Selenium factory."""
        from ..browser.factory import BrowserFactory

        return cls(BrowserFactory(), provider or YamlConfigProvider(), **kwargs)

    def add_wrap_hook(self, hook: WrapHook) -> None:
        self.wrap_hooks.append(hook)

    def settings(self) -> SessionSettings:
        return SessionSettings.from_provider(self.config)

    def start_session(self, capabilities: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Start a session and make it current for the calling thread.

        Args:
            capabilities: Capability mapping passed to the driver factory

        Returns:
            The live (possibly wrapped) driver handle

        Raises:
            SessionStartFailure: Configuration, factory or hook error; no
                registry entry is left behind
        """
        try:
            settings = self.settings()
        except ConfigurationError as e:
            raise SessionStartFailure(f"Invalid session configuration: {e}") from e

        caps: Dict[str, Any] = dict(capabilities or {})
        caps.setdefault("browserName", settings.browser_name)

        driver = None
        try:
            if settings.remote_url:
                driver = self.factory.connect_remote(settings.remote_url, caps)
            else:
                caps.setdefault("headless", settings.headless)
                driver = self.factory.create(caps)
            driver.implicitly_wait(settings.implicit_wait)
            for hook in self.wrap_hooks:
                driver = hook(driver)
        except Exception as e:
            if driver is not None:
                self._discard(driver)
            raise SessionStartFailure(f"Failed to start {caps.get('browserName')} session: {e}") from e

        record = SessionRecord.build(driver, settings.host, settings.grid_enabled)
        self.registry.register(record)
        logger.info(f"✅ Started {record.describe()}")
        return driver

    def start_session_as_user(self, user_tag: str, capabilities: Optional[Mapping[str, Any]] = None) -> Any:
        """Start a session whose capabilities carry a fixed user identity."""
        try:
            caps = with_user(capabilities, user_tag)
        except ValueError as e:
            raise SessionStartFailure(f"Invalid user identity: {e}") from e
        return self.start_session(caps)

    def get_driver(self) -> Any:
        """Driver of the calling thread's current session; raises ``NoActiveSession``."""
        return self.registry.current_for_thread().driver

    def current_session(self) -> SessionRecord:
        return self.registry.current_for_thread()

    def has_active_session(self) -> bool:
        return self.registry.has_current()

    def get_grid_url(self) -> str:
        """
        Grid resource URL of the calling thread's current session.

        Raises:
            GridUrlUnavailable: No current session, or it is not a
                grid-enabled remote session
        """
        try:
            record = self.registry.current_for_thread()
        except NoActiveSession as e:
            raise GridUrlUnavailable("No active session on this thread") from e
        if record.grid_url is None:
            raise GridUrlUnavailable(f"{record.describe()} has no grid resource URL")
        return record.grid_url

    def switch_to(self, session_id: str) -> Any:
        """Make another thread's session current here; raises ``SessionNotFound``."""
        return self.registry.rebind_thread(session_id).driver

    def retire_thread(self, release_resource: bool = True) -> Optional[SessionRecord]:
        return self.registry.retire_thread(release_resource)

    def retire_all(self, release_resource: bool = True) -> Optional[SessionRecord]:
        return self.registry.retire_all(release_resource)

    def soft_retire_thread(self) -> Optional[SessionRecord]:
        """
        Detach the current session without quitting it, then reattach the
        most recently created session to this thread.

        Returns:
            The detached record, or None if nothing was bound
        """
        detached = self.registry.detach()
        last = self.registry.last_created
        if last is not None:
            self.registry.register(last)
        return detached

    @contextmanager
    def session(self, capabilities: Optional[Mapping[str, Any]] = None) -> Iterator[Any]:
        """Start a session for the block and retire it afterwards."""
        driver = self.start_session(capabilities)
        try:
            yield driver
        finally:
            self.retire_thread()

    def shutdown(self, release_resource: bool = True) -> None:
        """Retire every session in the registry at the end of the run."""
        self.registry.close(release_resource)

    def _discard(self, driver: Any) -> None:
        """Quit a driver that never made it into the registry."""
        try:
            release(driver)
        except ReleaseFailure as e:
            logger.warning(f"Could not quit driver after failed start: {e}")
