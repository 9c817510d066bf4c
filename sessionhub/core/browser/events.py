"""
Driver Event Handling

Centralized event dispatch around driver calls. ``EventHandler.wrap`` is
meant to be used as a session manager wrap hook: the driver is wrapped
before it is stored, and the registry only ever sees the wrapper.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, List

logger = logging.getLogger(__name__)


@dataclass
class EventConfig:
    """Configuration for event handling."""
    capture_before: bool = True
    capture_after: bool = True
    capture_errors: bool = True
    log_calls: bool = False


class EventHandler:
    """Centralized driver event handler."""

    def __init__(self, config: EventConfig = None):
        self.config = config or EventConfig()
        self.before_handlers: List[Callable] = []
        self.after_handlers: List[Callable] = []
        self.error_handlers: List[Callable] = []

    def add_before_handler(self, handler: Callable):
        """Add a handler called as ``handler(driver, name, args, kwargs)``."""
        self.before_handlers.append(handler)

    def add_after_handler(self, handler: Callable):
        """Add a handler called as ``handler(driver, name, result)``."""
        self.after_handlers.append(handler)

    def add_error_handler(self, handler: Callable):
        """Add a handler called as ``handler(driver, name, error)``."""
        self.error_handlers.append(handler)

    def wrap(self, driver: Any) -> "EventFiringDriver":
        """Wrap a driver so its method calls fire this handler's events."""
        logger.info(f"Event handlers attached to {type(driver).__name__}")
        return EventFiringDriver(driver, self)

    def fire_before(self, driver, name: str, args, kwargs):
        if self.config.log_calls:
            logger.debug(f"→ {name}")
        if self.config.capture_before:
            self._dispatch(self.before_handlers, driver, name, args, kwargs)

    def fire_after(self, driver, name: str, result):
        if self.config.capture_after:
            self._dispatch(self.after_handlers, driver, name, result)

    def fire_error(self, driver, name: str, error: BaseException):
        if self.config.capture_errors:
            self._dispatch(self.error_handlers, driver, name, error)

    def _dispatch(self, handlers: List[Callable], *args):
        """Run handlers; a failing listener is logged and never breaks the driver call."""
        for handler in handlers:
            try:
                handler(*args)
            except Exception as e:
                logger.error(f"Error in event handler {getattr(handler, '__name__', handler)}: {e}")


class EventFiringDriver:
    """Proxy that forwards to the wrapped driver and fires events around calls."""

    def __init__(self, driver: Any, handler: EventHandler):
        object.__setattr__(self, "wrapped_driver", driver)
        object.__setattr__(self, "_handler", handler)

    def __getattr__(self, name: str):
        attr = getattr(self.wrapped_driver, name)
        if not callable(attr):
            return attr

        driver = self.wrapped_driver
        handler = self._handler

        def call(*args, **kwargs):
            handler.fire_before(driver, name, args, kwargs)
            try:
                result = attr(*args, **kwargs)
            except Exception as e:
                handler.fire_error(driver, name, e)
                raise
            handler.fire_after(driver, name, result)
            return result

        return call

    def __setattr__(self, name: str, value: Any):
        setattr(self.wrapped_driver, name, value)

    def __repr__(self) -> str:
        return f"EventFiringDriver({self.wrapped_driver!r})"
