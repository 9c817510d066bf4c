"""
Session Record

Immutable binding of a live driver handle to its remote session id and
derived grid URL. Records are replaced, never mutated.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Optional

from .grid import derive_grid_url


@dataclass(frozen=True)
class SessionRecord:
    """One live automation session as known to the registry."""
    driver: Any
    session_id: Optional[str] = None
    grid_url: Optional[str] = None
    created_at: float = field(default_factory=time.time, compare=False)

    @classmethod
    def build(cls, driver: Any, host: Optional[str] = None, grid_enabled: bool = False) -> "SessionRecord":
        """
        Create a record for a freshly started driver.

        The session id is read from the driver (remote WebDriver sessions
        expose ``session_id``; local engines report None) and the grid URL
        is derived once here rather than on every lookup.
        """
        session_id = getattr(driver, "session_id", None)
        if session_id is not None:
            session_id = str(session_id)
        return cls(
            driver=driver,
            session_id=session_id,
            grid_url=derive_grid_url(host, session_id, grid_enabled),
        )

    @property
    def is_remote(self) -> bool:
        return self.session_id is not None

    def describe(self) -> str:
        """Short label for log messages."""
        if self.session_id:
            return f"session {self.session_id}"
        return f"local session {type(self.driver).__name__}@{id(self.driver):x}"
