"""
Session Errors

Exception types raised by the session registry and lifecycle manager.
Lookups that simply find nothing return None; these are reserved for
operations that assume an active or identifiable session.
"""

from typing import List, Optional


class SessionHubError(Exception):
    """Base class for all sessionhub errors."""


class ConfigurationError(SessionHubError):
    """A configuration value is present but cannot be used."""


class SessionStartFailure(SessionHubError):
    """The driver factory or configuration failed while starting a session."""


class NoActiveSession(SessionHubError):
    """The calling thread has no session bound to it."""

    def __init__(self, context_id=None):
        self.context_id = context_id
        super().__init__(f"No active session for execution context {context_id}")


class SessionNotFound(SessionHubError):
    """No registered session carries the requested remote session id."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"No session registered with id '{session_id}'")


class GridUrlUnavailable(SessionHubError):
    """The current session has no grid resource URL."""


class ReleaseFailure(SessionHubError):
    """
    The automation engine failed to terminate one or more sessions.

    When raised from a bulk teardown, ``failures`` holds every underlying
    error in the order the drivers were released.
    """

    def __init__(self, message: str, failures: Optional[List[BaseException]] = None):
        super().__init__(message)
        self.failures = failures or []
