"""
Session Registry

Process-wide bookkeeping of live sessions, indexed by owning execution
context and by remote session id. Both indexes are updated together under a
single lock; driver shutdown always happens outside it.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from ...errors import NoActiveSession, ReleaseFailure, SessionNotFound
from .record import SessionRecord
from .release import release

logger = logging.getLogger(__name__)


class SessionRegistry:
    """
    Binds each execution context to at most one current session.

    A record may be bound to several contexts after ``rebind_thread``; its
    session-id entry is dropped and its driver released only when the last
    of those contexts retires it.
    """

    def __init__(self, context_id: Callable[[], Any] = threading.get_ident):
        """
        Initialize an empty registry.

        Args:
            context_id: Returns the identity of the calling execution context.
                Defaults to the native thread id; cooperative callers can pass
                a function reading a ``contextvars.ContextVar``.
        """
        self._context_id = context_id
        self._lock = threading.RLock()
        self._by_context: Dict[Any, SessionRecord] = {}
        self._by_session_id: Dict[str, SessionRecord] = {}
        self._last_created: Optional[SessionRecord] = None

    @property
    def last_created(self) -> Optional[SessionRecord]:
        """The most recently registered record, kept for soft-retire."""
        with self._lock:
            return self._last_created

    def register(self, record: SessionRecord) -> None:
        """Bind the record to the calling context and index its session id."""
        ctx = self._context_id()
        with self._lock:
            previous = self._by_context.get(ctx)
            if previous is not None and previous is not record:
                logger.warning(f"Context {ctx} already owned {previous.describe()}; replacing it")
            self._by_context[ctx] = record
            if record.session_id is not None:
                self._by_session_id[record.session_id] = record
            self._last_created = record
        logger.info(f"📌 Registered {record.describe()} for context {ctx}")

    def current_for_thread(self) -> SessionRecord:
        ctx = self._context_id()
        with self._lock:
            record = self._by_context.get(ctx)
        if record is None:
            raise NoActiveSession(ctx)
        return record

    def has_current(self) -> bool:
        ctx = self._context_id()
        with self._lock:
            return ctx in self._by_context

    def lookup_by_session_id(self, session_id: str) -> Optional[SessionRecord]:
        with self._lock:
            return self._by_session_id.get(session_id)

    def rebind_thread(self, session_id: str) -> SessionRecord:
        """
        Adopt a session started elsewhere for the calling context.

        The owning context keeps its own binding to the same record.

        Raises:
            SessionNotFound: No record carries this session id
        """
        ctx = self._context_id()
        with self._lock:
            record = self._by_session_id.get(session_id)
            if record is None:
                raise SessionNotFound(session_id)
            self._by_context[ctx] = record
        logger.info(f"🔀 Context {ctx} switched to {record.describe()}")
        return record

    def detach(self) -> Optional[SessionRecord]:
        """
        Unbind the calling context without releasing its driver.

        The record stays reachable by session id so the caller (or another
        context) can reattach to it later.
        """
        ctx = self._context_id()
        with self._lock:
            record = self._by_context.pop(ctx, None)
        if record is not None:
            logger.info(f"Detached {record.describe()} from context {ctx}")
        return record

    def retire_thread(self, release_resource: bool = True) -> Optional[SessionRecord]:
        """
        Remove the calling context's session and optionally quit its driver.

        Calling this with nothing bound is a no-op. The registry entries are
        gone even when the driver fails to quit.

        Returns:
            The retired record, or None if nothing was bound

        Raises:
            ReleaseFailure: The driver could not be terminated
        """
        ctx = self._context_id()
        with self._lock:
            record = self._by_context.pop(ctx, None)
            if record is None:
                return None
            still_bound = any(r is record for r in self._by_context.values())
            if not still_bound and self._by_session_id.get(record.session_id) is record:
                del self._by_session_id[record.session_id]
            if not still_bound and self._last_created is record:
                self._last_created = None

        if still_bound:
            logger.info(f"Context {ctx} released its binding to {record.describe()}; other contexts still use it")
            return record

        logger.info(f"🛑 Retiring {record.describe()} for context {ctx}")
        if release_resource:
            release(record.driver)
        return record

    def retire_all(self, release_resource: bool = True) -> Optional[SessionRecord]:
        """Teardown hook for the calling context; same scope as ``retire_thread``."""
        return self.retire_thread(release_resource)

    def active_sessions(self) -> List[SessionRecord]:
        """Snapshot of the distinct records currently bound to any context."""
        with self._lock:
            seen: Dict[int, SessionRecord] = {}
            for record in self._by_context.values():
                seen.setdefault(id(record), record)
            for record in self._by_session_id.values():
                seen.setdefault(id(record), record)
            return list(seen.values())

    def close(self, release_resource: bool = True) -> None:
        """
        Tear down every session at the end of a run.

        Each driver is released once, independently of the others. Failures
        are collected and raised together after all drivers have been tried.

        Raises:
            ReleaseFailure: At least one driver could not be terminated
        """
        with self._lock:
            records = self.active_sessions()
            self._by_context.clear()
            self._by_session_id.clear()
            self._last_created = None

        if not release_resource:
            return

        failures: List[BaseException] = []
        for record in records:
            try:
                release(record.driver)
            except ReleaseFailure as e:
                logger.error(f"Failed to release {record.describe()}: {e}")
                failures.extend(e.failures or [e])

        if failures:
            raise ReleaseFailure(
                f"{len(failures)} of {len(records)} sessions failed to terminate",
                failures,
            )
        logger.info(f"✅ Registry closed, {len(records)} session(s) released")

    def __len__(self) -> int:
        return len(self.active_sessions())
