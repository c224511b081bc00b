"""In-memory verification session storage with time-based eviction.

Store characteristics:
- O(1) lookup by session id
- Thread-safe operations with asyncio locks
- Snapshots in, snapshots out (callers never hold the stored object)

Sessions older than the retention horizon are removed by sweep_expired()
regardless of status. update() never recreates a swept id, so an in-flight
session stays evicted once removed. The sweep can be run on demand or by the background
cleanup task started with start_cleanup_monitoring().

Usage:
    from verification_system.data_management.session_store import SessionStore

    store = SessionStore()
    await store.add(session)
    session = await store.get("3f0c...")
    removed = await store.sweep_expired()
"""

import asyncio
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

import structlog

from verification_system.data_management.schemas import (
    SessionStatus,
    VerificationSession,
    utc_now,
)
from verification_system.exceptions import DuplicateSession

DEFAULT_RETENTION = timedelta(hours=1)

# Statuses that block reuse of a session id
IN_USE_STATUSES = frozenset(
    {SessionStatus.PENDING, SessionStatus.RUNNING, SessionStatus.COMPLETED}
)


class SessionStore:
    """Storage for verification sessions keyed by session id.

    Data structure:
    {
        session_id: VerificationSession,
        ...
    }
    """

    def __init__(
        self,
        retention: timedelta = DEFAULT_RETENTION,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """Initialize SessionStore.

        Args:
            retention: Default age after which sessions are evicted.
            clock: Returns the current UTC time. Injected by tests.
        """
        self._sessions: dict[str, VerificationSession] = {}
        self._lock = asyncio.Lock()
        self._retention = retention
        self._clock = clock or utc_now
        self._total_created = 0
        self._cleanup_task: Optional[asyncio.Task] = None
        self._logger = structlog.get_logger().bind(component="SessionStore")

    @property
    def retention(self) -> timedelta:
        return self._retention

    def now(self) -> datetime:
        return self._clock()

    async def add(self, session: VerificationSession) -> None:
        """Insert a new session, enforcing one verification per id.

        A failed session id may be reused; its old record is replaced.

        Raises:
            DuplicateSession: If the id is pending, running or completed.
        """
        async with self._lock:
            existing = self._sessions.get(session.id)
            if existing is not None and existing.status in IN_USE_STATUSES:
                self._logger.warning(
                    "duplicate_session",
                    session_id=session.id,
                    status=existing.status.value,
                )
                raise DuplicateSession(session.id, existing.status.value)

            self._sessions[session.id] = session.model_copy(deep=True)
            self._total_created += 1

            self._logger.debug(
                "session_added",
                session_id=session.id,
                requester_id=session.requester_id,
                replaced_failed=existing is not None,
            )

    async def put(self, session: VerificationSession) -> None:
        """Store the latest snapshot of a session (insert or overwrite)."""
        async with self._lock:
            self._sessions[session.id] = session.model_copy(deep=True)
            self._logger.debug(
                "session_saved",
                session_id=session.id,
                status=session.status.value,
            )

    async def update(self, session: VerificationSession) -> bool:
        """Overwrite the snapshot of a session that is still stored.

        Sessions evicted by a sweep stay evicted.

        Returns:
            True if saved, False if the id is no longer in the store.
        """
        async with self._lock:
            if session.id not in self._sessions:
                self._logger.warning(
                    "session_update_skipped",
                    session_id=session.id,
                    status=session.status.value,
                    reason="evicted",
                )
                return False
            self._sessions[session.id] = session.model_copy(deep=True)
            self._logger.debug(
                "session_updated",
                session_id=session.id,
                status=session.status.value,
            )
            return True

    async def get(self, session_id: str) -> Optional[VerificationSession]:
        """Get a copy of a session by id.

        Returns:
            VerificationSession if found, None otherwise.
        """
        async with self._lock:
            session = self._sessions.get(session_id)
            return session.model_copy(deep=True) if session else None

    async def delete(self, session_id: str) -> bool:
        """Remove a session.

        Returns:
            True if removed, False if not found.
        """
        async with self._lock:
            return self._sessions.pop(session_id, None) is not None

    async def all_sessions(self) -> list[VerificationSession]:
        async with self._lock:
            return [s.model_copy(deep=True) for s in self._sessions.values()]

    async def count_by_status(self) -> dict[str, int]:
        """Count stored sessions per status value."""
        async with self._lock:
            counts = {status.value: 0 for status in SessionStatus}
            for session in self._sessions.values():
                counts[session.status.value] += 1
            return counts

    async def active_count(self) -> int:
        """Number of sessions with analyzers currently in flight."""
        async with self._lock:
            return sum(
                1 for s in self._sessions.values() if s.status == SessionStatus.RUNNING
            )

    @property
    def total_created(self) -> int:
        """Lifetime count of sessions accepted by add(); unaffected by sweeps."""
        return self._total_created

    def __len__(self) -> int:
        return len(self._sessions)

    async def sweep_expired(
        self,
        retention: Optional[timedelta] = None,
        now: Optional[datetime] = None,
    ) -> int:
        """Remove sessions created longer ago than the retention horizon.

        Status is ignored: running sessions past the horizon are removed too.

        Args:
            retention: Override for the store's default horizon.
            now: Reference time (defaults to the store clock).

        Returns:
            Number of sessions removed.
        """
        horizon = retention if retention is not None else self._retention
        reference = now or self._clock()

        async with self._lock:
            expired = [
                session_id
                for session_id, session in self._sessions.items()
                if reference - session.created_at > horizon
            ]
            for session_id in expired:
                del self._sessions[session_id]

        if expired:
            self._logger.info(
                "sessions_swept",
                removed=len(expired),
                remaining=len(self._sessions),
                horizon_seconds=horizon.total_seconds(),
            )
        return len(expired)

    async def start_cleanup_monitoring(self, interval_seconds: float = 300) -> None:
        """Start the background task that periodically sweeps expired sessions."""
        if self._cleanup_task and not self._cleanup_task.done():
            self._logger.warning("cleanup_already_running")
            return

        async def monitor() -> None:
            while True:
                try:
                    await asyncio.sleep(interval_seconds)
                    await self.sweep_expired()
                except asyncio.CancelledError:
                    break
                except Exception as e:
                    self._logger.error("cleanup_error", error=str(e), exc_info=True)

        self._cleanup_task = asyncio.create_task(monitor())
        self._logger.info("cleanup_started", interval_seconds=interval_seconds)

    async def stop_cleanup_monitoring(self) -> None:
        """Stop the background sweep task."""
        if self._cleanup_task and not self._cleanup_task.done():
            self._cleanup_task.cancel()
            try:
                await self._cleanup_task
            except asyncio.CancelledError:
                pass
            self._logger.info("cleanup_stopped")
        self._cleanup_task = None

    async def get_stats(self) -> dict[str, Any]:
        """Store statistics for monitoring."""
        counts = await self.count_by_status()
        return {
            "stored": sum(counts.values()),
            "total_created": self._total_created,
            "status_counts": counts,
            "retention_seconds": self._retention.total_seconds(),
        }
