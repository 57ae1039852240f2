"""
Service layer for login sessions.

A session is valid from creation until ``expires_at``; after that it is
logically dead even if the row still exists.  Expired rows are removed
by ``sweep_expired``, which ``run_sweeper`` calls on a fixed interval
from a background task started with the application.  The sweep only
ever deletes rows whose expiry already passed, so it can run alongside
request handling.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..core.security import generate_session_token
from ..schemas.session import SessionRead
from ..storage.base import Storage, utcnow


logger = logging.getLogger(__name__)


class SessionService:
    """Issue, resolve, revoke and sweep bearer sessions."""

    def __init__(
        self,
        storage: Storage,
        ttl: timedelta = timedelta(days=7),
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.storage = storage
        self.ttl = ttl
        self.clock = clock

    async def create(self, user_id: str) -> SessionRead:
        """Create a session for ``user_id`` that expires after the validity window."""
        now = self.clock()
        session = SessionRead(
            id=generate_session_token(),
            user_id=user_id,
            expires_at=now + self.ttl,
            created_at=now,
        )
        return self.storage.create_session(session)

    async def get(self, token: str) -> Optional[SessionRead]:
        """Return the stored session, expired or not."""
        return self.storage.get_session(token)

    def is_valid(self, session: SessionRead) -> bool:
        return self.clock() < session.expires_at

    async def resolve(self, token: str) -> Optional[SessionRead]:
        """Return the session only while it is still valid."""
        session = await self.get(token)
        if session is None or not self.is_valid(session):
            return None
        return session

    async def delete(self, token: str) -> bool:
        """Remove a session.  Returns ``False`` if there was nothing to remove."""
        return self.storage.delete_session(token)

    async def sweep_expired(self) -> int:
        """Delete every session whose expiry has passed."""
        removed = self.storage.delete_expired_sessions(self.clock())
        if removed:
            logger.info("Swept %d expired sessions", removed)
        return removed

    async def run_sweeper(self, interval: float) -> None:
        """Call ``sweep_expired`` every ``interval`` seconds until cancelled.

        Storage failures are logged and the loop carries on with the next
        tick.
        """
        logger.info("Session sweeper started (every %s seconds)", interval)
        while True:
            await asyncio.sleep(interval)
            try:
                await self.sweep_expired()
            except Exception:
                logger.exception("Expired session sweep failed")
