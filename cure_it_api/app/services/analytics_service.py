"""
Service layer for admin analytics.

All figures are recomputed from the account and contact collections on
every call; nothing is stored or cached.  Contact figures cover active
contacts only, the same set a directory query without filters returns.
"""

from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta
from typing import Callable

from ..schemas.analytics import AnalyticsRead
from ..schemas.user import Role
from ..storage.base import Storage, utcnow

ACTIVE_WINDOW = timedelta(hours=24)


class AnalyticsService:
    """Aggregated usage and directory statistics for administrators."""

    def __init__(self, storage: Storage, clock: Callable[[], datetime] = utcnow) -> None:
        self.storage = storage
        self.clock = clock

    async def overview(self) -> AnalyticsRead:
        """Return account counts and the contact distribution.

        ``active_today`` counts accounts whose last login falls within
        the past 24 hours.  Locations are keyed as ``"city, state"``.
        """
        users = self.storage.list_users()
        contacts = self.storage.list_contacts()
        since = self.clock() - ACTIVE_WINDOW

        return AnalyticsRead(
            total_users=len(users),
            active_today=sum(1 for u in users if u.last_login_at is not None and u.last_login_at > since),
            admin_users=sum(1 for u in users if u.role == Role.ADMIN),
            total_contacts=len(contacts),
            service_distribution=dict(Counter(c.service_type.value for c in contacts)),
            location_distribution=dict(Counter(f"{c.city}, {c.state}" for c in contacts)),
        )
