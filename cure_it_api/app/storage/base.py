"""
Abstract storage contract.

Both backends return schema objects (``UserRecord``, ``ContactRead``,
``SessionRead``) and accept plain dictionaries of snake_case fields for
writes.  Lookups that find nothing return ``None``; deletes report
whether a row was removed.  All timestamps are timezone-aware UTC.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..schemas.contact import ContactFilters, ContactRead
from ..schemas.session import SessionRead
from ..schemas.user import UserRecord


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def contact_sort_key(contact: ContactRead):
    """Directory ordering: service type, then name."""
    return (contact.service_type.value, contact.name)


class Storage(ABC):
    """Persistence contract shared by the in-memory and SQLite backends."""

    def __init__(self, seed: bool = False) -> None:
        self.seed = seed

    def initialize(self) -> None:
        """Prepare the backend and insert the default directory if requested."""
        if self.seed and self.count_contacts() == 0:
            from .seed import seed_contacts

            seed_contacts(self)

    def close(self) -> None:
        """Release backend resources.  No-op by default."""

    # Accounts

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[UserRecord]:
        ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        ...

    @abstractmethod
    def create_user(self, data: Dict[str, Any]) -> UserRecord:
        """Insert an account.  Raises ``ValidationError`` if the email exists."""

    @abstractmethod
    def update_user(self, user_id: str, updates: Dict[str, Any]) -> Optional[UserRecord]:
        """Apply ``updates`` and refresh ``updated_at``."""

    @abstractmethod
    def list_users(self) -> List[UserRecord]:
        """All accounts, newest first."""

    # Emergency contacts

    @abstractmethod
    def list_contacts(self, filters: Optional[ContactFilters] = None) -> List[ContactRead]:
        """Active contacts narrowed by ``filters``, ordered by service type then name.

        ``city``, ``state`` and ``service_type`` match exactly.  ``search`` is a
        substring match over name, designation and facility after Python
        ``str.lower()`` on both sides; ``%`` and ``_`` are literal.
        """

    @abstractmethod
    def get_contact(self, contact_id: str) -> Optional[ContactRead]:
        ...

    @abstractmethod
    def create_contact(self, data: Dict[str, Any], contact_id: Optional[str] = None) -> ContactRead:
        ...

    @abstractmethod
    def update_contact(self, contact_id: str, updates: Dict[str, Any]) -> Optional[ContactRead]:
        """Apply ``updates``; ``updated_at`` is refreshed even when nothing else changes."""

    @abstractmethod
    def delete_contact(self, contact_id: str) -> bool:
        ...

    @abstractmethod
    def count_contacts(self) -> int:
        """Number of stored contacts, active or not."""

    # Sessions

    @abstractmethod
    def create_session(self, session: SessionRead) -> SessionRead:
        ...

    @abstractmethod
    def get_session(self, session_id: str) -> Optional[SessionRead]:
        ...

    @abstractmethod
    def delete_session(self, session_id: str) -> bool:
        ...

    @abstractmethod
    def delete_expired_sessions(self, now: datetime) -> int:
        """Remove sessions with ``expires_at <= now`` and return how many went."""
