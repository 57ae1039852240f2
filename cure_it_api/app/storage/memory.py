"""
In-memory storage backend.

Records live in dictionaries keyed by id for the lifetime of the
process.  A re-entrant lock keeps each operation atomic, which is all
the consistency the request handlers and the session sweeper need.
Useful for development and tests; nothing survives a restart.
"""

from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..core.errors import ValidationError
from ..schemas.contact import ContactFilters, ContactRead
from ..schemas.session import SessionRead
from ..schemas.user import UserRecord
from .base import Storage, contact_sort_key, utcnow


logger = logging.getLogger(__name__)


def _contains(haystack: Optional[str], needle: str) -> bool:
    return needle in (haystack or "").lower()


class MemoryStorage(Storage):
    """Dictionary-backed implementation of :class:`Storage`."""

    def __init__(self, seed: bool = False) -> None:
        super().__init__(seed=seed)
        self._lock = threading.RLock()
        self._users: Dict[str, UserRecord] = {}
        self._contacts: Dict[str, ContactRead] = {}
        self._sessions: Dict[str, SessionRead] = {}

    # Accounts

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return user
            return None

    def create_user(self, data: Dict[str, Any]) -> UserRecord:
        with self._lock:
            if self.get_user_by_email(data["email"]) is not None:
                raise ValidationError("User with this email already exists")
            now = utcnow()
            record = UserRecord.model_validate(
                {"created_at": now, "updated_at": now, **data, "id": data.get("id") or str(uuid.uuid4())}
            )
            self._users[record.id] = record
            return record

    def update_user(self, user_id: str, updates: Dict[str, Any]) -> Optional[UserRecord]:
        with self._lock:
            current = self._users.get(user_id)
            if current is None:
                return None
            merged = {**current.model_dump(), **updates, "id": user_id, "updated_at": utcnow()}
            record = UserRecord.model_validate(merged)
            self._users[user_id] = record
            return record

    def list_users(self) -> List[UserRecord]:
        with self._lock:
            return sorted(self._users.values(), key=lambda u: u.created_at, reverse=True)

    # Emergency contacts

    def list_contacts(self, filters: Optional[ContactFilters] = None) -> List[ContactRead]:
        filters = filters or ContactFilters()
        with self._lock:
            contacts = [c for c in self._contacts.values() if c.is_active]
        if filters.city:
            contacts = [c for c in contacts if c.city == filters.city]
        if filters.state:
            contacts = [c for c in contacts if c.state == filters.state]
        if filters.service_type:
            contacts = [c for c in contacts if c.service_type.value == filters.service_type]
        if filters.search:
            needle = filters.search.lower()
            contacts = [
                c
                for c in contacts
                if _contains(c.name, needle) or _contains(c.designation, needle) or _contains(c.facility, needle)
            ]
        return sorted(contacts, key=contact_sort_key)

    def get_contact(self, contact_id: str) -> Optional[ContactRead]:
        with self._lock:
            return self._contacts.get(contact_id)

    def create_contact(self, data: Dict[str, Any], contact_id: Optional[str] = None) -> ContactRead:
        now = utcnow()
        record = ContactRead.model_validate(
            {**data, "id": contact_id or str(uuid.uuid4()), "created_at": now, "updated_at": now}
        )
        with self._lock:
            self._contacts[record.id] = record
        return record

    def update_contact(self, contact_id: str, updates: Dict[str, Any]) -> Optional[ContactRead]:
        with self._lock:
            current = self._contacts.get(contact_id)
            if current is None:
                return None
            merged = {**current.model_dump(), **updates, "id": contact_id, "updated_at": utcnow()}
            record = ContactRead.model_validate(merged)
            self._contacts[contact_id] = record
            return record

    def delete_contact(self, contact_id: str) -> bool:
        with self._lock:
            return self._contacts.pop(contact_id, None) is not None

    def count_contacts(self) -> int:
        with self._lock:
            return len(self._contacts)

    # Sessions

    def create_session(self, session: SessionRead) -> SessionRead:
        with self._lock:
            self._sessions[session.id] = session
        return session

    def get_session(self, session_id: str) -> Optional[SessionRead]:
        with self._lock:
            return self._sessions.get(session_id)

    def delete_session(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def delete_expired_sessions(self, now: datetime) -> int:
        with self._lock:
            expired = [sid for sid, s in self._sessions.items() if s.expires_at <= now]
            for sid in expired:
                del self._sessions[sid]
        if expired:
            logger.debug("Removed %d expired sessions from memory", len(expired))
        return len(expired)
