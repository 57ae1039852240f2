"""
SQLite storage backend.

Each operation opens its own connection, runs parameterized statements
and closes the connection again, so the backend can be shared between
request handlers and the session sweeper without extra locking.
Timestamps are stored as ISO‑8601 UTC strings with microsecond
precision, which keeps lexical and chronological order identical.
Column names used in dynamic ``UPDATE`` statements come from fixed
whitelists, never from client input.
"""

from __future__ import annotations

import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from ..core.db import apply_migrations, get_connection, get_cursor
from ..core.errors import ValidationError
from ..schemas.contact import ContactFilters, ContactRead
from ..schemas.session import SessionRead
from ..schemas.user import UserRecord
from .base import Storage, utcnow


logger = logging.getLogger(__name__)

USER_COLUMNS = ("id", "email", "password", "role", "created_at", "updated_at", "last_login_at", "city", "state")
CONTACT_COLUMNS = (
    "id",
    "name",
    "designation",
    "facility",
    "service_type",
    "phone",
    "alternate_phone",
    "email",
    "address",
    "city",
    "state",
    "availability",
    "is_active",
    "created_at",
    "updated_at",
)


def _to_db(value: Any) -> Any:
    """Convert Python values to something sqlite3 stores natively."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.isoformat(timespec="microseconds")
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, bool):
        return 1 if value else 0
    return value


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SQLiteStorage(Storage):
    """:class:`Storage` backed by a SQLite database file."""

    def __init__(self, db_path: str, seed: bool = False) -> None:
        super().__init__(seed=seed)
        self.db_path = db_path

    def initialize(self) -> None:
        version = apply_migrations(self.db_path)
        logger.info("SQLite storage ready at %s (schema version %s)", self.db_path, version)
        super().initialize()

    def _insert(self, table: str, columns: tuple, data: Dict[str, Any]) -> None:
        names = [c for c in columns if c in data]
        placeholders = ", ".join("?" for _ in names)
        with get_cursor(self.db_path) as cursor:
            cursor.execute(
                f"INSERT INTO {table} ({', '.join(names)}) VALUES ({placeholders})",
                tuple(_to_db(data[c]) for c in names),
            )

    def _update(self, table: str, columns: tuple, row_id: str, updates: Dict[str, Any]) -> bool:
        fields = {k: v for k, v in updates.items() if k in columns and k not in ("id", "created_at")}
        fields["updated_at"] = utcnow()
        assignments = ", ".join(f"{key} = ?" for key in fields)
        with get_cursor(self.db_path) as cursor:
            cursor.execute(
                f"UPDATE {table} SET {assignments} WHERE id = ?",
                tuple(_to_db(v) for v in fields.values()) + (row_id,),
            )
            return cursor.rowcount > 0

    def _fetch_one(self, sql: str, params: tuple) -> Optional[sqlite3.Row]:
        conn = get_connection(self.db_path)
        try:
            return conn.execute(sql, params).fetchone()
        finally:
            conn.close()

    def _fetch_all(self, sql: str, params: tuple = ()) -> List[sqlite3.Row]:
        conn = get_connection(self.db_path)
        try:
            return conn.execute(sql, params).fetchall()
        finally:
            conn.close()

    # Accounts

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        row = self._fetch_one("SELECT * FROM users WHERE id = ?", (user_id,))
        return UserRecord.model_validate(dict(row)) if row else None

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        row = self._fetch_one("SELECT * FROM users WHERE email = ?", (email,))
        return UserRecord.model_validate(dict(row)) if row else None

    def create_user(self, data: Dict[str, Any]) -> UserRecord:
        now = utcnow()
        record = {"created_at": now, "updated_at": now, **data, "id": data.get("id") or str(uuid.uuid4())}
        try:
            self._insert("users", USER_COLUMNS, record)
        except sqlite3.IntegrityError as exc:
            raise ValidationError("User with this email already exists") from exc
        return self.get_user(record["id"])

    def update_user(self, user_id: str, updates: Dict[str, Any]) -> Optional[UserRecord]:
        if not self._update("users", USER_COLUMNS, user_id, updates):
            return None
        return self.get_user(user_id)

    def list_users(self) -> List[UserRecord]:
        rows = self._fetch_all("SELECT * FROM users ORDER BY created_at DESC")
        return [UserRecord.model_validate(dict(row)) for row in rows]

    # Emergency contacts

    def list_contacts(self, filters: Optional[ContactFilters] = None) -> List[ContactRead]:
        filters = filters or ContactFilters()
        where = ["is_active = 1"]
        params: List[Any] = []
        if filters.city:
            where.append("city = ?")
            params.append(filters.city)
        if filters.state:
            where.append("state = ?")
            params.append(filters.state)
        if filters.service_type:
            where.append("service_type = ?")
            params.append(filters.service_type)
        if filters.search:
            pattern = f"%{_escape_like(filters.search.lower())}%"
            where.append(
                "(py_lower(name) LIKE ? ESCAPE '\\' OR py_lower(designation) LIKE ? ESCAPE '\\'"
                " OR py_lower(facility) LIKE ? ESCAPE '\\')"
            )
            params.extend([pattern, pattern, pattern])
        sql = (
            f"SELECT * FROM emergency_contacts WHERE {' AND '.join(where)} "
            "ORDER BY service_type ASC, name ASC"
        )
        return [ContactRead.model_validate(dict(row)) for row in self._fetch_all(sql, tuple(params))]

    def get_contact(self, contact_id: str) -> Optional[ContactRead]:
        row = self._fetch_one("SELECT * FROM emergency_contacts WHERE id = ?", (contact_id,))
        return ContactRead.model_validate(dict(row)) if row else None

    def create_contact(self, data: Dict[str, Any], contact_id: Optional[str] = None) -> ContactRead:
        now = utcnow()
        record = {**data, "id": contact_id or str(uuid.uuid4()), "created_at": now, "updated_at": now}
        self._insert("emergency_contacts", CONTACT_COLUMNS, record)
        return self.get_contact(record["id"])

    def update_contact(self, contact_id: str, updates: Dict[str, Any]) -> Optional[ContactRead]:
        if not self._update("emergency_contacts", CONTACT_COLUMNS, contact_id, updates):
            return None
        return self.get_contact(contact_id)

    def delete_contact(self, contact_id: str) -> bool:
        with get_cursor(self.db_path) as cursor:
            cursor.execute("DELETE FROM emergency_contacts WHERE id = ?", (contact_id,))
            return cursor.rowcount > 0

    def count_contacts(self) -> int:
        row = self._fetch_one("SELECT COUNT(*) AS count FROM emergency_contacts", ())
        return row["count"]

    # Sessions

    def create_session(self, session: SessionRead) -> SessionRead:
        self._insert("sessions", ("id", "user_id", "expires_at", "created_at"), session.model_dump())
        return session

    def get_session(self, session_id: str) -> Optional[SessionRead]:
        row = self._fetch_one("SELECT * FROM sessions WHERE id = ?", (session_id,))
        return SessionRead.model_validate(dict(row)) if row else None

    def delete_session(self, session_id: str) -> bool:
        with get_cursor(self.db_path) as cursor:
            cursor.execute("DELETE FROM sessions WHERE id = ?", (session_id,))
            return cursor.rowcount > 0

    def delete_expired_sessions(self, now: datetime) -> int:
        with get_cursor(self.db_path) as cursor:
            cursor.execute("DELETE FROM sessions WHERE expires_at <= ?", (_to_db(now),))
            return cursor.rowcount
