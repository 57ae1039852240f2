"""
SQLite database integration and simple migration system.

This module provides functions for resolving the database path
(``get_database_path``), obtaining a connection (``get_connection``)
and applying migrations (``apply_migrations``).  It is used by the
``SQLiteStorage`` backend; the in-memory backend never touches it.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import sqlite3
from contextlib import contextmanager
from typing import Iterator, List, Tuple

from .config import resolve_project_path


MIGRATIONS: List[Tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id TEXT PRIMARY KEY,
            email TEXT NOT NULL UNIQUE,
            password TEXT NOT NULL,
            role TEXT NOT NULL DEFAULT 'user' CHECK (role IN ('user', 'admin')),
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL,
            last_login_at TEXT,
            city TEXT,
            state TEXT
        );

        CREATE TABLE IF NOT EXISTS emergency_contacts (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            designation TEXT,
            facility TEXT,
            service_type TEXT NOT NULL
                CHECK (service_type IN ('police', 'medical', 'fire', 'municipal')),
            phone TEXT NOT NULL,
            alternate_phone TEXT,
            email TEXT,
            address TEXT,
            city TEXT NOT NULL,
            state TEXT NOT NULL,
            availability TEXT NOT NULL DEFAULT '24/7',
            is_active INTEGER NOT NULL DEFAULT 1,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS sessions (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            expires_at TEXT NOT NULL,
            created_at TEXT NOT NULL,
            FOREIGN KEY(user_id) REFERENCES users(id)
        );
        """,
    ),
    # Migration 2: indices for the directory filters and the session sweep
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_contacts_location ON emergency_contacts(city, state);
        CREATE INDEX IF NOT EXISTS idx_contacts_service_type ON emergency_contacts(service_type);
        CREATE INDEX IF NOT EXISTS idx_sessions_expires_at ON sessions(expires_at);
        """,
    ),
]


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    An absolute path is used directly.  Otherwise it is resolved
    relative to the project root.
    """
    return str(resolve_project_path(database_url))


def _py_lower(value):
    return value.lower() if isinstance(value, str) else value


def get_connection(db_path: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection returns rows as ``sqlite3.Row`` so columns can be
    accessed by name, enforces foreign keys and provides ``py_lower``,
    a Unicode-aware ``lower()`` that SQLite's builtin lacks.
    """
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.create_function("py_lower", 1, _py_lower, deterministic=True)
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor(db_path: str) -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor, commits, and closes the connection on exit."""
    conn = get_connection(db_path)
    try:
        yield conn.cursor()
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def apply_migrations(db_path: str) -> int:
    """Create the schema and apply pending migrations.

    Returns the schema version after the run.  To change the schema,
    append a migration with an incremented version number.
    """
    with get_cursor(db_path) as cursor:
        cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
        cursor.execute("SELECT MAX(version) AS version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                current_version = version
    return current_version
