"""
Pluggable persistence for accounts, contacts and sessions.

``Storage`` defines the contract; ``MemoryStorage`` keeps everything in
process and ``SQLiteStorage`` persists to a database file.  The backend
is chosen once at startup by ``create_storage`` from the
``STORAGE_BACKEND`` setting and handed to the services that need it.
"""

from ..core.config import Settings
from .base import Storage
from .memory import MemoryStorage
from .sqlite import SQLiteStorage

__all__ = ["Storage", "MemoryStorage", "SQLiteStorage", "create_storage"]


def create_storage(settings: Settings) -> Storage:
    """Build the storage backend named by ``settings.storage_backend``."""
    backend = settings.storage_backend.lower()
    if backend == "memory":
        return MemoryStorage(seed=settings.seed_data)
    if backend == "sqlite":
        from ..core.db import get_database_path

        return SQLiteStorage(get_database_path(settings.database_url), seed=settings.seed_data)
    raise ValueError(f"Unknown storage backend: {settings.storage_backend!r}")
