"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts with the in‑memory backend and the seeded contact
directory when nothing is configured.  In a production deployment
override these via environment variables.
"""

import os
from dataclasses import dataclass
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent


def resolve_project_path(path: str) -> Path:
    """Return ``path`` unchanged if absolute, else anchored at the project root."""
    candidate = Path(path)
    if candidate.is_absolute():
        return candidate
    return (PROJECT_ROOT / candidate).resolve()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Cure It API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    api_prefix: str = os.getenv("API_PREFIX", "/api")
    debug: bool = _env_flag("DEBUG", "false")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Storage backend selected at startup: ``memory`` keeps everything in
    # process, ``sqlite`` persists to ``database_url``.
    storage_backend: str = os.getenv("STORAGE_BACKEND", "memory")

    # Path to the SQLite database file.  A relative path is resolved
    # against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "cure_it.db")

    # Insert the default contact directory into an empty store.
    seed_data: bool = _env_flag("SEED_DATA", "true")

    # The one email that is provisioned with the admin role on first login.
    admin_email: str = os.getenv("ADMIN_EMAIL", "admin@cureit.app")

    session_ttl_days: int = int(os.getenv("SESSION_TTL_DAYS", "7"))
    # Period of the expired-session sweep.  Zero or less disables it.
    session_sweep_interval_seconds: int = int(os.getenv("SESSION_SWEEP_INTERVAL_SECONDS", "3600"))

    geocoding_url: str = os.getenv(
        "GEOCODING_URL", "https://api.bigdatacloud.net/data/reverse-geocode-client"
    )
    geocoding_timeout: float = float(os.getenv("GEOCODING_TIMEOUT", "10"))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables should
# be set before importing this module.
settings = Settings()
