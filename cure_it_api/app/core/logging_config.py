"""
Logging setup for the API process.

``setup_logging`` attaches this project's console handler, and a file
handler when ``LOG_FILE`` is set, to the root logger.  A relative
``LOG_FILE`` is anchored at the project root like ``DATABASE_URL``.
uvicorn's own loggers are stripped of their handlers and made to
propagate, so server and access lines share the application format.

Handlers are recognised by name, which makes repeated ``create_app``
calls (tests, reloads) a no-op after the first one.
"""

import logging
from pathlib import Path
from typing import List, Optional

from .config import Settings, resolve_project_path


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CONSOLE_HANDLER = "cure_it_api.console"
FILE_HANDLER = "cure_it_api.file"

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def log_file_path(settings: Settings) -> Optional[Path]:
    """Where ``settings.log_file`` points, or ``None`` if file logging is off."""
    if not settings.log_file:
        return None
    return resolve_project_path(settings.log_file)


def _build_handlers(settings: Settings) -> List[logging.Handler]:
    console = logging.StreamHandler()
    console.set_name(CONSOLE_HANDLER)
    handlers: List[logging.Handler] = [console]

    path = log_file_path(settings)
    if path is not None:
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.set_name(FILE_HANDLER)
        handlers.append(file_handler)
    return handlers


def setup_logging(settings: Settings) -> None:
    """Configure the root logger and route uvicorn's loggers through it.

    Parameters
    ----------
    settings : Settings
        ``log_level`` (case insensitive, unknown names fall back to
        ``INFO``) and ``log_file`` are read from it.
    """
    root = logging.getLogger()
    if any(h.get_name() == CONSOLE_HANDLER for h in root.handlers):
        return

    root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _build_handlers(settings):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True
