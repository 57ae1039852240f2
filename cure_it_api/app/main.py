"""
Main entrypoint for the Cure It API.

This module assembles the FastAPI application, sets up logging,
wires the storage backend and services, registers error handlers and
includes versioned routers.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``, e.g.::

    uvicorn cure_it_api.app.main:app --reload

One storage backend is created per application and shared by every
service through ``app.state``.  It is initialised on startup, together
with the background task that sweeps expired sessions, and both are
torn down on shutdown.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.errors import AuthenticationError, CureItError
from .core.logging_config import setup_logging
from .services.analytics_service import AnalyticsService
from .services.auth_service import AuthService
from .services.contact_service import ContactService
from .services.location_service import LocationService
from .services.session_service import SessionService
from .services.user_service import UserService
from .storage import create_storage


logger = logging.getLogger(__name__)


def _error_body(message: str, details=None) -> dict:
    body = {"error": message}
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure as ``{"error": ..., "details": [...]}``."""

    @app.exception_handler(CureItError)
    async def handle_app_error(request: Request, exc: CureItError) -> JSONResponse:
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, exc.details),
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = [
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body("Invalid input", details),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body("Internal server error"),
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the module-level settings
        read from the environment.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Initialise logging before anything else so that the setup below can
    # safely log messages.
    setup_logging(settings)

    storage = create_storage(settings)
    sessions = SessionService(storage, ttl=timedelta(days=settings.session_ttl_days))

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        storage.initialize()
        logger.info("Storage backend %s initialised", type(storage).__name__)
        interval = settings.session_sweep_interval_seconds
        if interval > 0:
            app.state.sweeper = asyncio.create_task(sessions.run_sweeper(interval))
        try:
            yield
        finally:
            sweeper = app.state.sweeper
            if sweeper is not None:
                sweeper.cancel()
                await asyncio.gather(sweeper, return_exceptions=True)
                app.state.sweeper = None
            storage.close()

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.storage = storage
    app.state.session_service = sessions
    app.state.auth_service = AuthService(storage, sessions, admin_email=settings.admin_email)
    app.state.user_service = UserService(storage)
    app.state.contact_service = ContactService(storage)
    app.state.analytics_service = AnalyticsService(storage)
    app.state.location_service = LocationService(settings.geocoding_url, timeout=settings.geocoding_timeout)
    app.state.sweeper = None

    register_exception_handlers(app)
    app.include_router(v1_router, prefix=settings.api_prefix)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
