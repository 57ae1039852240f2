"""Entry point that serves the Cure It API with uvicorn.

Host, port and log level come from the same environment variables as
the rest of the configuration (``HOST``, ``PORT``, ``LOG_LEVEL``).

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from cure_it_api.app.core.config import settings
from cure_it_api.app.main import app


async def main() -> None:
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
        # Keep the handlers installed by create_app.
        log_config=None,
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Server stopped")
