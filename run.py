"""Entry point for the CPaaS admin API.

Starts the FastAPI application with Uvicorn.  Host and port come from
the ``API_HOST`` and ``API_PORT`` environment variables (defaults
``0.0.0.0`` and ``8000``); see ``cpaas_admin_api.app.core.config`` for
the remaining settings.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from cpaas_admin_api.app.core.config import settings
from cpaas_admin_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info("Starting API on %s:%s", settings.api_host, settings.api_port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
