"""
Main entrypoint for the CPaaS Admin API.

This module assembles the FastAPI application: it sets up logging,
registers the JSON error handlers, seeds the in-memory collections and
includes the versioned routers.  ``create_app`` builds a fresh
application (tests call it with their own ``Settings``); a default
instance is created at import time as ``app``, so the API can be
served with::

    uvicorn cpaas_admin_api.app.main:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI

from .api.v1.endpoints import health
from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .seed import build_repositories


logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use; defaults to the module-level settings
        read from the environment.

    Returns
    -------
    FastAPI
        A configured application with freshly seeded collections.
    """
    settings = settings or default_settings
    # Initialise logging before anything else so that seeding can log.
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    register_exception_handlers(app)

    app.state.settings = settings
    app.state.repositories = build_repositories(settings)
    app.state.revoked_tokens = set()
    logger.info(
        "Seeded mock data (seed %d): %d logs, %d message logs, %d transactions per user",
        settings.mock_seed,
        settings.mock_log_count,
        settings.mock_message_log_count,
        settings.mock_transactions_per_user,
    )

    # The dashboard calls the routes without a version segment.
    app.include_router(v1_router, prefix="/api")
    app.include_router(health.router, tags=["health"])
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
