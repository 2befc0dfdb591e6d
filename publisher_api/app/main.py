"""
Main entrypoint for the Publisher API.

``create_app`` builds and configures the FastAPI application: logging,
the application context (settings plus database handle), the error
handlers and the ``/api`` router.  A default instance is created at
import time as ``app`` so it can be served directly, e.g.::

    uvicorn publisher_api.app.main:app --reload
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from .api.router import router as api_router
from .core.config import Settings
from .core.context import AppContext
from .core.db import Database
from .core.errors import register_error_handlers
from .core.logging_config import setup_logging


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration for this instance.  Read from the environment
        when omitted.

    Returns
    -------
    FastAPI
        A configured application.  Its database migrations run on
        startup.
    """
    settings = settings or Settings()
    setup_logging(settings.log_level, settings.log_file or None)

    context = AppContext(settings=settings, db=Database(settings.database_url))

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Creates the database file on first start.
        context.db.init()
        yield

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.context = context

    register_error_handlers(app)
    app.include_router(api_router, prefix="/api")

    return app


app = create_app()
