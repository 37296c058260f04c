"""
Main entrypoint for the Person API.

This module assembles the FastAPI application: it sets up logging,
includes the versioned router, registers the error handlers and
attaches the ``PersonService`` used by the endpoints.  The ``create_app``
function builds the app, which is instantiated at import time as
``app`` so it can be served directly, e.g.::

    uvicorn person_api.app.main:app --reload
"""

from typing import Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.db import init_db
from .core.errors import register_error_handlers
from .core.logging_config import setup_logging
from .services.person_service import PersonService


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Settings to use instead of the ones read from the environment.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings

    # Initialise logging before anything else so that the startup hook
    # and the service can log.
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.person_service = PersonService(settings.database_url)

    # The person routes are served at the root (``/persons``).
    app.include_router(v1_router)
    register_error_handlers(app)

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if needed and installs the stored
        # procedures the service calls.
        init_db(settings.database_url)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
