# =============================================================================
# app/main.py - FastAPI Application Factory
# =============================================================================
# Builds a FastAPI application wired for partial data responses:
# logging, exception handlers and a root info endpoint. Host applications
# add their own routers and return DataResponse / to_response() from them.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging

from fastapi import FastAPI

from app.config import settings
from app.exceptions import general_exception_handler, partials_exception_handler
from partials import __version__
from partials.exceptions import PartialsError

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def create_app() -> FastAPI:
    """
    Create the FastAPI application.

    Errors raised while binding or transforming partials become structured
    JSON responses (see app/exceptions.py).
    """
    configure_logging()

    app = FastAPI(
        title="Partial Data API",
        description="Partial, client-facing representations of Data objects. "
                    "Use the include, exclude, only and except query parameters "
                    "to shape responses.",
        version=__version__,
    )

    app.add_exception_handler(PartialsError, partials_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint - returns API info."""
        return {
            "name": "Partial Data API",
            "version": __version__,
            "docs": "/docs",
        }

    logger.info(f"Partial Data API created in {settings.ENVIRONMENT} mode")
    return app


app = create_app()
