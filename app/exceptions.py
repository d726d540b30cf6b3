# =============================================================================
# app/exceptions.py - Exception Handlers
# =============================================================================
# Converts partials errors into structured JSON responses.
# Following the principle: "Errors should tell HOW to fix, not just WHAT failed."
# =============================================================================

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from partials.exceptions import PartialsError

logger = logging.getLogger(__name__)


async def partials_exception_handler(
    request: Request,
    exc: PartialsError
) -> JSONResponse:
    """
    Convert PartialsError to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    if exc.status_code >= 500:
        logger.error(f"Partials error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions (including failing Lazy producers)."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )
