"""Error Handlers — global exception handlers for the Users API.

Invariants:
    - UsersApiError → {"error": message, "details"?: str} with the error's status
    - Exception (catch-all) → 500, never leaks internal details
    - Every failure logged exactly once, here; routes only raise

Design Decisions:
    - Two-layer handler: domain (UsersApiError), catch-all (Exception)
    - Client faults logged at WARNING, server faults at ERROR with the driver traceback
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from users_api.core.errors import UsersApiError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_users_api_error_handler(app)
    _register_generic_error_handler(app)


def _register_users_api_error_handler(app: FastAPI) -> None:

    @app.exception_handler(UsersApiError)
    async def users_api_error_handler(request: Request, exc: UsersApiError):
        """Handle all Users API domain/infrastructure errors."""
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "method": request.method,
            "operation": getattr(exc, "operation", None),
        }
        if exc.http_status >= 500:
            logger.error(
                f"Error in {request.method} {request.url.path}: {exc.details}",
                extra=extra, exc_info=exc,
            )
        else:
            logger.warning(f"{exc.code}: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )
