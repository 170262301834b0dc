"""Error Handlers — global exception handlers for the Newsboard API.

Invariants:
    - NewsboardError → structured JSON with error code, message, severity
    - Exception (catch-all) → never leaks internal details
    - The catch-all 500 sets the CORS headers itself: Starlette answers it from
      ServerErrorMiddleware, outside the CORS middleware

Design Decisions:
    - Only transport-level failures reach these handlers (malformed JSON,
      unexpected faults); handler-level failures are already envelopes
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from newsboard.api.cors import cors_headers
from newsboard.core.errors import ErrorSeverity, NewsboardError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_newsboard_error_handler(app)
    _register_generic_error_handler(app)


def _register_newsboard_error_handler(app: FastAPI) -> None:
    """Register Newsboard domain/infrastructure error handler."""

    @app.exception_handler(NewsboardError)
    async def newsboard_error_handler(request: Request, exc: NewsboardError):
        """Handle all Newsboard domain/infrastructure errors."""
        logger.warning(
            f"NewsboardError: {exc.message}",
            extra={
                "error_code": exc.code, "path": request.url.path,
                "method": request.method, "status_code": exc.http_status,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
            headers=cors_headers(request.app.state.settings),
        )
