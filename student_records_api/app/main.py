"""
Main entrypoint for the Student Records API.

This module assembles the FastAPI application: logging, CORS, the
versioned routers and the exception handlers that turn service errors
into HTTP responses.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``, so it can be served with::

    uvicorn student_records_api.app.main:app --reload

Every error response uses the same body::

    {"timestamp": ..., "status": 404, "error": "Not Found",
     "message": "Student not found with ID: 7", "path": "/api/v1/students/7"}
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.exceptions import StudentRecordsError
from .core.logging_config import setup_logging
from .schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


def _error_response(request: Request, status_code: int, error: str, message: str) -> JSONResponse:
    body = ErrorResponse(
        timestamp=datetime.now(timezone.utc),
        status=status_code,
        error=error,
        message=message,
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Map the error taxonomy onto HTTP status codes."""

    @app.exception_handler(StudentRecordsError)
    async def handle_service_error(request: Request, exc: StudentRecordsError) -> JSONResponse:
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
        return _error_response(request, exc.status_code, exc.error, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _format_validation_errors(exc)
        logger.info("%s %s -> 400: %s", request.method, request.url.path, message)
        return _error_response(request, status.HTTP_400_BAD_REQUEST, "Bad Request", message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal Server Error",
            "An unexpected error occurred",
        )


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that imports below can
    # safely log messages.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    # Browsers may not send credentials to a wildcard origin.
    allow_any = "*" in settings.cors_allowed_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_any else settings.cors_allowed_origins,
        allow_credentials=not allow_any,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(v1_router, prefix="/api/v1")
    register_exception_handlers(app)

    @app.get("/health", tags=["health"])
    def health() -> dict:
        return {"status": "ok"}

    @app.on_event("startup")
    def startup_event() -> None:
        # Creates the database file if needed and applies migrations.
        init_db()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
