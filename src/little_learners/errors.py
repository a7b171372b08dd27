"""Domain error kinds and their HTTP translation."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = structlog.get_logger()


class LearningAppError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500
    kind = "internal_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(LearningAppError):
    status_code = 404
    kind = "not_found"


class ValidationError(LearningAppError):
    status_code = 422
    kind = "validation_failed"


class StorageUnavailableError(LearningAppError):
    status_code = 503
    kind = "storage_unavailable"


def _error_response(exc: LearningAppError) -> JSONResponse:
    return JSONResponse(
        {"error": exc.kind, "message": exc.message},
        status_code=exc.status_code,
    )


def install_error_handlers(app: FastAPI) -> None:
    """Register handlers that map domain and storage errors to JSON responses."""

    @app.exception_handler(LearningAppError)
    async def handle_app_error(request: Request, exc: LearningAppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("request_failed", path=request.url.path, kind=exc.kind, error=exc.message)
        return _error_response(exc)

    @app.exception_handler(SQLAlchemyError)
    async def handle_storage_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error("storage_error", path=request.url.path, error=str(exc))
        return _error_response(StorageUnavailableError("Storage is unavailable"))
