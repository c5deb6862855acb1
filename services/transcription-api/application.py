"""FastAPI application factory: middleware, error envelope and routes."""

import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from transcription_common import PersistenceError, setup_logging

import dependencies
from config import AppConfig
from exceptions import (
    InvalidUploadError,
    ProviderError,
    TranscriptionUnavailableError,
    ValidationError,
)
from response_models import ErrorResponse
from routes import health_router, transcribe_router

logger = setup_logging()


@asynccontextmanager
async def _lifespan(app: FastAPI):
    dependencies.init_services()
    yield
    dependencies.close_services()


def _error_response(
    request: Request,
    status_code: int,
    error_kind: str,
    message: str,
    exc: Exception,
) -> JSONResponse:
    config: AppConfig = request.app.state.config
    details = None
    if not config.is_production:
        details = "".join(traceback.format_exception(exc))
    body = ErrorResponse(error=message, error_kind=error_kind, details=details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


async def _handle_validation_error(request: Request, exc: ValidationError):
    logger.info("Request rejected", extra={"reason": str(exc)})
    return _error_response(request, exc.status_code, exc.kind, str(exc), exc)


async def _handle_request_validation_error(request: Request, exc: RequestValidationError):
    fields = [str(err["loc"][-1]) for err in exc.errors() if err.get("loc")]
    if "audio" in fields:
        error = InvalidUploadError("Invalid audio file provided")
    else:
        error = ValidationError(f"Invalid request field: {', '.join(fields)}")
    logger.info("Request rejected", extra={"reason": str(error), "fields": fields})
    return _error_response(request, error.status_code, error.kind, str(error), exc)


async def _handle_provider_error(request: Request, exc: ProviderError):
    logger.error(
        "Transcription failed",
        extra={"provider": exc.provider, "kind": exc.kind.value, "error": exc.message},
    )
    if isinstance(exc, TranscriptionUnavailableError):
        message = "No transcription service available"
    else:
        message = "Transcription failed"
    return _error_response(request, exc.status_code, exc.kind.value, message, exc)


async def _handle_persistence_error(request: Request, exc: PersistenceError):
    logger.error("Persistence failed", extra={"kind": exc.kind, "error": str(exc)})
    return _error_response(
        request, 500, exc.kind, "Failed to store transcription", exc
    )


async def _handle_unexpected_error(request: Request, exc: Exception):
    logger.exception("Unhandled error", exc_info=exc)
    return _error_response(request, 500, "InternalError", "Internal server error", exc)


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Builds the FastAPI application for the given configuration."""
    config = config or dependencies.get_config()
    setup_logging(config.log_level)

    app = FastAPI(title="Audio Transcription Service", lifespan=_lifespan)
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValidationError, _handle_validation_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation_error)
    app.add_exception_handler(ProviderError, _handle_provider_error)
    app.add_exception_handler(PersistenceError, _handle_persistence_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)

    app.include_router(transcribe_router)
    app.include_router(health_router)
    return app
