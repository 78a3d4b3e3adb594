"""Mapping of domain and checkout errors to HTTP responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from raffle.api.schemas import ErrorResponse
from raffle.checkout.errors import (
    CheckoutError,
    OrderSubmissionError,
    StaleCartError,
    SubmissionInProgress,
)
from raffle.storage.port import StorageError

logger = structlog.get_logger(__name__)

RETRY_MESSAGE = "There was an error submitting your order. Please try again."


def _error_body(exc: Exception, message: str | None = None, errors=None) -> dict:
    return ErrorResponse(
        type=type(exc).__name__,
        message=message if message is not None else str(exc),
        errors=errors,
    ).model_dump(exclude_none=True)


def _to_http_error(exc: Exception) -> tuple[int, dict]:
    if isinstance(exc, ValidationError):
        return 422, _error_body(exc, "Please correct the highlighted fields", errors=exc.messages)
    if isinstance(exc, ObjectNotFoundError):
        return 404, _error_body(exc, "Not found")
    if isinstance(exc, StaleCartError):
        body = _error_body(exc)
        body["lines"] = exc.lines
        return 409, body
    if isinstance(exc, SubmissionInProgress):
        return 409, _error_body(exc)
    if isinstance(exc, OrderSubmissionError):
        return 503, _error_body(exc, RETRY_MESSAGE)
    if isinstance(exc, StorageError):
        return 503, _error_body(exc, "The file could not be stored. Please try again.")
    # Any other CheckoutError
    return 409, _error_body(exc)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    @app.exception_handler(ObjectNotFoundError)
    @app.exception_handler(CheckoutError)
    @app.exception_handler(StorageError)
    async def handle_domain_error(request: Request, exc: Exception) -> JSONResponse:
        status, body = _to_http_error(exc)
        logger.info("request_rejected", path=request.url.path, status=status, error=type(exc).__name__)
        return JSONResponse(status_code=status, content=body)
