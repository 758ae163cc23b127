"""Failure taxonomy of the persistence core and its HTTP translation.

Every failure is raised unchanged to the caller. Only the web edge decides
on status codes and user-facing messages.
"""

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.funding.core.logging import get_logger

logger = get_logger(__name__)


class FundingStoreError(Exception):
    """Base class for all failures raised by the store."""


class ConnectionFailure(FundingStoreError):
    """The store could not be reached at startup. Never retried."""


class EncodingFailure(FundingStoreError):
    """A stored scalar could not be decoded (corruption or schema drift)."""


class MalformedAddress(EncodingFailure):
    """Text is not a canonical account address."""


class MalformedEncoding(EncodingFailure):
    """Text is not valid padded base64."""


class ValidationError(FundingStoreError):
    """A caller-supplied record or identifier violates a shape invariant."""


class NotFound(FundingStoreError):
    """Zero rows where exactly one was expected."""


class IntegrityError(FundingStoreError):
    """A store constraint was violated."""


_STATUS_CODES: list[tuple[type[FundingStoreError], int]] = [
    (ValidationError, status.HTTP_422_UNPROCESSABLE_CONTENT),
    (NotFound, status.HTTP_404_NOT_FOUND),
    (IntegrityError, status.HTTP_409_CONFLICT),
    (EncodingFailure, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (ConnectionFailure, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_code_for(exc: FundingStoreError) -> int:
    for exc_type, code in _STATUS_CODES:
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(FundingStoreError)
    async def store_exception_handler(request: Request, exc: FundingStoreError) -> JSONResponse:
        request_id = correlation_id.get()
        code = status_code_for(exc)
        if code >= 500:
            logger.error(
                "Store failure",
                error=type(exc).__name__,
                detail=str(exc),
                request_id=request_id,
                path=request.url.path,
            )
        return JSONResponse(
            status_code=code,
            content={
                "detail": str(exc),
                "request_id": request_id,
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )
