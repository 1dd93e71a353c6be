"""
Error types and JSON error envelopes

Every error leaves the API as {"success": false, "error": "<message>"}.
"""
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ArtVerseError(Exception):
    """Base exception for business-rule failures raised below the API layer."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class BadRequestError(ArtVerseError):
    status_code = status.HTTP_400_BAD_REQUEST


class ForbiddenError(ArtVerseError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ArtVerseError):
    status_code = status.HTTP_404_NOT_FOUND


class StorageNotConfiguredError(ArtVerseError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self):
        super().__init__("Image storage is not configured")


def error_response(status_code: int, message: str, details: Optional[Any] = None,
                   headers: Optional[dict] = None) -> JSONResponse:
    content = {"success": False, "error": message}
    if details is not None:
        content["details"] = jsonable_encoder(details)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    details = None if isinstance(exc.detail, str) else exc.detail
    return error_response(exc.status_code, message, details, headers=getattr(exc, "headers", None))


async def artverse_exception_handler(request: Request, exc: ArtVerseError) -> JSONResponse:
    return error_response(exc.status_code, exc.message, exc.details)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    # Drop the raw input and exception objects, they are not always serializable
    details = [
        {"loc": list(err.get("loc", [])), "msg": err.get("msg"), "type": err.get("type")}
        for err in errors
    ]
    return error_response(status.HTTP_400_BAD_REQUEST, "Validation failed", details)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(ArtVerseError, artverse_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
