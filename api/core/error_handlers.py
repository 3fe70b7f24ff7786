"""
Global exception handlers.

Every failure ends in a JSON `{message}` body:
- BlogError -> its own status; server-side errors get a generic message
- RequestValidationError -> 400, naming the first missing body field
- unmatched route or method -> 404 "Not Found"
- anything else -> 500, details logged only
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .errors import INTERNAL_ERROR_MESSAGE, BlogError
from .validation import missing_field_message

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BlogError, blog_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)


async def blog_error_handler(request: Request, exc: BlogError) -> JSONResponse:
    if exc.is_client_error:
        logger.warning("request_rejected path=%s reason=%s", request.url.path, exc.message)
    else:
        logger.error(
            "request_failed path=%s error=%s",
            request.url.path,
            exc.message,
            exc_info=exc,
        )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


def validation_message(errors: list[dict]) -> str:
    for error in errors:
        if error.get("type") != "missing":
            continue
        loc = [str(part) for part in error.get("loc", ())]
        if len(loc) > 1:
            return missing_field_message(loc[-1])
        return "Missing request body"
    return "Invalid request data"


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = validation_message(list(exc.errors()))
    logger.warning("request_rejected path=%s reason=%s", request.url.path, message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": message},
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"message": "Not Found"},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_exception path=%s", request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": INTERNAL_ERROR_MESSAGE},
    )
