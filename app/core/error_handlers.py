import logging
from typing import Any, Optional
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.exceptions import BaseAppException, MethodNotAllowedError

logger = logging.getLogger(__name__)

def error_response(status_code: int, message: str, error: Any = None, headers: Optional[dict] = None) -> JSONResponse:
    """Build the {success, message, error} envelope used for every failure"""
    body = {"success": False, "message": message}
    if error is not None:
        body["error"] = jsonable_encoder(error)
    return JSONResponse(status_code=status_code, content=body, headers=headers)

def _validation_messages(exc: RequestValidationError) -> list:
    messages = []
    for err in exc.errors():
        # drop the leading "body"/"path"/"query" segment
        loc = ".".join(str(part) for part in err.get("loc", ())[1:])
        messages.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg"))
    return messages

async def app_exception_handler(request: Request, exc: BaseAppException):
    return error_response(exc.status_code, str(exc.detail), exc.error, getattr(exc, "headers", None))

async def request_validation_handler(request: Request, exc: RequestValidationError):
    return error_response(status.HTTP_400_BAD_REQUEST, "Validation failed", _validation_messages(exc))

async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return error_response(status.HTTP_409_CONFLICT, "Duplicate key error")

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    headers = getattr(exc, "headers", None)
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        exc = MethodNotAllowedError(request.method)
    return error_response(exc.status_code, str(exc.detail), headers=headers)

async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    error = None if settings.is_production else (str(exc) or exc.__class__.__name__)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", error)

def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseAppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
