# vegshop/core/errors.py
"""Exception handlers that render every failure as ``{"error": "<message>"}``."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    err = errors[0]
    ctx = err.get("ctx") or {}
    # ValueError raised inside our own validators carries the user-facing message
    if err.get("type") == "value_error" and "error" in ctx:
        return str(ctx["error"])
    loc = [str(part) for part in err.get("loc", ()) if part != "body"]
    if loc:
        return f"{'.'.join(loc)}: {err.get('msg')}"
    return str(err.get("msg"))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail
    if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
        logger.info(f"Invalid route: {request.method} {request.url.path}")
        message = "Endpoint not found"
    else:
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {message}")
    response = error_response(exc.status_code, str(message))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = first_validation_message(exc)
    logger.warning(f"Validation failed for {request.method} {request.url.path}: {message}")
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def database_exception_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    logger.exception(f"Database error on {request.method} {request.url.path}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, f"Database error: {exc}")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, f"Internal server error: {exc}")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(PyMongoError, database_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
