"""Global error handlers mapping domain failures onto JSON responses.

Every error body has the shape ``{"success": false, "message": ...}``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from middle_ground.services.errors import (
    AuthenticationError,
    ConflictError,
    FeedError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Server error"

_STATUS_BY_ERROR: tuple[tuple[type[FeedError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
)


def error_body(message: str) -> dict[str, object]:
    return {"success": False, "message": message}


def status_for(exc: FeedError) -> int:
    """Return the HTTP status for a domain error; unmapped errors are 500."""
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(FeedError)
    async def feed_error_handler(request: Request, exc: FeedError) -> JSONResponse:
        code = status_for(exc)
        if code >= 500:
            logger.error("Unmapped domain error on %s %s: %s", request.method, request.url.path, exc)
            return JSONResponse(status_code=code, content=error_body(SERVER_ERROR_MESSAGE))
        logger.warning("%s %s -> %d: %s", request.method, request.url.path, code, exc.message)
        return JSONResponse(status_code=code, content=error_body(exc.message))

    @app.exception_handler(StarletteHTTPException)
    async def http_exc_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code < 500:
            logger.warning(
                "%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.detail
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exc_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("%s %s -> 422: %s", request.method, request.url.path, exc.errors())
        content = error_body("Invalid request")
        content["errors"] = jsonable_errors(exc)
        return JSONResponse(status_code=422, content=content)

    @app.exception_handler(SQLAlchemyError)
    async def database_exc_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.exception("Database error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(SERVER_ERROR_MESSAGE),
        )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, object]]:
    """Strip non-serialisable context from pydantic error entries."""
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]
