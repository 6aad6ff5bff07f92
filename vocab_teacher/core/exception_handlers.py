from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from vocab_teacher.core.errors import AppError, InternalError

logger = logging.getLogger(__name__)

_HTTP_MESSAGES: dict[int, str] = {
    404: "Not found",
    405: "Method not allowed",
}


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "-") or "-"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        rid = _request_id(request)
        if exc.http_status >= 500:
            logger.warning("app_error", extra={"error": exc.message, "status": exc.http_status, "request_id": rid}, exc_info=exc)
        else:
            logger.info("app_error", extra={"error": exc.message, "status": exc.http_status, "request_id": rid})

        return JSONResponse(status_code=exc.http_status, content=exc.payload())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        rid = _request_id(request)
        message = _HTTP_MESSAGES.get(exc.status_code, "Invalid request")

        logger.info("http_exception", extra={"status": exc.status_code, "request_id": rid})
        return JSONResponse(status_code=exc.status_code, content={"error": message}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: ARG001
        rid = _request_id(request)
        logger.info("request_validation_error", extra={"request_id": rid})
        return JSONResponse(status_code=422, content={"error": "Invalid request"})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # noqa: ARG001
        rid = _request_id(request)
        logger.exception("unhandled_exception", extra={"request_id": rid})
        safe = InternalError()
        return JSONResponse(status_code=safe.http_status, content=safe.payload())
