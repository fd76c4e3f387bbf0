from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.application.dtos.verification_dto import ErrorResponse
from src.domain.errors import MalformedRequest, MethodNotAllowed, VerificationError
from src.infrastructure.api.middlewares import cors_headers

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
        headers={**cors_headers(), **(headers or {})},
    )


def add_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(VerificationError)
    async def verification_error_handler(request: Request, exc: VerificationError):
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def malformed_request_handler(request: Request, exc: RequestValidationError):
        # Unparseable JSON or wrongly typed fields
        logger.error("Unexpected error: malformed body on %s: %s", request.url.path, exc.errors())
        return error_response(MalformedRequest.status_code, MalformedRequest.default_message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == MethodNotAllowed.status_code:
            return error_response(exc.status_code, MethodNotAllowed.default_message, exc.headers)
        return error_response(exc.status_code, str(exc.detail), exc.headers)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unexpected error on %s", request.url.path)
        return error_response(MalformedRequest.status_code, MalformedRequest.default_message)
