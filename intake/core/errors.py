from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from intake.domain.errors import ValidationError

logger = logging.getLogger(__name__)


class APIError(Exception):
    def __init__(self, *, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(message)


def success_response(data: object, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=data)


def error_response(*, status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def add_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(APIError)
    async def handle_api_error(_: Request, exc: APIError) -> JSONResponse:
        return error_response(status_code=exc.status_code, message=exc.message)

    @app.exception_handler(ValidationError)
    async def handle_domain_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        logger.debug("Rejected input path=%s reason=%s", request.url.path, exc)
        return error_response(status_code=status.HTTP_400_BAD_REQUEST, message=str(exc))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.debug("Request validation failed path=%s errors=%s", request.url.path, exc.errors())
        return error_response(status_code=status.HTTP_400_BAD_REQUEST, message="Request validation failed")

    @app.exception_handler(HTTPException)
    async def handle_http_error(_: Request, exc: HTTPException) -> JSONResponse:
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return error_response(status_code=exc.status_code, message=message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error path=%s", request.url.path, exc_info=exc)
        return error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="Internal server error",
        )
