"""Exception handlers mapping errors onto ``{"error": ..., "details": ...}`` bodies."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from aoz_core.exceptions import AozException

logger = logging.getLogger(__name__)

_VALUE_ERROR_PREFIX = "Value error, "


def format_validation_errors(errors: list[dict[str, Any]]) -> str:
    """
    Render pydantic errors as one readable sentence.

    ``[{"loc": ("body", "agentName"), "msg": "..."}]`` becomes
    ``'... at "agentName"'``; several errors are joined with "; ".
    """
    parts = []
    for error in errors:
        message = str(error.get("msg", "Invalid value"))
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX):]
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        if loc:
            message = f'{message} at "{".".join(loc)}"'
        parts.append(message)
    return "; ".join(parts)


def register_exception_handlers(app: FastAPI, expose_errors: bool = True) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: Application to register on
        expose_errors: Include the exception text in unexpected 500 responses
    """

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = format_validation_errors(exc.errors())
        logger.warning(f"Validation error on {request.method} {request.url.path}: {details}")
        return JSONResponse(
            status_code=400,
            content={"error": "Validation failed", "details": details},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"HTTP error {exc.status_code}: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail) if exc.detail else "An error occurred"},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(AozException)
    async def aoz_exception_handler(
        request: Request, exc: AozException
    ) -> JSONResponse:
        if exc.http_status >= 500:
            logger.error(f"Server error: {exc.error_code} - {exc.message} ({exc.details})")
        else:
            logger.info(f"Client error: {exc.error_code} - {exc.message}")
        return JSONResponse(status_code=exc.http_status, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}: "
            f"{type(exc).__name__}: {exc}",
            exc_info=True,
        )
        content: dict[str, Any] = {"error": "Internal server error"}
        if expose_errors:
            content["details"] = f"{type(exc).__name__}: {exc}"
        return JSONResponse(status_code=500, content=content)
