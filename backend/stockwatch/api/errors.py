"""Render domain and request errors as ``{"error": ...}`` JSON bodies."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..errors import StockWatchError

logger = logging.getLogger(__name__)


async def _stockwatch_error(request: Request, exc: StockWatchError) -> JSONResponse:
    logger.debug("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StockWatchError, _stockwatch_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
