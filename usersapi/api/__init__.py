"""API assembly helpers."""

from __future__ import annotations

import logging
from typing import Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core import ValidationFailedError
from .routers import ALL_ROUTERS

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {"body", "query", "path", "header"}


def register_routes(app: FastAPI) -> None:
    """Attach all application routers to the given app."""

    for router in ALL_ROUTERS:
        app.include_router(router)


async def _validation_failed(request: Request, exc: ValidationFailedError) -> JSONResponse:
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content=exc.errors)


async def _request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        return JSONResponse(status_code=400, content={"detail": "Malformed JSON body"})

    grouped: Dict[str, List[str]] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        field = loc[-1] if loc else "body"
        grouped.setdefault(field, []).append(error.get("msg", "Invalid value"))

    logger.info("Rejected %s %s: %s", request.method, request.url.path, grouped)
    return JSONResponse(status_code=422, content=grouped)


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain and request-parsing failures onto HTTP responses."""

    app.add_exception_handler(ValidationFailedError, _validation_failed)
    app.add_exception_handler(RequestValidationError, _request_validation)


__all__ = ["register_exception_handlers", "register_routes"]
