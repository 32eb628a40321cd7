"""FastAPI application factory and configuration."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import register_exception_handlers, register_routes
from .core import ALLOWED_CORS_ORIGINS, HOST, LOG_LEVEL, MAX_PAGE_SIZE, PORT, RELOAD, configure_logging
from .services import get_user_repository

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    repository = get_user_repository()
    logger.info(
        "Users API ready: %d stored users, max page size %d",
        repository.count(),
        MAX_PAGE_SIZE,
    )
    yield


def create_app() -> FastAPI:
    configure_logging(LOG_LEVEL)

    app = FastAPI(title="Users API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["Location", "X-Pagination", "Allow"],
    )

    register_exception_handlers(app)
    register_routes(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("usersapi.app:app", host=HOST, port=PORT, reload=RELOAD)
