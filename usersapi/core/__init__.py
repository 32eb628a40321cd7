"""Core configuration and infrastructure helpers."""

from .config import (
    ALLOWED_CORS_ORIGINS,
    DEFAULT_PAGE_SIZE,
    HOST,
    LOG_LEVEL,
    MAX_PAGE_SIZE,
    PORT,
    RELOAD,
)
from .database import create_memory_engine
from .errors import UserNotFoundError, ValidationFailedError
from .logging import configure_logging

__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "DEFAULT_PAGE_SIZE",
    "HOST",
    "LOG_LEVEL",
    "MAX_PAGE_SIZE",
    "PORT",
    "RELOAD",
    "UserNotFoundError",
    "ValidationFailedError",
    "configure_logging",
    "create_memory_engine",
]
