"""Application settings and environment helpers."""

from __future__ import annotations

import os
from typing import Iterable, List

from dotenv import load_dotenv

load_dotenv(override=False)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    """Return an integer environment variable or raise an error."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _split_csv(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


# Server -----------------------------------------------------------------------
HOST = os.getenv("USERS_API_HOST", "127.0.0.1")
PORT = _env_int("USERS_API_PORT", 5000)
RELOAD = _env_bool("USERS_API_RELOAD", False)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()

# ALLOWED_CORS_ORIGINS can contain a comma-separated list for multi-domain deploys.
ALLOWED_CORS_ORIGINS = _unique(_split_csv(os.getenv("ALLOWED_CORS_ORIGINS", "*")))


# Pagination -------------------------------------------------------------------
MAX_PAGE_SIZE = _env_int("MAX_PAGE_SIZE", 20)
DEFAULT_PAGE_SIZE = _env_int("DEFAULT_PAGE_SIZE", 10)

if MAX_PAGE_SIZE < 1:
    raise RuntimeError("MAX_PAGE_SIZE must be at least 1")
if not 1 <= DEFAULT_PAGE_SIZE <= MAX_PAGE_SIZE:
    raise RuntimeError("DEFAULT_PAGE_SIZE must be between 1 and MAX_PAGE_SIZE")


__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "DEFAULT_PAGE_SIZE",
    "HOST",
    "LOG_LEVEL",
    "MAX_PAGE_SIZE",
    "PORT",
    "RELOAD",
]
