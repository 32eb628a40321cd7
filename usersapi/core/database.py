"""In-memory database engine helpers."""

from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine


def create_memory_engine() -> Engine:
    """Return an engine bound to a private in-memory SQLite database.

    The database lives as long as the engine's single pooled connection, so
    every caller that needs a separate dataset should create its own engine.
    """

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    return engine


__all__ = ["create_memory_engine"]
