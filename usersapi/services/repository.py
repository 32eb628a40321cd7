"""In-memory user store."""

from __future__ import annotations

import itertools
import logging
import threading
import uuid
from typing import Any, Callable, Dict, Optional, Tuple

from sqlalchemy.engine import Engine
from sqlmodel import Session, func, select

from ..core import UserNotFoundError, create_memory_engine
from ..models import MUTABLE_FIELDS, UserEntity
from .pagination import PageList

logger = logging.getLogger(__name__)


def _fields_of(user: UserEntity) -> Dict[str, Any]:
    return {name: getattr(user, name) for name in MUTABLE_FIELDS}


class InMemoryUserRepository:
    """User records kept in a private in-memory SQLite database.

    Every operation holds one re-entrant lock for its whole duration, so
    concurrent requests never interleave on the shared connection. Records
    are returned detached; changing them has no effect until passed back to
    ``update`` or ``update_or_insert``.
    """

    def __init__(self, engine: Optional[Engine] = None):
        self._engine = engine if engine is not None else create_memory_engine()
        self._lock = threading.RLock()
        self._positions = itertools.count(1)

    def _session(self) -> Session:
        return Session(self._engine, expire_on_commit=False)

    def find_by_id(self, user_id: uuid.UUID) -> Optional[UserEntity]:
        with self._lock, self._session() as session:
            return session.get(UserEntity, user_id)

    def insert(self, user: UserEntity) -> UserEntity:
        """Store a copy of ``user`` under a freshly generated id."""

        with self._lock, self._session() as session:
            entity = UserEntity(
                id=uuid.uuid4(), position=next(self._positions), **_fields_of(user)
            )
            session.add(entity)
            session.commit()
            logger.debug("Inserted user %s", entity.id)
            return entity

    def update_or_insert(self, user: UserEntity) -> Tuple[UserEntity, bool]:
        """Replace the record with ``user.id`` or create it.

        Returns the stored record and whether it was inserted.
        """

        with self._lock, self._session() as session:
            existing = session.get(UserEntity, user.id)
            if existing is None:
                entity = UserEntity(
                    id=user.id, position=next(self._positions), **_fields_of(user)
                )
                session.add(entity)
                session.commit()
                logger.debug("Inserted user %s by upsert", entity.id)
                return entity, True

            for name, value in _fields_of(user).items():
                setattr(existing, name, value)
            session.add(existing)
            session.commit()
            logger.debug("Replaced user %s by upsert", existing.id)
            return existing, False

    def update(self, user: UserEntity) -> UserEntity:
        with self._lock, self._session() as session:
            existing = session.get(UserEntity, user.id)
            if existing is None:
                raise UserNotFoundError(user.id)
            for name, value in _fields_of(user).items():
                setattr(existing, name, value)
            session.add(existing)
            session.commit()
            logger.debug("Updated user %s", existing.id)
            return existing

    def patch(
        self,
        user_id: uuid.UUID,
        changes: Dict[str, Any],
        check: Optional[Callable[[UserEntity], None]] = None,
    ) -> UserEntity:
        """Write only ``changes`` onto the stored record in one locked step.

        ``check`` sees the merged record before commit; anything it raises
        leaves the store unchanged.
        """

        unknown = set(changes) - set(MUTABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot patch fields: {', '.join(sorted(unknown))}")

        with self._lock, self._session() as session:
            existing = session.get(UserEntity, user_id)
            if existing is None:
                raise UserNotFoundError(user_id)
            for name, value in changes.items():
                setattr(existing, name, value)
            if check is not None:
                try:
                    check(existing)
                except Exception:
                    session.rollback()
                    raise
            session.add(existing)
            session.commit()
            logger.debug("Patched user %s (%s)", user_id, ", ".join(sorted(changes)))
            return existing

    def delete(self, user_id: uuid.UUID) -> None:
        with self._lock, self._session() as session:
            existing = session.get(UserEntity, user_id)
            if existing is None:
                return
            session.delete(existing)
            session.commit()
            logger.debug("Deleted user %s", user_id)

    def get_page(self, page_number: int, page_size: int) -> PageList[UserEntity]:
        """Return users in insertion order, ``page_size`` per page, 1-based."""

        if page_number < 1:
            raise ValueError("page_number must be at least 1")
        if page_size < 1:
            raise ValueError("page_size must be at least 1")

        offset = (page_number - 1) * page_size
        with self._lock, self._session() as session:
            total_count = session.exec(select(func.count(UserEntity.id))).one()
            if offset >= total_count:
                # past the end; also keeps huge offsets away from SQLite
                return PageList([], page_number, page_size, total_count)
            items = session.exec(
                select(UserEntity)
                .order_by(UserEntity.position)
                .offset(offset)
                .limit(page_size)
            ).all()
        return PageList(items, page_number, page_size, total_count)

    def count(self) -> int:
        with self._lock, self._session() as session:
            return session.exec(select(func.count(UserEntity.id))).one()


_default_repository: Optional[InMemoryUserRepository] = None
_default_lock = threading.Lock()


def get_user_repository() -> InMemoryUserRepository:
    """FastAPI dependency returning the process-wide user store."""

    global _default_repository
    with _default_lock:
        if _default_repository is None:
            _default_repository = InMemoryUserRepository()
        return _default_repository


__all__ = ["InMemoryUserRepository", "get_user_repository"]
