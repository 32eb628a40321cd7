"""Database model for stored users."""

from __future__ import annotations

import uuid
from typing import Optional

from sqlmodel import Field as ORMField, SQLModel

# Fields replaced by a full update; ``id`` and ``position`` never change.
MUTABLE_FIELDS = ("login", "first_name", "last_name", "games_played", "current_game_id")


class UserEntity(SQLModel, table=True):
    """Player account as kept by the user store."""

    __tablename__ = "users"

    id: uuid.UUID = ORMField(default_factory=uuid.uuid4, primary_key=True, nullable=False)
    login: Optional[str] = ORMField(default=None, index=True)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    games_played: int = 0
    current_game_id: Optional[uuid.UUID] = None
    # insertion order, assigned by the store
    position: int = ORMField(default=0, index=True)


__all__ = ["MUTABLE_FIELDS", "UserEntity"]
