"""Request and response bodies of the users resource."""

from __future__ import annotations

import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for wire models: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserDto(CamelModel):
    """Public projection of a stored user."""

    id: uuid.UUID
    login: Optional[str] = None
    full_name: str
    games_played: int = 0
    current_game_id: Optional[uuid.UUID] = None


class UserPostDto(CamelModel):
    login: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class UserPutDto(CamelModel):
    login: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class UserPatchDto(CamelModel):
    """Merge-patch body: only the keys present in the request are applied."""

    login: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


__all__ = ["CamelModel", "UserDto", "UserPatchDto", "UserPostDto", "UserPutDto"]
