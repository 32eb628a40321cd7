"""Helpers for user domain objects."""

from __future__ import annotations

import uuid
from typing import Any, Dict

from ..models import UserEntity
from ..schemas import UserDto, UserPatchDto, UserPostDto, UserPutDto
from .validation import validate_user


def full_name(user: UserEntity) -> str:
    """Render ``"{last} {first}"``; a missing part renders as empty text."""

    return f"{user.last_name or ''} {user.first_name or ''}"


def user_to_dto(user: UserEntity) -> UserDto:
    return UserDto(
        id=user.id,
        login=user.login,
        full_name=full_name(user),
        games_played=user.games_played,
        current_game_id=user.current_game_id,
    )


def entity_from_post(body: UserPostDto) -> UserEntity:
    return UserEntity(
        login=body.login,
        first_name=body.first_name,
        last_name=body.last_name,
    )


def entity_from_put(user_id: uuid.UUID, body: UserPutDto) -> UserEntity:
    """Build a full replacement; fields the body lacks take their defaults."""

    return UserEntity(
        id=user_id,
        login=body.login,
        first_name=body.first_name,
        last_name=body.last_name,
    )


def patch_changes(patch: UserPatchDto) -> Dict[str, Any]:
    """Fields present in the merge-patch body, keyed by entity attribute."""

    return patch.model_dump(exclude_unset=True)


def check_user(user: UserEntity) -> None:
    """Run the full rule set against a merged record."""

    validate_user(user.login, user.first_name, user.last_name)


__all__ = [
    "check_user",
    "entity_from_post",
    "entity_from_put",
    "full_name",
    "patch_changes",
    "user_to_dto",
]
