"""Service layer helpers."""

from .negotiation import choose_media_type, render, render_id
from .pagination import PageList, build_pagination_header, clamp_page_number, clamp_page_size
from .repository import InMemoryUserRepository, get_user_repository
from .users import check_user, entity_from_post, entity_from_put, patch_changes, user_to_dto
from .validation import collect_user_errors, validate_user

__all__ = [
    "InMemoryUserRepository",
    "PageList",
    "build_pagination_header",
    "check_user",
    "choose_media_type",
    "clamp_page_number",
    "clamp_page_size",
    "collect_user_errors",
    "entity_from_post",
    "entity_from_put",
    "get_user_repository",
    "patch_changes",
    "render",
    "render_id",
    "user_to_dto",
    "validate_user",
]
