"""User resource endpoints."""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, Response

from ...core import DEFAULT_PAGE_SIZE, UserNotFoundError
from ...schemas import UserPatchDto, UserPostDto, UserPutDto
from ...services import (
    InMemoryUserRepository,
    build_pagination_header,
    check_user,
    choose_media_type,
    clamp_page_number,
    clamp_page_size,
    entity_from_post,
    entity_from_put,
    get_user_repository,
    patch_changes,
    render,
    render_id,
    user_to_dto,
    validate_user,
)
from ...services.negotiation import is_json_content_type, supported_media_types

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])

EMPTY_USER_ID = uuid.UUID(int=0)
COLLECTION_METHODS = ("GET", "POST", "OPTIONS")
# paging query values are 32-bit signed integers
MAX_QUERY_INT = 2**31 - 1


def negotiated_media_type(request: Request) -> str:
    """Dependency resolving the response media type from ``Accept``."""

    media_type = choose_media_type(request.headers.get("accept"))
    if media_type is None:
        raise HTTPException(
            406, f"Supported media types: {', '.join(supported_media_types())}"
        )
    return media_type


def require_json_body(request: Request) -> None:
    content_type = request.headers.get("content-type")
    if content_type and not is_json_content_type(content_type):
        raise HTTPException(415, "Request body must be JSON")


def _parse_user_id(raw: str) -> uuid.UUID:
    """Unparseable ids collapse to the nil UUID, which is never stored."""

    try:
        return uuid.UUID(raw)
    except ValueError:
        return EMPTY_USER_ID


def _location(request: Request, user_id: uuid.UUID) -> str:
    return str(request.url_for("get_user_by_id", user_id=str(user_id)))


@router.api_route("/{user_id}", methods=["GET", "HEAD"], name="get_user_by_id")
def get_user_by_id(
    user_id: str,
    request: Request,
    media_type: str = Depends(negotiated_media_type),
    repository: InMemoryUserRepository = Depends(get_user_repository),
):
    """Fetch a single user; HEAD only reports whether it exists."""

    user = repository.find_by_id(_parse_user_id(user_id))
    if user is None:
        raise HTTPException(404, "User not found")

    if request.method == "HEAD":
        return Response(status_code=200, media_type="application/json; charset=utf-8")

    return render(user_to_dto(user), media_type, root_name="UserDto")


@router.post("", name="create_user", dependencies=[Depends(require_json_body)])
def create_user(
    request: Request,
    body: Optional[UserPostDto] = Body(None),
    media_type: str = Depends(negotiated_media_type),
    repository: InMemoryUserRepository = Depends(get_user_repository),
):
    """Create a user and point the client at it."""

    if body is None:
        raise HTTPException(400, "Request body is required")

    validate_user(body.login, body.first_name, body.last_name)

    user = repository.insert(entity_from_post(body))
    logger.info("Created user %s (%s)", user.id, user.login)
    return render_id(
        user.id,
        media_type,
        status_code=201,
        headers={"Location": _location(request, user.id)},
    )


@router.put("/{user_id}", name="update_user", dependencies=[Depends(require_json_body)])
def update_user(
    user_id: str,
    request: Request,
    body: Optional[UserPutDto] = Body(None),
    media_type: str = Depends(negotiated_media_type),
    repository: InMemoryUserRepository = Depends(get_user_repository),
):
    """Replace a user entirely, creating it when the id is new."""

    parsed_id = _parse_user_id(user_id)
    if body is None or parsed_id == EMPTY_USER_ID:
        raise HTTPException(400, "A body and a non-empty user id are required")

    validate_user(body.login, body.first_name, body.last_name)

    user, inserted = repository.update_or_insert(entity_from_put(parsed_id, body))
    if inserted:
        logger.info("Created user %s by replace", user.id)
        return render_id(
            user.id,
            media_type,
            status_code=201,
            headers={"Location": _location(request, user.id)},
        )

    logger.info("Replaced user %s", user.id)
    return Response(status_code=204)


@router.patch("/{user_id}", name="patch_user", dependencies=[Depends(require_json_body)])
def patch_user(
    user_id: str,
    patch: Optional[UserPatchDto] = Body(None),
    repository: InMemoryUserRepository = Depends(get_user_repository),
):
    """Apply a merge patch; fields missing from the body keep their values."""

    if patch is None:
        raise HTTPException(400, "Patch body is required")

    parsed_id = _parse_user_id(user_id)
    if parsed_id == EMPTY_USER_ID:
        raise HTTPException(404, "User not found")

    # lookup, merge, rule check and write-back happen under one store lock
    try:
        repository.patch(parsed_id, patch_changes(patch), check=check_user)
    except UserNotFoundError as exc:
        raise HTTPException(404, "User not found") from exc

    logger.info("Patched user %s", parsed_id)
    return Response(status_code=204)


@router.delete("/{user_id}", name="delete_user")
def delete_user(
    user_id: str,
    repository: InMemoryUserRepository = Depends(get_user_repository),
):
    """Delete a user by id."""

    parsed_id = _parse_user_id(user_id)
    if parsed_id == EMPTY_USER_ID:
        raise HTTPException(404, "User not found")

    if repository.find_by_id(parsed_id) is None:
        raise HTTPException(404, "User not found")

    repository.delete(parsed_id)
    logger.info("Deleted user %s", parsed_id)
    return Response(status_code=204)


@router.get("", name="get_users")
def get_users(
    request: Request,
    page_number: int = Query(1, alias="pageNumber", le=MAX_QUERY_INT),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize", le=MAX_QUERY_INT),
    media_type: str = Depends(negotiated_media_type),
    repository: InMemoryUserRepository = Depends(get_user_repository),
):
    """List users one page at a time; navigation goes in ``X-Pagination``."""

    page = repository.get_page(clamp_page_number(page_number), clamp_page_size(page_size))

    def link_for(number: int, size: int) -> str:
        url = request.url_for("get_users")
        return str(url.include_query_params(pageNumber=number, pageSize=size))

    pagination = build_pagination_header(page, link_for)
    return render(
        [user_to_dto(user) for user in page],
        media_type,
        root_name="UserDto",
        headers={"X-Pagination": pagination.model_dump_json(by_alias=True)},
    )


@router.options("", name="get_users_options")
def get_users_options() -> Response:
    """Advertise the methods the collection supports."""

    return Response(status_code=200, headers={"Allow": ", ".join(COLLECTION_METHODS)})


__all__ = ["router"]
