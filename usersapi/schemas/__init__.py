"""Wire schema exports."""

from .pagination import PaginationHeader
from .users import CamelModel, UserDto, UserPatchDto, UserPostDto, UserPutDto

__all__ = [
    "CamelModel",
    "PaginationHeader",
    "UserDto",
    "UserPatchDto",
    "UserPostDto",
    "UserPutDto",
]
