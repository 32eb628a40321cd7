"""Database model exports."""

from .user import MUTABLE_FIELDS, UserEntity

__all__ = [
    "MUTABLE_FIELDS",
    "UserEntity",
]
