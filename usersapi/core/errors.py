"""Domain exceptions raised below the API layer."""

from __future__ import annotations

import uuid
from typing import Dict, List


class UserNotFoundError(LookupError):
    """Raised when an operation targets a user id that is not stored."""

    def __init__(self, user_id: uuid.UUID):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class ValidationFailedError(ValueError):
    """One or more field rules were violated.

    ``errors`` maps the wire field name to every message reported for it.
    """

    def __init__(self, errors: Dict[str, List[str]]):
        super().__init__("; ".join(f"{field}: {', '.join(msgs)}" for field, msgs in errors.items()))
        self.errors = errors


__all__ = ["UserNotFoundError", "ValidationFailedError"]
