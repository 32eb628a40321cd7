"""Field rules applied to user data before it is stored."""

from __future__ import annotations

import re
from typing import Dict, List, Optional

from ..core import ValidationFailedError

LOGIN_REQUIRED = "login is required"
LOGIN_NOT_ALPHANUMERIC = "login must be alphanumeric"
FIRST_NAME_EMPTY = "length of the first name must be greater than 0"
LAST_NAME_EMPTY = "length of the last name must be greater than 0"

_LOGIN_RE = re.compile(r"[A-Za-z0-9]+")


def collect_user_errors(
    login: Optional[str],
    first_name: Optional[str],
    last_name: Optional[str],
) -> Dict[str, List[str]]:
    """Return every rule violation keyed by wire field name; empty when valid."""

    errors: Dict[str, List[str]] = {}

    if not login:
        errors.setdefault("login", []).append(LOGIN_REQUIRED)
    elif not _LOGIN_RE.fullmatch(login):
        errors.setdefault("login", []).append(LOGIN_NOT_ALPHANUMERIC)

    # An absent first name is fine, an empty one is not.
    if first_name is not None and not first_name:
        errors.setdefault("firstName", []).append(FIRST_NAME_EMPTY)

    if not last_name:
        errors.setdefault("lastName", []).append(LAST_NAME_EMPTY)

    return errors


def validate_user(
    login: Optional[str],
    first_name: Optional[str],
    last_name: Optional[str],
) -> None:
    """Raise ValidationFailedError carrying all violations, if any."""

    errors = collect_user_errors(login, first_name, last_name)
    if errors:
        raise ValidationFailedError(errors)


__all__ = [
    "FIRST_NAME_EMPTY",
    "LAST_NAME_EMPTY",
    "LOGIN_NOT_ALPHANUMERIC",
    "LOGIN_REQUIRED",
    "collect_user_errors",
    "validate_user",
]
