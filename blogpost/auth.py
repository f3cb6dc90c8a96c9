"""Login check used to gate edit and delete actions"""

from collections.abc import Mapping
from typing import Any

LOGGED_IN_SESSION_KEY = "is_logged_in"

# Flag values stored as text that still mean "not logged in"
_FALSE_FLAG_TEXT = ("", "0")


def is_logged_in(session: Mapping[str, Any] | None) -> bool:
    """Return True if the session carries a truthy logged-in flag.

    Text flags follow form/cookie conventions: ``""`` and ``"0"`` are false.
    """
    if not session:
        return False
    flag = session.get(LOGGED_IN_SESSION_KEY, False)
    if isinstance(flag, str):
        return flag.strip() not in _FALSE_FLAG_TEXT
    return bool(flag)
