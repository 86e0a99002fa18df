"""
Value helpers shared by the resolution steps.
"""

import json
from typing import Any


def is_empty(value: Any) -> bool:
    """
    True when a value counts as "not supplied".

    None and blank strings are empty. False, 0 and empty collections are real
    values a user can deliberately pick.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def same_value(left: Any, right: Any) -> bool:
    """
    Exact equality for primitive form values.

    Booleans only equal booleans (so True never matches 1), and strings are
    compared with surrounding whitespace removed.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    if isinstance(left, str) and isinstance(right, str):
        return left.strip() == right.strip()
    if isinstance(left, str) or isinstance(right, str):
        return False
    return left == right


def as_text(value: Any) -> str:
    """
    Render a programmatic value the way a form would submit it.

    Booleans become "true"/"false" and structured values are JSON encoded.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value)
