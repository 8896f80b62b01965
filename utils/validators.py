"""
Input validators shared by the route handlers.
"""

from __future__ import annotations

import uuid
from typing import Any, Optional

from utils.errors import ValidationError


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(*values: Any, message: Optional[str] = None) -> None:
    """Raise ``ValidationError`` if any value is missing or blank."""
    if any(is_blank(v) for v in values):
        raise ValidationError(message)


def is_valid_id(value: Any) -> bool:
    """True if ``value`` parses as a UUID."""
    if isinstance(value, uuid.UUID):
        return True
    if not isinstance(value, str):
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def parse_id(value: Optional[str]) -> uuid.UUID:
    """Parse a record id from the request body, or raise ``ValidationError``."""
    if is_blank(value) or not is_valid_id(value):
        raise ValidationError()
    return uuid.UUID(value)
