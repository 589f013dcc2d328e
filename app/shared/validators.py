"""Shared validation utilities"""

import re
import uuid
from typing import Optional

_INT_ID_PATTERN = re.compile(r"^[+-]?\d+$")


def parse_uuid(value: Optional[str]) -> Optional[uuid.UUID]:
    """Parse a UUID in any of the usual spellings (dashed, bare hex, braced)"""
    if not value:
        return None
    try:
        return uuid.UUID(value.strip())
    except (ValueError, AttributeError, TypeError):
        return None


def parse_int_id(value: Optional[str]) -> Optional[int]:
    """
    Parse a numeric entity id.

    Args:
        value: Id as text, surrounding whitespace allowed

    Returns:
        The integer id, or None if the text is not a plain integer
    """
    if not value:
        return None
    value = value.strip()
    if not _INT_ID_PATTERN.match(value):
        return None
    return int(value)
