"""
Start time encoding for schedule items.

Start times are member-local wall-clock values stored as
``YYYY-MM-DD HH:MM:SS``. Two older encodings are still found in stored
documents and are accepted on read only:

- ``{"date": "2024-05-01T09:00:00"}`` (a JSON object wrapping an ISO string)
- ``2024-05-01T09:00:00`` (ISO with the ``T`` separator)
"""

import json
import logging
from datetime import date, datetime
from typing import Optional

logger = logging.getLogger(__name__)

CANONICAL_FORMAT = "%Y-%m-%d %H:%M:%S"


def encode_datetime(value: datetime) -> str:
    """Encode a start time in the canonical stored form"""
    return value.replace(tzinfo=None, microsecond=0).strftime(CANONICAL_FORMAT)


def _parse_iso(text: str) -> Optional[datetime]:
    try:
        parsed = datetime.fromisoformat(text.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    # Offsets are informational only; keep the wall clock as written
    return parsed.replace(tzinfo=None)


def decode_datetime(raw: Optional[str]) -> Optional[datetime]:
    """
    Decode a stored start time.

    Accepts the canonical form, the ``T``-separated ISO form and the legacy
    JSON wrapper. Never raises: anything unreadable yields None.
    """
    if raw is None or not raw.strip():
        return None

    text = raw.strip()

    if text.startswith("{"):
        try:
            wrapper = json.loads(text)
        except ValueError:
            return None
        if not isinstance(wrapper, dict):
            return None
        inner = wrapper.get("date")
        if not isinstance(inner, str) or not inner.strip():
            return None
        return _parse_iso(inner)

    return _parse_iso(text)


def is_legacy_encoding(raw: Optional[str]) -> bool:
    """True when a stored value uses the JSON wrapper or the T separator"""
    if not raw:
        return False
    return raw.lstrip().startswith("{") or "T" in raw


def parse_range_date(raw: Optional[str]) -> Optional[date]:
    """Date portion of a range query parameter, or None when it can't be read"""
    if raw is None or not raw.strip():
        return None
    parsed = _parse_iso(raw)
    if parsed is None:
        logger.warning(f"⚠️ Ignoring unparsable date range value: {raw!r}")
        return None
    return parsed.date()
