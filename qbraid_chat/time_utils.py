"""Timestamp helpers for rendering API times in the local timezone."""

from __future__ import annotations

import locale
import logging
import re
from datetime import UTC, datetime

logger = logging.getLogger(__name__)

INVALID_DATE = "Invalid Date"

# Date-only ISO forms are midnight UTC; date-times without an offset are local.
_DATE_ONLY = re.compile(r"^\d{4}-?\d{2}-?\d{2}$")


def use_system_locale() -> None:
    """Format dates with the user's LC_TIME locale instead of the C locale."""
    try:
        locale.setlocale(locale.LC_TIME, "")
    except locale.Error as e:
        logger.warning("Could not apply system locale for dates: %s", e)


def parse_timestamp(raw: object) -> datetime | None:
    """
    Parse an API timestamp into an aware datetime.

    Accepts ISO-8601 strings (with or without a trailing ``Z``) and epoch
    milliseconds. Returns None for anything else.
    """
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, (int, float)):
        try:
            return datetime.fromtimestamp(raw / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(raw, str) and raw.strip():
        text = raw.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
        if parsed.tzinfo is not None:
            return parsed
        if _DATE_ONLY.match(text):
            return parsed.replace(tzinfo=UTC)
        try:
            return parsed.astimezone()
        except (OverflowError, OSError, ValueError):
            return None
    return None


def to_locale_string(raw: object) -> str:
    """Render an API timestamp as a locale-formatted local date and time."""
    parsed = parse_timestamp(raw)
    if parsed is None:
        return INVALID_DATE
    try:
        return parsed.astimezone().strftime("%x, %X")
    except (OverflowError, OSError, ValueError):
        return INVALID_DATE
