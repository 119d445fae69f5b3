"""Common utilities for PropertyHub backend."""

from datetime import datetime, timezone

from .formatting import iso_to_timestamp
from .logging import get_logger

logger = get_logger(__name__)


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def clean_text(value: str | None, max_length: int | None = None) -> str | None:
    """Strip whitespace from form text, returning None for blank input."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if max_length is not None and len(value) > max_length:
        return value[:max_length]
    return value


def parse_int(value) -> int | None:
    """Parse a form value as an int; unparsable input yields None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def parse_float(value) -> float | None:
    """Parse a form value as a float; unparsable input yields None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except (TypeError, ValueError):
        return None


def to_form_string(value) -> str:
    """Render an optional number for a form input."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def coerce_enum(enum_cls, value, fallback):
    """Map a stored string onto ``enum_cls``; unknown values become ``fallback``."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        logger.warning(
            "Unknown enum value coerced",
            extra={"enum": enum_cls.__name__, "value": value, "fallback": fallback.value},
        )
        return fallback


def parse_timestamp(value) -> datetime | None:
    """Widen a stored timestamp; ISO strings are parsed, anything malformed yields None."""
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return iso_to_timestamp(value)
    return None


def text_or_none(value) -> str | None:
    """Keep stored strings; other types yield None."""
    return value if isinstance(value, str) else None
