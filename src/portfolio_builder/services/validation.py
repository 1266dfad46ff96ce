"""Input validation helpers shared by the portfolio services.

All helpers raise :class:`ValidationFailed` with a caller-facing message and
return the cleaned value, so services can validate a whole request before
touching the database.
"""

from __future__ import annotations

import re
from datetime import UTC, date, datetime
from typing import Any
from urllib.parse import urlparse

from portfolio_builder.services.errors import ValidationFailed

# UUID v4, case-insensitive
UUID_REGEX = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

# YYYY-MM or YYYY-MM-DD
DATE_REGEX = re.compile(r"^\d{4}-\d{2}(-\d{2})?$")


def is_valid_uuid(value: Any) -> bool:
    """Return True if ``value`` is a UUID v4 string."""
    return isinstance(value, str) and UUID_REGEX.match(value) is not None


def require_uuid(value: Any, message: str = "Invalid ID format") -> str:
    """Return ``value`` if it is a UUID v4 string, else raise ValidationFailed."""
    if not is_valid_uuid(value):
        raise ValidationFailed(message)
    return value


def parse_partial_date(value: str) -> date | None:
    """Parse ``YYYY-MM`` or ``YYYY-MM-DD`` into a date.

    ``YYYY-MM`` resolves to the first day of the month. Returns None when the
    string is malformed or names a day that does not exist (``2026-02-30``).
    """
    value = value.strip()
    if not DATE_REGEX.match(value):
        return None
    parts = [int(part) for part in value.split("-")]
    year, month = parts[0], parts[1]
    day = parts[2] if len(parts) == 3 else 1
    try:
        return date(year, month, day)
    except ValueError:
        return None


def utc_today() -> date:
    """Return the current calendar date in UTC."""
    return datetime.now(UTC).date()


def is_future_date(value: date, today: date | None = None) -> bool:
    """Return True if ``value`` falls after today (UTC)."""
    return value > (today or utc_today())


def clean_required_text(value: Any, label: str, max_length: int) -> str:
    """Trim a required text field and enforce its length ceiling."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationFailed(f"{label} is required")
    cleaned = value.strip()
    if len(cleaned) > max_length:
        raise ValidationFailed(f"{label} too long (max {max_length} characters)")
    return cleaned


def clean_optional_text(value: Any, label: str, max_length: int) -> str | None:
    """Trim an optional text field; non-strings and blanks become None."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationFailed(f"{label} must be a string")
    cleaned = value.strip()
    if len(cleaned) > max_length:
        raise ValidationFailed(f"{label} too long (max {max_length} characters)")
    return cleaned or None


def is_valid_http_url(value: str) -> bool:
    """Return True for absolute http:// or https:// URLs with a host."""
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def clean_optional_url(value: Any, label: str, max_length: int) -> str | None:
    """Validate an optional http(s) URL; blank values clear the field."""
    cleaned = clean_optional_text(value, label, max_length)
    if cleaned is not None and not is_valid_http_url(cleaned):
        raise ValidationFailed(
            f"Invalid {label.lower()} format. Must be a valid http:// or https:// URL"
        )
    return cleaned


def is_order_index(value: Any) -> bool:
    """Return True for non-negative integers (bool is not accepted)."""
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0
