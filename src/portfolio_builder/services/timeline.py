"""Shared rules for dated portfolio entries (experiences and education).

Both entry types have required and optional text fields, a start date, an
optional end date and an ``is_current`` flag. The functions here turn a
request body into the column values to write, or raise
:class:`ValidationFailed` before anything is persisted:

- dates are ``YYYY-MM`` or ``YYYY-MM-DD`` and must exist on the calendar
- a start date after today (UTC) is rejected
- ``is_current`` forces the stored end date to NULL
- the end date may not precede the start date; on partial updates the
  missing side comes from the stored record
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any

from portfolio_builder.services.errors import ValidationFailed
from portfolio_builder.services.validation import (
    clean_optional_text,
    clean_required_text,
    is_future_date,
    parse_partial_date,
)


@dataclass(frozen=True)
class TextField:
    """A text column of a timeline entry and its limits."""

    key: str
    label: str
    max_length: int
    required: bool = False

    def clean(self, value: Any) -> str | None:
        if self.required:
            return clean_required_text(value, self.label, self.max_length)
        return clean_optional_text(value, self.label, self.max_length)


def _parse_start_date(value: Any, today: date | None) -> date:
    if not isinstance(value, str) or not value.strip():
        raise ValidationFailed("Start date is required")
    parsed = parse_partial_date(value)
    if parsed is None:
        raise ValidationFailed("Invalid start date")
    if is_future_date(parsed, today):
        raise ValidationFailed("Start date cannot be in the future")
    return parsed


def _parse_end_date(value: Any) -> date | None:
    """Parse an optional end date; None or blank clears it."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationFailed("Invalid end date")
    if not value.strip():
        return None
    parsed = parse_partial_date(value)
    if parsed is None:
        raise ValidationFailed("Invalid end date")
    return parsed


def _check_range(start_date: date | None, end_date: date | None) -> None:
    if start_date is not None and end_date is not None and end_date < start_date:
        raise ValidationFailed("End date cannot be before start date")


def clean_entry_for_create(
    data: Mapping[str, Any],
    fields: tuple[TextField, ...],
    today: date | None = None,
) -> dict[str, Any]:
    """Validate a full entry body and return the column values to insert."""
    values: dict[str, Any] = {field.key: field.clean(data.get(field.key)) for field in fields}

    start_date = _parse_start_date(data.get("start_date"), today)
    is_current = data.get("is_current") is True
    end_date = None if is_current else _parse_end_date(data.get("end_date"))
    _check_range(start_date, end_date)

    values.update(start_date=start_date, end_date=end_date, is_current=is_current)
    return values


def clean_entry_for_update(
    data: Mapping[str, Any],
    fields: tuple[TextField, ...],
    existing: Mapping[str, Any],
    today: date | None = None,
) -> dict[str, Any]:
    """Validate a partial entry body against the stored record.

    Args:
        data: Only the keys the caller sent.
        fields: Text fields of this entry type.
        existing: Stored ``start_date``, ``end_date`` and ``is_current``.
        today: Override for "today" (UTC), mainly for tests.

    Returns:
        Column values to write.

    Raises:
        ValidationFailed: On invalid values, or if no known key is present.
    """
    updates: dict[str, Any] = {}

    for field in fields:
        if field.key in data:
            updates[field.key] = field.clean(data[field.key])

    if "is_current" in data:
        if not isinstance(data["is_current"], bool):
            raise ValidationFailed("isCurrent must be a boolean")
        updates["is_current"] = data["is_current"]

    if "start_date" in data:
        updates["start_date"] = _parse_start_date(data["start_date"], today)

    is_current = updates.get("is_current", existing["is_current"])
    if is_current:
        if "end_date" in data or "is_current" in data or existing["end_date"] is not None:
            updates["end_date"] = None
    elif "end_date" in data:
        updates["end_date"] = _parse_end_date(data["end_date"])

    if not updates:
        raise ValidationFailed("No valid fields to update")

    _check_range(
        updates.get("start_date", existing["start_date"]),
        updates.get("end_date", existing["end_date"]),
    )
    return updates
