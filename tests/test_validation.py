"""Tests for the shared input validation helpers."""

from __future__ import annotations

from datetime import date

import pytest

from portfolio_builder.services.errors import ValidationFailed
from portfolio_builder.services.validation import (
    clean_optional_text,
    clean_optional_url,
    clean_required_text,
    is_future_date,
    is_order_index,
    is_valid_uuid,
    parse_partial_date,
    require_uuid,
)

VALID_UUID = "3f2b8c1e-9a4d-4e6f-8b7a-1c2d3e4f5a6b"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (VALID_UUID, True),
        (VALID_UUID.upper(), True),
        ("3f2b8c1e-9a4d-1e6f-8b7a-1c2d3e4f5a6b", False),  # version 1
        ("3f2b8c1e-9a4d-4e6f-7b7a-1c2d3e4f5a6b", False),  # bad variant
        ("not-a-uuid", False),
        ("", False),
        (None, False),
        (42, False),
    ],
)
def test_is_valid_uuid(value, expected):
    assert is_valid_uuid(value) is expected


def test_require_uuid_uses_custom_message():
    with pytest.raises(ValidationFailed, match="Invalid portfolio ID format"):
        require_uuid("abc", "Invalid portfolio ID format")
    assert require_uuid(VALID_UUID) == VALID_UUID


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2026-02-01", date(2026, 2, 1)),
        ("2026-02", date(2026, 2, 1)),
        (" 2024-02-29 ", date(2024, 2, 29)),
        ("2026-02-30", None),
        ("2025-02-29", None),
        ("2026-13", None),
        ("2026-1-5", None),
        ("Feb 2026", None),
    ],
)
def test_parse_partial_date(value, expected):
    assert parse_partial_date(value) == expected


def test_is_future_date_compares_against_today():
    today = date(2026, 10, 19)
    assert is_future_date(date(2026, 10, 20), today) is True
    assert is_future_date(date(2026, 10, 19), today) is False
    assert is_future_date(date(2099, 1, 1)) is True


def test_clean_required_text_trims_and_limits():
    assert clean_required_text("  Engineer  ", "Job title", 100) == "Engineer"
    with pytest.raises(ValidationFailed, match="Job title is required"):
        clean_required_text("   ", "Job title", 100)
    with pytest.raises(ValidationFailed, match="Job title is required"):
        clean_required_text(None, "Job title", 100)
    with pytest.raises(ValidationFailed, match=r"too long \(max 5 characters\)"):
        clean_required_text("abcdef", "Job title", 5)


def test_clean_optional_text_blank_becomes_none():
    assert clean_optional_text(None, "Location", 100) is None
    assert clean_optional_text("   ", "Location", 100) is None
    assert clean_optional_text(" Remote ", "Location", 100) == "Remote"
    with pytest.raises(ValidationFailed, match="Location must be a string"):
        clean_optional_text(12, "Location", 100)


def test_clean_optional_url_requires_http_scheme():
    assert clean_optional_url("https://example.com/x", "URL", 2048) == "https://example.com/x"
    assert clean_optional_url("", "URL", 2048) is None
    with pytest.raises(ValidationFailed, match="Invalid url format"):
        clean_optional_url("ftp://example.com", "URL", 2048)
    with pytest.raises(ValidationFailed, match="Invalid url format"):
        clean_optional_url("javascript:alert(1)", "URL", 2048)


def test_is_order_index_rejects_negatives_and_bools():
    assert is_order_index(0) is True
    assert is_order_index(7) is True
    assert is_order_index(-1) is False
    assert is_order_index(True) is False
    assert is_order_index(1.0) is False
    assert is_order_index("2") is False
