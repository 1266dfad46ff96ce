"""Tests for the shared experience/education date and field rules."""

from __future__ import annotations

from datetime import date

import pytest

from portfolio_builder.services.errors import ValidationFailed
from portfolio_builder.services.experiences import EXPERIENCE_FIELDS
from portfolio_builder.services.timeline import clean_entry_for_create, clean_entry_for_update

TODAY = date(2026, 10, 19)


def _body(**overrides):
    body = {"title": "Engineer", "company": "Acme", "start_date": "2024-01"}
    body.update(overrides)
    return body


def _stored(**overrides):
    stored = {"start_date": date(2024, 1, 1), "end_date": date(2025, 6, 1), "is_current": False}
    stored.update(overrides)
    return stored


class TestCreate:
    """Tests for full entry validation."""

    def test_month_precision_start_date(self):
        values = clean_entry_for_create(_body(), EXPERIENCE_FIELDS, today=TODAY)
        assert values["start_date"] == date(2024, 1, 1)
        assert values["end_date"] is None
        assert values["is_current"] is False
        assert values["location"] is None

    def test_rejects_impossible_calendar_date(self):
        with pytest.raises(ValidationFailed, match="Invalid start date"):
            clean_entry_for_create(_body(start_date="2026-02-30"), EXPERIENCE_FIELDS, today=TODAY)

    def test_accepts_real_calendar_date(self):
        values = clean_entry_for_create(
            _body(start_date="2026-02-01"), EXPERIENCE_FIELDS, today=TODAY
        )
        assert values["start_date"] == date(2026, 2, 1)

    def test_rejects_future_start(self):
        with pytest.raises(ValidationFailed, match="Start date cannot be in the future"):
            clean_entry_for_create(_body(start_date="2099-01-01"), EXPERIENCE_FIELDS, today=TODAY)

    def test_start_date_required(self):
        with pytest.raises(ValidationFailed, match="Start date is required"):
            clean_entry_for_create(_body(start_date=None), EXPERIENCE_FIELDS, today=TODAY)

    def test_required_text_fields(self):
        with pytest.raises(ValidationFailed, match="Company name is required"):
            clean_entry_for_create(_body(company="  "), EXPERIENCE_FIELDS, today=TODAY)
        with pytest.raises(ValidationFailed, match=r"Job title too long \(max 100"):
            clean_entry_for_create(_body(title="x" * 101), EXPERIENCE_FIELDS, today=TODAY)

    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationFailed, match="End date cannot be before start date"):
            clean_entry_for_create(_body(end_date="2023-12"), EXPERIENCE_FIELDS, today=TODAY)

    def test_is_current_discards_end_date(self):
        values = clean_entry_for_create(
            _body(is_current=True, end_date="2025-05"), EXPERIENCE_FIELDS, today=TODAY
        )
        assert values["is_current"] is True
        assert values["end_date"] is None


class TestUpdate:
    """Tests for partial entry validation against the stored record."""

    def test_end_date_checked_against_stored_start(self):
        with pytest.raises(ValidationFailed, match="End date cannot be before start date"):
            clean_entry_for_update(
                {"end_date": "2023-06"}, EXPERIENCE_FIELDS, _stored(), today=TODAY
            )

    def test_start_date_checked_against_stored_end(self):
        with pytest.raises(ValidationFailed, match="End date cannot be before start date"):
            clean_entry_for_update(
                {"start_date": "2025-07"}, EXPERIENCE_FIELDS, _stored(), today=TODAY
            )

    def test_setting_current_clears_stored_end(self):
        updates = clean_entry_for_update(
            {"is_current": True}, EXPERIENCE_FIELDS, _stored(), today=TODAY
        )
        assert updates == {"is_current": True, "end_date": None}

    def test_end_date_ignored_while_current(self):
        updates = clean_entry_for_update(
            {"end_date": "2025-08"},
            EXPERIENCE_FIELDS,
            _stored(end_date=None, is_current=True),
            today=TODAY,
        )
        assert updates == {"end_date": None}

    def test_only_present_fields_returned(self):
        updates = clean_entry_for_update(
            {"location": " Berlin "}, EXPERIENCE_FIELDS, _stored(), today=TODAY
        )
        assert updates == {"location": "Berlin"}

    def test_no_recognised_fields_rejected(self):
        with pytest.raises(ValidationFailed, match="No valid fields to update"):
            clean_entry_for_update({"bogus": 1}, EXPERIENCE_FIELDS, _stored(), today=TODAY)

    def test_is_current_must_be_boolean(self):
        with pytest.raises(ValidationFailed, match="isCurrent must be a boolean"):
            clean_entry_for_update({"is_current": None}, EXPERIENCE_FIELDS, _stored(), today=TODAY)
