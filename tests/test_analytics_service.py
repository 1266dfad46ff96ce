"""Tests for view tracking and the 7-day analytics series."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta, timezone

import pytest
from conftest import make_portfolio, make_user

import portfolio_builder.data.db as db_module
from portfolio_builder.data.models import ViewEvent
from portfolio_builder.services.analytics import get_portfolio_analytics, record_view
from portfolio_builder.services.errors import NotFound, ValidationFailed

NOW = datetime(2026, 10, 19, 15, 30, tzinfo=UTC)


@pytest.fixture
def owner(tmp_db):
    user_id = make_user("octocat")
    return user_id, make_portfolio(user_id, "octocat", is_published=True)


def _add_views(portfolio_id: str, *moments: datetime) -> None:
    with db_module.get_session() as session:
        for moment in moments:
            session.add(ViewEvent(portfolio_id=portfolio_id, viewed_at=moment))


def test_empty_portfolio_has_zero_filled_week(owner):
    user_id, portfolio_id = owner

    stats = get_portfolio_analytics(user_id, portfolio_id, now=NOW)

    assert stats["total_views"] == 0
    assert stats["thirty_day_views"] == 0
    assert [point["date"] for point in stats["chart_data"]] == [
        "2026-10-13",
        "2026-10-14",
        "2026-10-15",
        "2026-10-16",
        "2026-10-17",
        "2026-10-18",
        "2026-10-19",
    ]
    assert all(point["views"] == 0 for point in stats["chart_data"])


def test_views_are_bucketed_by_utc_day(owner):
    user_id, portfolio_id = owner
    _add_views(
        portfolio_id,
        datetime(2026, 10, 19, 0, 5, tzinfo=UTC),
        datetime(2026, 10, 19, 14, 0, tzinfo=UTC),
        datetime(2026, 10, 17, 23, 59, tzinfo=UTC),
        datetime(2026, 10, 13, 0, 0, tzinfo=UTC),
        # Day before the chart window
        datetime(2026, 10, 12, 23, 59, tzinfo=UTC),
    )

    stats = get_portfolio_analytics(user_id, portfolio_id, now=NOW)

    views = {point["date"]: point["views"] for point in stats["chart_data"]}
    assert views == {
        "2026-10-13": 1,
        "2026-10-14": 0,
        "2026-10-15": 0,
        "2026-10-16": 0,
        "2026-10-17": 1,
        "2026-10-18": 0,
        "2026-10-19": 2,
    }
    assert stats["total_views"] == 5
    assert stats["thirty_day_views"] == 5


def test_thirty_day_window(owner):
    user_id, portfolio_id = owner
    _add_views(
        portfolio_id,
        NOW - timedelta(days=29),
        NOW - timedelta(days=31),
        NOW - timedelta(days=400),
    )

    stats = get_portfolio_analytics(user_id, portfolio_id, now=NOW)

    assert stats["total_views"] == 3
    assert stats["thirty_day_views"] == 1
    assert sum(point["views"] for point in stats["chart_data"]) == 0


def test_reference_time_is_converted_to_utc(owner):
    user_id, portfolio_id = owner
    # 01:00 on the 20th in UTC+3 is still the 19th in UTC
    local_now = datetime(2026, 10, 20, 1, 0, tzinfo=timezone(timedelta(hours=3)))

    stats = get_portfolio_analytics(user_id, portfolio_id, now=local_now)

    assert stats["chart_data"][-1]["date"] == "2026-10-19"


def test_series_shape_with_default_clock(owner):
    user_id, portfolio_id = owner

    chart = get_portfolio_analytics(user_id, portfolio_id)["chart_data"]

    assert len(chart) == 7
    dates = [point["date"] for point in chart]
    assert dates == sorted(dates)
    assert len(set(dates)) == 7
    assert dates[-1] == datetime.now(UTC).date().isoformat()


def test_non_owner_gets_not_found(owner):
    _, portfolio_id = owner

    with pytest.raises(NotFound):
        get_portfolio_analytics(make_user("mallory"), portfolio_id, now=NOW)


def test_record_view_stores_event(owner):
    _, portfolio_id = owner

    record_view(portfolio_id, "Mozilla/5.0 " + "x" * 600, "https://example.com/")

    with db_module.get_session() as session:
        event = session.query(ViewEvent).one()
        assert event.portfolio_id == portfolio_id
        assert len(event.user_agent) == 512
        assert event.referrer == "https://example.com/"


def test_record_view_validation(owner):
    with pytest.raises(ValidationFailed, match="portfolioId is required"):
        record_view(None, None, None)
    with pytest.raises(ValidationFailed, match="portfolioId must be a valid UUID"):
        record_view("123", None, None)
    with pytest.raises(NotFound):
        record_view(str(uuid.uuid4()), None, None)
