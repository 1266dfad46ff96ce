"""Page-view tracking and owner-facing view statistics.

Views are bucketed by UTC calendar day. The chart always covers the last
seven days ending today, oldest first, with zero entries for days without
views.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, time, timedelta
from typing import TypedDict

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from portfolio_builder.data.db import get_session
from portfolio_builder.data.models import Portfolio, ViewEvent
from portfolio_builder.services.errors import NotFound, ValidationFailed
from portfolio_builder.services.ownership import get_owned_portfolio
from portfolio_builder.services.validation import require_uuid

logger = logging.getLogger(__name__)

__all__ = ["ChartPoint", "PortfolioAnalytics", "get_portfolio_analytics", "record_view"]

CHART_DAYS = 7
RECENT_WINDOW = timedelta(days=30)
MAX_USER_AGENT_LENGTH = 512
MAX_REFERRER_LENGTH = 2048


class ChartPoint(TypedDict):
    date: str
    views: int


class PortfolioAnalytics(TypedDict):
    total_views: int
    thirty_day_views: int
    chart_data: list[ChartPoint]


def _utc_day(session: Session, column):
    """SQL expression for the UTC calendar day of a timestamp column."""
    if session.get_bind().dialect.name == "postgresql":
        return func.date(func.timezone("UTC", column))
    # SQLite stores the UTC timestamp as text
    return func.date(column)


def get_portfolio_analytics(
    user_id: str, portfolio_id: str, now: datetime | None = None
) -> PortfolioAnalytics:
    """Return view totals and a 7-day chart for a portfolio the caller owns.

    Args:
        user_id: Authenticated caller.
        portfolio_id: Portfolio to report on.
        now: Reference time, defaults to the current UTC time.

    Raises:
        NotFound: If the portfolio does not exist or belongs to someone else.
    """
    now = (now or datetime.now(UTC)).astimezone(UTC)
    today = now.date()
    chart_start = datetime.combine(today - timedelta(days=CHART_DAYS - 1), time.min, tzinfo=UTC)

    with get_session() as session:
        get_owned_portfolio(session, user_id, portfolio_id, hide_foreign=True)

        total_views = session.execute(
            select(func.count(ViewEvent.id)).where(ViewEvent.portfolio_id == portfolio_id)
        ).scalar_one()
        thirty_day_views = session.execute(
            select(func.count(ViewEvent.id)).where(
                ViewEvent.portfolio_id == portfolio_id,
                ViewEvent.viewed_at >= now - RECENT_WINDOW,
            )
        ).scalar_one()

        day = _utc_day(session, ViewEvent.viewed_at)
        rows = session.execute(
            select(day, func.count(ViewEvent.id))
            .where(ViewEvent.portfolio_id == portfolio_id, ViewEvent.viewed_at >= chart_start)
            .group_by(day)
        ).all()

    counts = {str(bucket): count for bucket, count in rows}
    chart_data: list[ChartPoint] = []
    for offset in range(CHART_DAYS - 1, -1, -1):
        key = (today - timedelta(days=offset)).isoformat()
        chart_data.append({"date": key, "views": counts.get(key, 0)})

    return {
        "total_views": total_views,
        "thirty_day_views": thirty_day_views,
        "chart_data": chart_data,
    }


def record_view(portfolio_id: str | None, user_agent: str | None, referrer: str | None) -> None:
    """Append one view event for an existing portfolio.

    Raises:
        ValidationFailed: If ``portfolio_id`` is missing or not a UUID.
        NotFound: If the portfolio does not exist.
    """
    if not portfolio_id:
        raise ValidationFailed("portfolioId is required")
    require_uuid(portfolio_id, "portfolioId must be a valid UUID")

    with get_session() as session:
        exists = session.execute(
            select(Portfolio.id).where(Portfolio.id == portfolio_id)
        ).scalar_one_or_none()
        if exists is None:
            raise NotFound("Portfolio not found")

        session.add(
            ViewEvent(
                portfolio_id=portfolio_id,
                user_agent=user_agent[:MAX_USER_AGENT_LENGTH] if user_agent else None,
                referrer=referrer[:MAX_REFERRER_LENGTH] if referrer else None,
            )
        )
    logger.debug("Recorded view for portfolio %s", portfolio_id)
