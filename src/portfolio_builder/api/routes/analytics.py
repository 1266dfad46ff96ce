"""Analytics routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Path

from portfolio_builder.api.dependencies import get_current_user_id
from portfolio_builder.api.schemas.analytics import (
    AnalyticsResponse,
    TrackViewRequest,
    TrackViewResponse,
)
from portfolio_builder.services.analytics import get_portfolio_analytics, record_view

router = APIRouter(tags=["analytics"])


@router.get("/portfolios/{portfolio_id}/analytics", response_model=AnalyticsResponse)
def get_analytics_endpoint(
    portfolio_id: Annotated[str, Path(description="Portfolio ID")],
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> AnalyticsResponse:
    """Return view totals and the last 7 days of views."""
    return AnalyticsResponse(**get_portfolio_analytics(user_id, portfolio_id))


@router.post("/analytics/track", response_model=TrackViewResponse)
def track_view_endpoint(
    data: TrackViewRequest,
    user_agent: Annotated[str | None, Header()] = None,
) -> TrackViewResponse:
    """Record one view of a public portfolio page. No authentication required."""
    record_view(data.portfolio_id, user_agent, data.referrer)
    return TrackViewResponse(success=True)
