"""Pydantic schemas for analytics API endpoints."""

from __future__ import annotations

from pydantic import Field

from portfolio_builder.api.schemas.common import CamelModel


class ChartPoint(CamelModel):
    date: str = Field(description="UTC calendar day (YYYY-MM-DD)")
    views: int


class AnalyticsResponse(CamelModel):
    """View statistics for one portfolio."""

    total_views: int
    thirty_day_views: int
    chart_data: list[ChartPoint] = Field(description="Last 7 UTC days, oldest first")


class TrackViewRequest(CamelModel):
    """Request schema for recording a public page view."""

    portfolio_id: str | None = Field(None, description="Viewed portfolio (UUID)")
    referrer: str | None = Field(None, description="document.referrer of the viewer")


class TrackViewResponse(CamelModel):
    success: bool = True
