"""Pydantic schemas for experience API endpoints."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import Field

from portfolio_builder.api.schemas.common import CamelModel


class ExperienceResponse(CamelModel):
    """Response schema for a work experience entry."""

    id: str
    portfolio_id: str
    title: str
    company: str
    location: str | None = None
    start_date: date
    end_date: date | None = None
    is_current: bool = False
    description: str | None = None
    order_index: int = 0
    created_at: datetime
    updated_at: datetime


class ExperienceCreateRequest(CamelModel):
    """Request schema for creating an experience entry."""

    title: str | None = Field(None, description="Job title (required)")
    company: str | None = Field(None, description="Company name (required)")
    location: str | None = Field(None, description="City, region or remote")
    start_date: str | None = Field(None, description="YYYY-MM or YYYY-MM-DD (required)")
    end_date: str | None = Field(None, description="YYYY-MM or YYYY-MM-DD")
    is_current: bool = Field(False, description="Current position; clears the end date")
    description: str | None = Field(None, description="Role summary")


class ExperienceUpdateRequest(CamelModel):
    """Request schema for updating an experience entry.

    All fields are optional; only provided fields are updated.
    """

    title: str | None = None
    company: str | None = None
    location: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    is_current: bool | None = None
    description: str | None = None
