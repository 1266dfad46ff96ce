"""Pydantic schemas for education API endpoints."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import Field

from portfolio_builder.api.schemas.common import CamelModel


class EducationResponse(CamelModel):
    """Response schema for education data."""

    id: str
    portfolio_id: str
    school: str
    degree: str
    field_of_study: str | None = None
    start_date: date
    end_date: date | None = None
    is_current: bool = False
    description: str | None = None
    order_index: int = 0
    created_at: datetime
    updated_at: datetime


class EducationCreateRequest(CamelModel):
    """Request schema for creating an education entry."""

    school: str | None = Field(None, description="School or university name (required)")
    degree: str | None = Field(None, description="Degree type (required)")
    field_of_study: str | None = Field(None, description="Major or field of study")
    start_date: str | None = Field(None, description="YYYY-MM or YYYY-MM-DD (required)")
    end_date: str | None = Field(None, description="YYYY-MM or YYYY-MM-DD")
    is_current: bool = Field(False, description="Whether currently enrolled")
    description: str | None = Field(None, description="Honors, activities, notes")


class EducationUpdateRequest(CamelModel):
    """Request schema for updating an education entry.

    All fields are optional; only provided fields are updated.
    """

    school: str | None = Field(None, description="School or university name")
    degree: str | None = Field(None, description="Degree type")
    field_of_study: str | None = Field(None, description="Major or field of study")
    start_date: str | None = Field(None, description="YYYY-MM or YYYY-MM-DD")
    end_date: str | None = Field(None, description="YYYY-MM or YYYY-MM-DD")
    is_current: bool | None = Field(None, description="Whether currently enrolled")
    description: str | None = Field(None, description="Honors, activities, notes")
