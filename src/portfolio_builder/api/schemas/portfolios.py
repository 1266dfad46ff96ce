"""Pydantic schemas for portfolio API endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from portfolio_builder.api.schemas.common import CamelModel


class PortfolioResponse(CamelModel):
    """Response schema for a portfolio owned by the caller."""

    id: str
    user_id: str
    title: str
    subtitle: str | None = None
    description: str | None = None
    slug: str
    template: str
    is_published: bool
    created_at: datetime
    updated_at: datetime


class PortfolioUpdateRequest(CamelModel):
    """Request schema for updating portfolio settings.

    All fields are optional; only provided fields are updated.
    """

    title: str | None = Field(None, description="Page title")
    subtitle: str | None = Field(None, description="Short tagline under the title")
    description: str | None = Field(None, description="Introductory text")
    template: str | None = Field(None, description="Template ID (minimal, tech, creative)")
    slug: str | None = Field(None, description="Public URL slug (unpublished portfolios only)")


class TemplateResponse(CamelModel):
    """A template the portfolio can be rendered with."""

    id: str
    name: str
    description: str
    thumbnail: str
