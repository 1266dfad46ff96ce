"""Pydantic schemas for the public portfolio page."""

from __future__ import annotations

from datetime import date

from pydantic import Field

from portfolio_builder.api.schemas.common import CamelModel


class PublicPortfolio(CamelModel):
    id: str
    title: str
    subtitle: str | None = None
    description: str | None = None
    slug: str
    template: str


class PublicUser(CamelModel):
    name: str | None = None
    title: str | None = None
    bio: str | None = None
    avatar_url: str | None = None
    social_links: dict[str, str] = Field(default_factory=dict)


class PublicProject(CamelModel):
    id: str
    name: str
    description: str | None = None
    url: str | None = None
    language: str | None = None
    stars: int = 0
    order_index: int = 0


class PublicExperience(CamelModel):
    id: str
    title: str
    company: str
    location: str | None = None
    start_date: date
    end_date: date | None = None
    is_current: bool = False
    description: str | None = None
    order_index: int = 0


class PublicEducation(CamelModel):
    id: str
    school: str
    degree: str
    field_of_study: str | None = None
    start_date: date
    end_date: date | None = None
    is_current: bool = False
    description: str | None = None
    order_index: int = 0


class PublicPortfolioResponse(CamelModel):
    """Everything the public page renders for a published portfolio."""

    portfolio: PublicPortfolio
    user: PublicUser | None = None
    projects: list[PublicProject] = Field(default_factory=list)
    experiences: list[PublicExperience] = Field(default_factory=list)
    education: list[PublicEducation] = Field(default_factory=list)
