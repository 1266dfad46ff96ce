"""Pydantic schemas for user API endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from portfolio_builder.api.schemas.common import CamelModel


class UserResponse(CamelModel):
    """Response schema for the authenticated user's profile."""

    id: str
    github_id: str
    username: str | None = None
    email: str | None = None
    name: str | None = None
    title: str | None = None
    bio: str | None = None
    avatar_url: str | None = None
    social_links: dict[str, str] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime


class GitHubLoginRequest(CamelModel):
    """GitHub profile handed over by the OAuth callback."""

    github_id: str | int = Field(description="GitHub account ID")
    login: str = Field(description="GitHub username")
    name: str | None = None
    email: str | None = None
    avatar_url: str | None = None


class UserUpdateRequest(CamelModel):
    """Request schema for updating the profile.

    All fields are optional; only provided fields are updated.
    """

    name: str | None = Field(None, description="Display name")
    title: str | None = Field(None, description="Professional headline")
    bio: str | None = Field(None, description="Short biography")
    social_links: dict[str, str] | None = Field(
        None, description="Network (github, linkedin, twitter, website) to profile URL"
    )
