"""Pydantic schemas for project API endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from portfolio_builder.api.schemas.common import CamelModel


class ProjectResponse(CamelModel):
    """Response schema for a project card."""

    id: str
    portfolio_id: str
    github_repo_id: str | None = None
    name: str
    description: str | None = None
    url: str | None = None
    language: str | None = None
    stars: int = 0
    is_visible: bool = True
    order_index: int = 0
    created_at: datetime
    updated_at: datetime


class ProjectCreateRequest(CamelModel):
    """Request schema for adding a manual project."""

    name: str | None = Field(None, description="Project name (required)")
    description: str | None = Field(None, description="Short description")
    url: str | None = Field(None, description="http:// or https:// link")
    language: str | None = Field(None, description="Primary language")


class ProjectUpdateRequest(CamelModel):
    """Request schema for updating a project.

    All fields are optional; only provided fields are updated.
    """

    name: str | None = Field(None, description="Project name")
    description: str | None = Field(None, description="Short description")
    url: str | None = Field(None, description="http:// or https:// link, empty to clear")
    is_visible: bool | None = Field(None, description="Show on the public page")


class GitHubSyncResponse(CamelModel):
    """Result of a GitHub repository sync."""

    success: bool
    imported: int = Field(description="Repositories added as new projects")
    updated: int = Field(description="Existing projects refreshed from GitHub")
    total: int
