"""Project service for managing a portfolio's project cards.

Manual projects are created here with ``github_repo_id`` left empty; rows
imported from GitHub are created by :mod:`portfolio_builder.services.github_sync`
and can be edited through the same update path.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from portfolio_builder.data.db import get_session
from portfolio_builder.data.models import Project
from portfolio_builder.services.errors import NotFound, ValidationFailed
from portfolio_builder.services.ordering import next_order_index
from portfolio_builder.services.ownership import get_owned_portfolio
from portfolio_builder.services.validation import (
    clean_optional_text,
    clean_optional_url,
    clean_required_text,
    require_uuid,
)

logger = logging.getLogger(__name__)

__all__ = [
    "create_project",
    "delete_project",
    "list_projects",
    "project_to_dict",
    "update_project",
]

MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500
MAX_URL_LENGTH = 2048
MAX_LANGUAGE_LENGTH = 50


def project_to_dict(project: Project) -> dict:
    """Convert a Project model to a dictionary."""
    return {
        "id": project.id,
        "portfolio_id": project.portfolio_id,
        "github_repo_id": project.github_repo_id,
        "name": project.name,
        "description": project.description,
        "url": project.url,
        "language": project.language,
        "stars": project.stars,
        "is_visible": project.is_visible,
        "order_index": project.order_index,
        "created_at": project.created_at,
        "updated_at": project.updated_at,
    }


def _get_project(session: Session, portfolio_id: str, project_id: str) -> Project:
    """Get a project by ID, ensuring it belongs to the portfolio."""
    require_uuid(project_id)
    project = (
        session.query(Project)
        .filter(Project.id == project_id, Project.portfolio_id == portfolio_id)
        .first()
    )
    if project is None:
        raise NotFound("Project not found")
    return project


def list_projects(user_id: str, portfolio_id: str) -> list[dict]:
    """List all projects of a portfolio, hidden ones included, in display order."""
    with get_session() as session:
        get_owned_portfolio(session, user_id, portfolio_id)
        projects = (
            session.query(Project)
            .filter(Project.portfolio_id == portfolio_id)
            .order_by(Project.order_index, Project.created_at)
            .all()
        )
        return [project_to_dict(p) for p in projects]


def create_project(user_id: str, portfolio_id: str, data: Mapping[str, Any]) -> dict:
    """Add a manual project at the end of the portfolio's project list.

    Args:
        user_id: Authenticated caller.
        portfolio_id: Target portfolio.
        data: ``name`` (required), optional ``description``, ``url``, ``language``.

    Returns:
        Dictionary with the created project.
    """
    with get_session() as session:
        get_owned_portfolio(session, user_id, portfolio_id)

        name = clean_required_text(data.get("name"), "Project name", MAX_NAME_LENGTH)
        description = clean_optional_text(
            data.get("description"), "Description", MAX_DESCRIPTION_LENGTH
        )
        url = clean_optional_url(data.get("url"), "URL", MAX_URL_LENGTH)
        language = clean_optional_text(data.get("language"), "Language", MAX_LANGUAGE_LENGTH)

        project = Project(
            portfolio_id=portfolio_id,
            github_repo_id=None,
            name=name,
            description=description,
            url=url,
            language=language,
            stars=0,
            is_visible=True,
            order_index=next_order_index(session, Project, portfolio_id),
        )
        session.add(project)
        session.flush()

        return project_to_dict(project)


def update_project(
    user_id: str, portfolio_id: str, project_id: str, data: Mapping[str, Any]
) -> dict:
    """Update a project. Only keys present in ``data`` are touched.

    Accepted keys: ``is_visible``, ``name``, ``description``, ``url`` (an
    empty URL clears it).

    Raises:
        ValidationFailed: On invalid values or when no accepted key is present.
    """
    with get_session() as session:
        get_owned_portfolio(session, user_id, portfolio_id)
        project = _get_project(session, portfolio_id, project_id)

        updates: dict[str, Any] = {}
        if "is_visible" in data:
            if not isinstance(data["is_visible"], bool):
                raise ValidationFailed("isVisible must be a boolean")
            updates["is_visible"] = data["is_visible"]
        if "name" in data:
            updates["name"] = clean_required_text(data["name"], "Project name", MAX_NAME_LENGTH)
        if "description" in data:
            updates["description"] = clean_optional_text(
                data["description"], "Description", MAX_DESCRIPTION_LENGTH
            )
        if "url" in data:
            updates["url"] = clean_optional_url(data["url"], "URL", MAX_URL_LENGTH)

        if not updates:
            raise ValidationFailed("No valid fields to update")

        for field, value in updates.items():
            setattr(project, field, value)
        session.flush()

        return project_to_dict(project)


def delete_project(user_id: str, portfolio_id: str, project_id: str) -> None:
    """Delete a project. Remaining projects keep their indices."""
    with get_session() as session:
        get_owned_portfolio(session, user_id, portfolio_id)
        project = _get_project(session, portfolio_id, project_id)
        session.delete(project)
