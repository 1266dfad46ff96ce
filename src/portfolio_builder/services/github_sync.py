"""GitHub repository sync for a portfolio's project list.

The sync pulls the caller's owned repositories once and reconciles them
against the portfolio's projects by ``github_repo_id``:

- a repository that already has a project refreshes its name, description,
  url, language and stars, while keeping visibility and position
- a new repository is appended after the current highest ``order_index``
  and is visible by default
- projects created by hand (no ``github_repo_id``) are never touched
- a matched project deleted while the sync runs is imported again

Each row is written in its own transaction, so a failure midway keeps the
rows that were already reconciled. The ``(portfolio_id, github_repo_id)``
unique constraint guards against concurrent syncs. An insert that loses
the race is turned into an update of the row that won.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any, TypedDict

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from portfolio_builder.data.db import get_session, is_unique_violation
from portfolio_builder.data.models import Project
from portfolio_builder.services.errors import (
    AccessDenied,
    ExternalAuthError,
    RateLimited,
    SyncFailed,
)
from portfolio_builder.services.github_client import GitHubAPIError, GitHubClient
from portfolio_builder.services.ownership import get_owned_portfolio

logger = logging.getLogger(__name__)

__all__ = ["SyncResult", "sync_github_projects"]


class SyncResult(TypedDict):
    """Outcome of one sync run."""

    success: bool
    imported: int
    updated: int
    total: int


def _repo_fields(repo: Mapping[str, Any]) -> dict[str, Any]:
    """Project columns GitHub is the source of truth for."""
    return {
        "name": repo.get("name") or "",
        "description": repo.get("description"),
        "url": repo.get("html_url"),
        "language": repo.get("language"),
        "stars": repo.get("stargazers_count") or 0,
    }


def _translate_github_error(exc: GitHubAPIError) -> Exception:
    if exc.status_code == 401:
        return ExternalAuthError("GitHub token expired. Please re-login.")
    if exc.rate_limited:
        return RateLimited("GitHub API rate limit exceeded. Please try again later.")
    if exc.status_code == 403:
        return AccessDenied(
            "Insufficient permissions. Please re-login to grant repository access."
        )
    return SyncFailed("Failed to sync repositories")


def _update_project(project_id: str, fields: Mapping[str, Any]) -> bool:
    """Refresh one project; False if it was deleted since the sync started."""
    with get_session() as session:
        project = session.get(Project, project_id)
        if project is None:
            return False
        for key, value in fields.items():
            setattr(project, key, value)
        project.updated_at = datetime.now(UTC)
    return True


def _update_by_repo_id(portfolio_id: str, repo_id: str, fields: Mapping[str, Any]) -> None:
    with get_session() as session:
        project = (
            session.query(Project)
            .filter(Project.portfolio_id == portfolio_id, Project.github_repo_id == repo_id)
            .one()
        )
        for key, value in fields.items():
            setattr(project, key, value)
        project.updated_at = datetime.now(UTC)


def _insert_project(
    portfolio_id: str, repo_id: str, fields: Mapping[str, Any], order_index: int
) -> None:
    with get_session() as session:
        session.add(
            Project(
                portfolio_id=portfolio_id,
                github_repo_id=repo_id,
                is_visible=True,
                order_index=order_index,
                **fields,
            )
        )


def sync_github_projects(
    user_id: str,
    portfolio_id: str,
    token: str | None,
    client_factory: Callable[[str], GitHubClient] = GitHubClient,
) -> SyncResult:
    """Import or refresh the caller's GitHub repositories as portfolio projects.

    Args:
        user_id: Authenticated caller; must own the portfolio.
        portfolio_id: Portfolio to sync into.
        token: GitHub OAuth token of the caller.
        client_factory: Builds a :class:`GitHubClient` from a token.

    Returns:
        ``{"success": True, "imported": n, "updated": m, "total": n + m}``.

    Raises:
        NotFound / AccessDenied: Portfolio missing or not owned.
        ExternalAuthError: Token missing or rejected by GitHub.
        RateLimited: GitHub rate limit hit.
        AccessDenied: Token lacks repository scope.
        SyncFailed: Any other upstream failure.
    """
    with get_session() as session:
        get_owned_portfolio(session, user_id, portfolio_id)

    if not token:
        raise ExternalAuthError("GitHub token not found. Please re-login with GitHub.")

    try:
        with client_factory(token) as client:
            repos = client.list_owned_repositories()
    except GitHubAPIError as exc:
        logger.warning("GitHub sync failed for portfolio %s: %s", portfolio_id, exc)
        raise _translate_github_error(exc) from exc

    with get_session() as session:
        existing: dict[str, str] = {
            repo_id: project_id
            for project_id, repo_id in session.execute(
                select(Project.id, Project.github_repo_id).where(
                    Project.portfolio_id == portfolio_id,
                    Project.github_repo_id.is_not(None),
                )
            )
        }
        max_order = session.execute(
            select(func.max(Project.order_index)).where(Project.portfolio_id == portfolio_id)
        ).scalar()
    next_index = -1 if max_order is None else max_order

    imported = 0
    updated = 0
    for repo in repos:
        repo_id = str(repo["id"])
        fields = _repo_fields(repo)

        project_id = existing.get(repo_id)
        if project_id is not None:
            if _update_project(project_id, fields):
                updated += 1
                continue
            logger.info(
                "Project %s was deleted during sync of portfolio %s; re-importing",
                project_id,
                portfolio_id,
            )

        next_index += 1
        try:
            _insert_project(portfolio_id, repo_id, fields, next_index)
        except IntegrityError as exc:
            if not is_unique_violation(exc):
                raise
            logger.info(
                "Repository %s was imported concurrently into portfolio %s; updating instead",
                repo_id,
                portfolio_id,
            )
            _update_by_repo_id(portfolio_id, repo_id, fields)
            updated += 1
        else:
            imported += 1

    logger.info(
        "Synced portfolio %s: %d imported, %d updated", portfolio_id, imported, updated
    )
    return {
        "success": True,
        "imported": imported,
        "updated": updated,
        "total": imported + updated,
    }
