"""GitHub sync route for the API."""

from __future__ import annotations

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Path

from portfolio_builder.api.dependencies import (
    get_current_user_id,
    get_github_client_factory,
    get_github_token,
)
from portfolio_builder.api.schemas.projects import GitHubSyncResponse
from portfolio_builder.services.github_client import GitHubClient
from portfolio_builder.services.github_sync import sync_github_projects

router = APIRouter(prefix="/portfolios/{portfolio_id}/github", tags=["github"])


@router.post("/sync", response_model=GitHubSyncResponse)
def sync_github_endpoint(
    portfolio_id: Annotated[str, Path(description="Portfolio ID")],
    user_id: Annotated[str, Depends(get_current_user_id)],
    token: Annotated[str | None, Depends(get_github_token)],
    client_factory: Annotated[Callable[[str], GitHubClient], Depends(get_github_client_factory)],
) -> GitHubSyncResponse:
    """Import new repositories and refresh already imported ones."""
    result = sync_github_projects(user_id, portfolio_id, token, client_factory)
    return GitHubSyncResponse(**result)
