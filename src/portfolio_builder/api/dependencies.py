"""Shared dependencies for API routes."""

from __future__ import annotations

from collections.abc import Callable
from typing import Annotated

from fastapi import Header, HTTPException, status

from portfolio_builder.services.github_client import GitHubClient


def get_current_user_id(
    x_user_id: Annotated[
        str | None,
        Header(
            description=(
                "Authenticated user ID. In production, this is injected by the "
                "session layer after GitHub OAuth login."
            )
        ),
    ] = None,
) -> str:
    """Get the current user ID from request context.

    NOTE: The session layer lives outside this service; it forwards the
    authenticated user as the X-User-Id header.

    Args:
        x_user_id: User ID from X-User-Id header.

    Returns:
        str: Authenticated user ID.

    Raises:
        HTTPException: If authentication is missing (401).
    """
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    return x_user_id


def get_github_token(
    x_github_token: Annotated[
        str | None,
        Header(description="GitHub OAuth token stored in the caller's session."),
    ] = None,
) -> str | None:
    """Get the caller's GitHub token, or None when the session has none."""
    return x_github_token or None


def get_github_client_factory() -> Callable[[str], GitHubClient]:
    """Return the factory used to build GitHub clients (overridden in tests)."""
    return GitHubClient
