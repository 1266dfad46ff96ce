"""User routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from portfolio_builder.api.dependencies import get_current_user_id
from portfolio_builder.api.schemas.users import (
    GitHubLoginRequest,
    UserResponse,
    UserUpdateRequest,
)
from portfolio_builder.services.users import (
    delete_user,
    get_user,
    update_user,
    upsert_github_user,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/login", response_model=UserResponse)
def login_endpoint(data: GitHubLoginRequest) -> UserResponse:
    """Create or refresh the user for a GitHub profile from the OAuth callback."""
    return UserResponse(**upsert_github_user(data.model_dump()))


@router.get("/me", response_model=UserResponse)
def get_me(
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> UserResponse:
    """Return the authenticated user's profile."""
    return UserResponse(**get_user(user_id))


@router.put("/me", response_model=UserResponse)
def update_me(
    data: UserUpdateRequest,
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> UserResponse:
    """Update the profile. Only provided fields are updated."""
    return UserResponse(**update_user(user_id, data.model_dump(exclude_unset=True)))


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
def delete_me(
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> None:
    """Delete the account and all of its portfolios."""
    delete_user(user_id)
