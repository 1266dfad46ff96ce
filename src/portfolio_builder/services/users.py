"""User profile service.

Accounts are keyed by GitHub identity. The OAuth hand-off calls
:func:`upsert_github_user`; everything else operates on the internal user id.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypedDict

from portfolio_builder.data.db import get_session
from portfolio_builder.data.models import User
from portfolio_builder.services.errors import NotFound, ValidationFailed
from portfolio_builder.services.validation import (
    clean_optional_text,
    clean_optional_url,
    clean_required_text,
)

logger = logging.getLogger(__name__)

__all__ = [
    "SOCIAL_NETWORKS",
    "GitHubProfile",
    "delete_user",
    "get_user",
    "update_user",
    "upsert_github_user",
]

MAX_NAME_LENGTH = 100
MAX_TITLE_LENGTH = 100
MAX_BIO_LENGTH = 1000
MAX_LINK_LENGTH = 2048

SOCIAL_NETWORKS = ("github", "linkedin", "twitter", "website")


class GitHubProfile(TypedDict, total=False):
    """Identity fields handed over by the OAuth callback."""

    github_id: str | int
    login: str
    name: str | None
    email: str | None
    avatar_url: str | None


def _user_to_dict(user: User) -> dict:
    """Convert a User model to a dictionary."""
    return {
        "id": user.id,
        "github_id": user.github_id,
        "username": user.username,
        "email": user.email,
        "name": user.name,
        "title": user.title,
        "bio": user.bio,
        "avatar_url": user.avatar_url,
        "social_links": user.social_links or {},
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def _clean_social_links(value: Any) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValidationFailed("socialLinks must be an object")

    links: dict[str, str] = {}
    for network, url in value.items():
        if network not in SOCIAL_NETWORKS:
            raise ValidationFailed(f"Unknown social network: {network}")
        cleaned = clean_optional_url(url, f"{network} link", MAX_LINK_LENGTH)
        if cleaned is not None:
            links[network] = cleaned
    return links


def upsert_github_user(profile: GitHubProfile) -> dict:
    """Create the user for a GitHub identity, or refresh its identity fields.

    Profile fields the user edits themselves (title, bio, social links) are
    never overwritten here. A display name is only filled in when empty.
    """
    github_id = profile.get("github_id")
    if github_id is None or github_id == "":
        raise ValidationFailed("githubId is required")
    login = clean_required_text(profile.get("login"), "login", 128)

    with get_session() as session:
        user = session.query(User).filter(User.github_id == str(github_id)).first()
        if user is None:
            user = User(github_id=str(github_id), name=profile.get("name") or login)
            session.add(user)
            logger.info("Creating user for GitHub account %s", login)
        elif not user.name:
            user.name = profile.get("name") or login

        user.username = login
        user.email = profile.get("email")
        user.avatar_url = profile.get("avatar_url")
        session.flush()

        return _user_to_dict(user)


def get_user(user_id: str) -> dict:
    """Return the user's profile.

    Raises:
        NotFound: If the user does not exist.
    """
    with get_session() as session:
        user = session.get(User, user_id)
        if user is None:
            raise NotFound("User not found")
        return _user_to_dict(user)


def update_user(user_id: str, data: Mapping[str, Any]) -> dict:
    """Update editable profile fields. Only keys present in ``data`` are touched.

    Accepted keys: ``name``, ``title``, ``bio``, ``social_links``.
    """
    updates: dict[str, Any] = {}
    if "name" in data:
        updates["name"] = clean_optional_text(data["name"], "Name", MAX_NAME_LENGTH)
    if "title" in data:
        updates["title"] = clean_optional_text(data["title"], "Title", MAX_TITLE_LENGTH)
    if "bio" in data:
        updates["bio"] = clean_optional_text(data["bio"], "Bio", MAX_BIO_LENGTH)
    if "social_links" in data:
        updates["social_links"] = _clean_social_links(data["social_links"])

    if not updates:
        raise ValidationFailed("No valid fields to update")

    with get_session() as session:
        user = session.get(User, user_id)
        if user is None:
            raise NotFound("User not found")
        for field, value in updates.items():
            setattr(user, field, value)
        session.flush()
        return _user_to_dict(user)


def delete_user(user_id: str) -> None:
    """Delete the user and, through cascades, all of their portfolios."""
    with get_session() as session:
        user = session.get(User, user_id)
        if user is None:
            raise NotFound("User not found")
        session.delete(user)
    logger.info("Deleted user %s", user_id)
