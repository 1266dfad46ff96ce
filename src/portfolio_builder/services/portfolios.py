"""Portfolio service: provisioning, settings, publishing and public lookup.

Slugs are globally unique. New portfolios get a slug derived from the
owner's username; because two requests can race for the same candidate,
creation retries a bounded number of times on a uniqueness violation and
then fails closed with :class:`SlugAllocationError`.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from portfolio_builder.constants import DEFAULT_TEMPLATE, is_allowed_template
from portfolio_builder.data.db import get_session, is_unique_violation
from portfolio_builder.data.models import Education, Experience, Portfolio, Project, User
from portfolio_builder.services.education import education_to_dict
from portfolio_builder.services.errors import NotFound, SlugAllocationError, ValidationFailed
from portfolio_builder.services.experiences import experience_to_dict
from portfolio_builder.services.ownership import get_owned_portfolio
from portfolio_builder.services.projects import project_to_dict
from portfolio_builder.services.validation import clean_optional_text, clean_required_text

logger = logging.getLogger(__name__)

__all__ = [
    "MAX_SLUG_RETRIES",
    "create_portfolio",
    "delete_portfolio",
    "get_public_portfolio",
    "is_valid_slug",
    "list_portfolios",
    "publish_portfolio",
    "sanitize_slug",
    "update_portfolio",
]

MAX_SLUG_RETRIES = 5

SLUG_MIN_LENGTH = 3
SLUG_MAX_LENGTH = 50
# Room left at the end of a base slug for a "-NN" collision suffix
_SLUG_BASE_MAX_LENGTH = SLUG_MAX_LENGTH - 8
SLUG_REGEX = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

MAX_TITLE = 100
MAX_SUBTITLE = 150
MAX_DESCRIPTION = 1000


def _portfolio_to_dict(portfolio: Portfolio) -> dict:
    """Convert a Portfolio model to a dictionary."""
    return {
        "id": portfolio.id,
        "user_id": portfolio.user_id,
        "title": portfolio.title,
        "subtitle": portfolio.subtitle,
        "description": portfolio.description,
        "slug": portfolio.slug,
        "template": portfolio.template,
        "is_published": portfolio.is_published,
        "created_at": portfolio.created_at,
        "updated_at": portfolio.updated_at,
    }


def sanitize_slug(username: str | None) -> str:
    """Derive a base slug from a username.

    Lower-cases, collapses anything outside ``[a-z0-9]`` into single hyphens,
    trims hyphens, pads short results and falls back to ``portfolio``.
    """
    sanitized = re.sub(r"[^a-z0-9]+", "-", (username or "").lower()).strip("-")
    if not sanitized:
        return "portfolio"
    if len(sanitized) < SLUG_MIN_LENGTH:
        sanitized = f"{sanitized}-portfolio"
    return sanitized[:_SLUG_BASE_MAX_LENGTH].rstrip("-")


def is_valid_slug(slug: str) -> bool:
    """Return True for 3-50 chars of lowercase letters, digits and single inner hyphens."""
    return SLUG_MIN_LENGTH <= len(slug) <= SLUG_MAX_LENGTH and SLUG_REGEX.match(slug) is not None


def _candidate_slug(base_slug: str, taken_count: int) -> str:
    return f"{base_slug}-{taken_count + 1}" if taken_count > 0 else base_slug


def create_portfolio(user_id: str) -> dict:
    """Create a new unpublished portfolio with a slug derived from the username.

    Each attempt runs in its own transaction. Only uniqueness violations are
    retried, each time with a fresh candidate; anything else propagates.

    Raises:
        NotFound: If the user does not exist.
        SlugAllocationError: If no free slug was found in MAX_SLUG_RETRIES attempts.
    """
    for attempt in range(MAX_SLUG_RETRIES):
        try:
            with get_session() as session:
                user = session.query(User).filter(User.id == user_id).first()
                if user is None:
                    raise NotFound("User not found")

                owned = (
                    session.query(func.count(Portfolio.id))
                    .filter(Portfolio.user_id == user_id)
                    .scalar()
                )
                slug = _candidate_slug(sanitize_slug(user.username), (owned or 0) + attempt)

                portfolio = Portfolio(
                    user_id=user_id,
                    slug=slug,
                    title="My Portfolio",
                    template=DEFAULT_TEMPLATE.value,
                    is_published=False,
                )
                session.add(portfolio)
                session.flush()
                result = _portfolio_to_dict(portfolio)
        except IntegrityError as exc:
            if not is_unique_violation(exc):
                raise
            logger.warning(
                "Slug already taken for user %s (attempt %d/%d)",
                user_id,
                attempt + 1,
                MAX_SLUG_RETRIES,
            )
            continue

        logger.info("Created portfolio %s with slug %r for user %s", result["id"], slug, user_id)
        return result

    raise SlugAllocationError("Failed to generate unique slug after multiple attempts")


def list_portfolios(user_id: str) -> list[dict]:
    """List the caller's portfolios, newest first.

    A user with no portfolio yet gets one provisioned on first access.
    """
    with get_session() as session:
        portfolios = (
            session.query(Portfolio)
            .filter(Portfolio.user_id == user_id)
            .order_by(Portfolio.created_at.desc())
            .all()
        )
        results = [_portfolio_to_dict(p) for p in portfolios]

    if not results:
        results = [create_portfolio(user_id)]
    return results


def update_portfolio(user_id: str, portfolio_id: str, data: Mapping[str, Any]) -> dict:
    """Update portfolio settings. Only keys present in ``data`` are touched.

    Accepted keys: ``title``, ``subtitle``, ``description``, ``template``,
    ``slug``. The slug of a published portfolio cannot change.
    """
    with get_session() as session:
        portfolio = get_owned_portfolio(session, user_id, portfolio_id, hide_foreign=True)

        updates: dict[str, Any] = {}
        if "title" in data:
            updates["title"] = clean_required_text(data["title"], "Title", MAX_TITLE)
        if "subtitle" in data:
            updates["subtitle"] = clean_optional_text(data["subtitle"], "Subtitle", MAX_SUBTITLE)
        if "description" in data:
            updates["description"] = clean_optional_text(
                data["description"], "Description", MAX_DESCRIPTION
            )
        if "template" in data:
            template = data["template"]
            if not isinstance(template, str) or not is_allowed_template(template):
                raise ValidationFailed(f"Unknown template: {template}")
            updates["template"] = template
        if "slug" in data:
            slug = data["slug"]
            if not isinstance(slug, str) or not is_valid_slug(slug.strip()):
                raise ValidationFailed(
                    "Slug must be 3-50 characters of lowercase letters, numbers and hyphens"
                )
            slug = slug.strip()
            if slug != portfolio.slug:
                if portfolio.is_published:
                    raise ValidationFailed("Cannot change the slug of a published portfolio")
                updates["slug"] = slug

        if not updates:
            raise ValidationFailed("No valid fields to update")

        for field, value in updates.items():
            setattr(portfolio, field, value)

        try:
            session.flush()
        except IntegrityError as exc:
            raise ValidationFailed("Slug is already taken") from exc

        return _portfolio_to_dict(portfolio)


def publish_portfolio(user_id: str, portfolio_id: str) -> dict:
    """Publish a portfolio. Publishing an already-published portfolio is a no-op."""
    with get_session() as session:
        portfolio = get_owned_portfolio(session, user_id, portfolio_id, hide_foreign=True)
        if not portfolio.is_published:
            portfolio.is_published = True
            session.flush()
            logger.info("Published portfolio %s at /%s", portfolio.id, portfolio.slug)
        return _portfolio_to_dict(portfolio)


def delete_portfolio(user_id: str, portfolio_id: str) -> None:
    """Delete a portfolio with all of its projects, entries and view events."""
    with get_session() as session:
        portfolio = get_owned_portfolio(session, user_id, portfolio_id, hide_foreign=True)
        session.delete(portfolio)


def get_public_portfolio(slug: str) -> dict:
    """Return everything the public page for ``slug`` shows.

    Only published portfolios are visible; hidden projects are left out.

    Raises:
        NotFound: If no published portfolio has this slug.
    """
    with get_session() as session:
        portfolio = (
            session.query(Portfolio)
            .filter(Portfolio.slug == slug, Portfolio.is_published.is_(True))
            .first()
        )
        if portfolio is None:
            raise NotFound("Portfolio not found")

        user = session.query(User).filter(User.id == portfolio.user_id).first()
        projects = (
            session.query(Project)
            .filter(Project.portfolio_id == portfolio.id, Project.is_visible.is_(True))
            .order_by(Project.order_index, Project.created_at)
            .all()
        )
        experiences = (
            session.query(Experience)
            .filter(Experience.portfolio_id == portfolio.id)
            .order_by(Experience.order_index, Experience.start_date.desc())
            .all()
        )
        education = (
            session.query(Education)
            .filter(Education.portfolio_id == portfolio.id)
            .order_by(Education.order_index, Education.start_date.desc())
            .all()
        )

        return {
            "portfolio": {
                "id": portfolio.id,
                "title": portfolio.title,
                "subtitle": portfolio.subtitle,
                "description": portfolio.description,
                "slug": portfolio.slug,
                "template": portfolio.template,
            },
            "user": (
                {
                    "name": user.name,
                    "title": user.title,
                    "bio": user.bio,
                    "avatar_url": user.avatar_url,
                    "social_links": user.social_links or {},
                }
                if user
                else None
            ),
            "projects": [project_to_dict(p) for p in projects],
            "experiences": [experience_to_dict(e) for e in experiences],
            "education": [education_to_dict(e) for e in education],
        }
