"""Experience service for the work history section of a portfolio.

Entries are listed in ``order_index`` order (most recent start date first on
ties) and new entries are appended at the end.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from portfolio_builder.data.db import get_session
from portfolio_builder.data.models import Experience
from portfolio_builder.services.errors import NotFound
from portfolio_builder.services.ordering import next_order_index
from portfolio_builder.services.ownership import get_owned_portfolio
from portfolio_builder.services.timeline import (
    TextField,
    clean_entry_for_create,
    clean_entry_for_update,
)
from portfolio_builder.services.validation import require_uuid

logger = logging.getLogger(__name__)

__all__ = [
    "EXPERIENCE_FIELDS",
    "create_experience",
    "delete_experience",
    "experience_to_dict",
    "list_experiences",
    "update_experience",
]

EXPERIENCE_FIELDS = (
    TextField("title", "Job title", 100, required=True),
    TextField("company", "Company name", 100, required=True),
    TextField("location", "Location", 100),
    TextField("description", "Description", 1000),
)


def experience_to_dict(experience: Experience) -> dict:
    """Convert an Experience model to a dictionary."""
    return {
        "id": experience.id,
        "portfolio_id": experience.portfolio_id,
        "title": experience.title,
        "company": experience.company,
        "location": experience.location,
        "start_date": experience.start_date,
        "end_date": experience.end_date,
        "is_current": experience.is_current,
        "description": experience.description,
        "order_index": experience.order_index,
        "created_at": experience.created_at,
        "updated_at": experience.updated_at,
    }


def _get_experience(session: Session, portfolio_id: str, experience_id: str) -> Experience:
    require_uuid(experience_id)
    experience = (
        session.query(Experience)
        .filter(Experience.id == experience_id, Experience.portfolio_id == portfolio_id)
        .first()
    )
    if experience is None:
        raise NotFound("Experience not found")
    return experience


def list_experiences(user_id: str, portfolio_id: str) -> list[dict]:
    """List a portfolio's experiences in display order."""
    with get_session() as session:
        get_owned_portfolio(session, user_id, portfolio_id)
        experiences = (
            session.query(Experience)
            .filter(Experience.portfolio_id == portfolio_id)
            .order_by(Experience.order_index, Experience.start_date.desc())
            .all()
        )
        return [experience_to_dict(e) for e in experiences]


def create_experience(user_id: str, portfolio_id: str, data: Mapping[str, Any]) -> dict:
    """Create an experience entry at the end of the list.

    Args:
        user_id: Authenticated caller.
        portfolio_id: Target portfolio.
        data: ``title``, ``company`` and ``start_date`` are required;
            ``location``, ``end_date``, ``is_current`` and ``description``
            are optional.

    Returns:
        Dictionary with the created experience.
    """
    with get_session() as session:
        get_owned_portfolio(session, user_id, portfolio_id)
        values = clean_entry_for_create(data, EXPERIENCE_FIELDS)

        experience = Experience(
            portfolio_id=portfolio_id,
            order_index=next_order_index(session, Experience, portfolio_id),
            **values,
        )
        session.add(experience)
        session.flush()

        return experience_to_dict(experience)


def update_experience(
    user_id: str, portfolio_id: str, experience_id: str, data: Mapping[str, Any]
) -> dict:
    """Partially update an experience; date rules use the stored values for missing keys."""
    with get_session() as session:
        get_owned_portfolio(session, user_id, portfolio_id)
        experience = _get_experience(session, portfolio_id, experience_id)

        updates = clean_entry_for_update(
            data,
            EXPERIENCE_FIELDS,
            {
                "start_date": experience.start_date,
                "end_date": experience.end_date,
                "is_current": experience.is_current,
            },
        )
        for field, value in updates.items():
            setattr(experience, field, value)
        session.flush()

        return experience_to_dict(experience)


def delete_experience(user_id: str, portfolio_id: str, experience_id: str) -> None:
    with get_session() as session:
        get_owned_portfolio(session, user_id, portfolio_id)
        experience = _get_experience(session, portfolio_id, experience_id)
        session.delete(experience)
    logger.info("Deleted experience %s from portfolio %s", experience_id, portfolio_id)
