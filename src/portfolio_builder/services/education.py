"""Education service for managing the education section of a portfolio."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from portfolio_builder.data.db import get_session
from portfolio_builder.data.models import Education
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
    "EDUCATION_FIELDS",
    "create_education",
    "delete_education",
    "education_to_dict",
    "list_education",
    "update_education",
]

EDUCATION_FIELDS = (
    TextField("school", "School name", 100, required=True),
    TextField("degree", "Degree", 100, required=True),
    TextField("field_of_study", "Field of study", 100),
    TextField("description", "Description", 1000),
)


def education_to_dict(education: Education) -> dict:
    """Convert an Education model to a dictionary.

    Args:
        education: Education model instance

    Returns:
        Dictionary with education data
    """
    return {
        "id": education.id,
        "portfolio_id": education.portfolio_id,
        "school": education.school,
        "degree": education.degree,
        "field_of_study": education.field_of_study,
        "start_date": education.start_date,
        "end_date": education.end_date,
        "is_current": education.is_current,
        "description": education.description,
        "order_index": education.order_index,
        "created_at": education.created_at,
        "updated_at": education.updated_at,
    }


def _get_education(session: Session, portfolio_id: str, education_id: str) -> Education:
    """Get an education entry by ID, ensuring it belongs to the portfolio."""
    require_uuid(education_id)
    education = (
        session.query(Education)
        .filter(Education.id == education_id, Education.portfolio_id == portfolio_id)
        .first()
    )
    if education is None:
        raise NotFound("Education not found")
    return education


def list_education(user_id: str, portfolio_id: str) -> list[dict]:
    """List a portfolio's education entries in display order."""
    with get_session() as session:
        get_owned_portfolio(session, user_id, portfolio_id)
        entries = (
            session.query(Education)
            .filter(Education.portfolio_id == portfolio_id)
            .order_by(Education.order_index, Education.start_date.desc())
            .all()
        )
        return [education_to_dict(e) for e in entries]


def create_education(user_id: str, portfolio_id: str, data: Mapping[str, Any]) -> dict:
    """Create an education entry at the end of the list.

    ``school``, ``degree`` and ``start_date`` are required.
    """
    with get_session() as session:
        get_owned_portfolio(session, user_id, portfolio_id)
        values = clean_entry_for_create(data, EDUCATION_FIELDS)

        education = Education(
            portfolio_id=portfolio_id,
            order_index=next_order_index(session, Education, portfolio_id),
            **values,
        )
        session.add(education)
        session.flush()

        return education_to_dict(education)


def update_education(
    user_id: str, portfolio_id: str, education_id: str, data: Mapping[str, Any]
) -> dict:
    """Partially update an education entry.

    Raises:
        NotFound: If the entry is not part of the portfolio.
        ValidationFailed: On invalid values or when nothing would change.
    """
    with get_session() as session:
        get_owned_portfolio(session, user_id, portfolio_id)
        education = _get_education(session, portfolio_id, education_id)

        updates = clean_entry_for_update(
            data,
            EDUCATION_FIELDS,
            {
                "start_date": education.start_date,
                "end_date": education.end_date,
                "is_current": education.is_current,
            },
        )
        for field, value in updates.items():
            setattr(education, field, value)
        session.flush()

        return education_to_dict(education)


def delete_education(user_id: str, portfolio_id: str, education_id: str) -> None:
    """Delete an education entry."""
    with get_session() as session:
        get_owned_portfolio(session, user_id, portfolio_id)
        education = _get_education(session, portfolio_id, education_id)
        session.delete(education)
