"""Display ordering for a portfolio's child collections.

Projects, experiences and education entries each carry an ``order_index``
scoped to their portfolio. :func:`reorder_records` applies a caller-supplied
set of ``{id, orderIndex}`` pairs as a single transaction after validating the
whole request; :func:`next_order_index` picks the slot for new rows.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from portfolio_builder.data.db import get_session
from portfolio_builder.data.models import Education, Experience, Project
from portfolio_builder.services.errors import ValidationFailed
from portfolio_builder.services.ownership import get_owned_portfolio
from portfolio_builder.services.validation import is_order_index, is_valid_uuid

logger = logging.getLogger(__name__)

__all__ = ["RecordType", "next_order_index", "reorder_records"]


class RecordType(StrEnum):
    """Child collections that support user-defined ordering."""

    PROJECTS = "projects"
    EXPERIENCES = "experiences"
    EDUCATION = "education"


_MODELS: dict[RecordType, type[Project] | type[Experience] | type[Education]] = {
    RecordType.PROJECTS: Project,
    RecordType.EXPERIENCES: Experience,
    RecordType.EDUCATION: Education,
}

_LABELS = {
    RecordType.PROJECTS: "project",
    RecordType.EXPERIENCES: "experience",
    RecordType.EDUCATION: "education",
}


def next_order_index(
    session: Session, model: type[Project] | type[Experience] | type[Education], portfolio_id: str
) -> int:
    """Return one past the highest order_index in the portfolio (0 when empty)."""
    current_max = session.execute(
        select(func.max(model.order_index)).where(model.portfolio_id == portfolio_id)
    ).scalar()
    return 0 if current_max is None else current_max + 1


def _validate_orders(orders: Any, label: str) -> dict[str, int]:
    """Check the shape of a reorder request and return ``{id: order_index}``.

    Membership in the portfolio is checked separately against the database.
    """
    if not isinstance(orders, Sequence) or isinstance(orders, str) or not orders:
        raise ValidationFailed("Orders array is required")

    pairs: list[tuple[str, int]] = []
    for entry in orders:
        if not isinstance(entry, Mapping):
            raise ValidationFailed("Each order entry must be an object with id and orderIndex")
        record_id = entry.get("id")
        order_index = entry.get("orderIndex", entry.get("order_index"))
        if not is_valid_uuid(record_id):
            raise ValidationFailed(f"Invalid {label} ID format: {record_id}")
        if not is_order_index(order_index):
            raise ValidationFailed(f"Invalid orderIndex for {label} {record_id}")
        pairs.append((record_id, order_index))

    updates = dict(pairs)
    if len(updates) != len(pairs):
        raise ValidationFailed(f"Duplicate {label} IDs in request")
    return updates


def reorder_records(
    user_id: str,
    portfolio_id: str,
    record_type: RecordType | str,
    orders: Sequence[Mapping[str, Any]],
) -> int:
    """Apply new order indices to records of one type within a portfolio.

    Every check (ownership, request shape, duplicate ids, membership) runs
    before the first write; the updates then share one transaction, so either
    all listed rows move or none do. The request may cover a subset of the
    portfolio's records and need not use contiguous indices.

    Args:
        user_id: Authenticated caller; must own the portfolio.
        portfolio_id: Portfolio whose records are reordered.
        record_type: Which child collection to reorder.
        orders: ``[{"id": ..., "orderIndex": ...}, ...]``.

    Returns:
        Number of rows updated.

    Raises:
        NotFound: Portfolio does not exist.
        AccessDenied: Portfolio belongs to another user.
        ValidationFailed: Any entry is malformed, duplicated, or not part of
            this portfolio.
    """
    record_type = RecordType(record_type)
    model = _MODELS[record_type]
    label = _LABELS[record_type]

    with get_session() as session:
        get_owned_portfolio(session, user_id, portfolio_id)
        updates = _validate_orders(orders, label)

        existing_ids = set(
            session.execute(select(model.id).where(model.portfolio_id == portfolio_id)).scalars()
        )
        for record_id in updates:
            if record_id not in existing_ids:
                raise ValidationFailed(
                    f"{label.capitalize()} {record_id} does not belong to this portfolio"
                )

        now = datetime.now(UTC)
        for record_id, order_index in updates.items():
            session.execute(
                update(model)
                .where(model.id == record_id, model.portfolio_id == portfolio_id)
                .values(order_index=order_index, updated_at=now)
            )

    logger.info("Reordered %d %s rows in portfolio %s", len(updates), record_type, portfolio_id)
    return len(updates)
