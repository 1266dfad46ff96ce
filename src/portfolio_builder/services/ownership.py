"""Portfolio ownership checks.

The portfolio row is the only authority for access to its nested
collections. Every service call that reads or writes a project, experience,
education entry or analytics for a portfolio goes through
:func:`get_owned_portfolio` inside its own session first.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from portfolio_builder.data.models import Portfolio
from portfolio_builder.services.errors import AccessDenied, NotFound
from portfolio_builder.services.validation import require_uuid


def get_owned_portfolio(
    session: Session,
    user_id: str,
    portfolio_id: str,
    *,
    hide_foreign: bool = False,
) -> Portfolio:
    """Load a portfolio and verify ``user_id`` owns it.

    Args:
        session: Active database session.
        user_id: Authenticated caller.
        portfolio_id: Portfolio to load.
        hide_foreign: Report another user's portfolio as missing (404)
            instead of forbidden (403), so its existence is not confirmed.

    Returns:
        The portfolio row.

    Raises:
        ValidationFailed: If ``portfolio_id`` is not a UUID.
        NotFound: If the portfolio does not exist.
        AccessDenied: If it belongs to someone else and ``hide_foreign`` is False.
    """
    require_uuid(portfolio_id, "Invalid portfolio ID format")

    portfolio = session.query(Portfolio).filter(Portfolio.id == portfolio_id).first()
    if portfolio is None:
        raise NotFound("Portfolio not found")

    if portfolio.user_id != user_id:
        if hide_foreign:
            raise NotFound("Portfolio not found")
        raise AccessDenied("Access denied")

    return portfolio
