"""Public portfolio page route (no authentication)."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Path

from portfolio_builder.api.schemas.public import PublicPortfolioResponse
from portfolio_builder.services.portfolios import get_public_portfolio

router = APIRouter(prefix="/public", tags=["public"])


@router.get("/{slug}", response_model=PublicPortfolioResponse)
def get_public_portfolio_endpoint(
    slug: Annotated[str, Path(description="Portfolio slug")],
) -> PublicPortfolioResponse:
    """Return a published portfolio with its visible projects and timeline."""
    return PublicPortfolioResponse(**get_public_portfolio(slug))
