"""Portfolio routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from portfolio_builder.api.dependencies import get_current_user_id
from portfolio_builder.api.schemas.portfolios import (
    PortfolioResponse,
    PortfolioUpdateRequest,
    TemplateResponse,
)
from portfolio_builder.constants import TEMPLATES
from portfolio_builder.services.portfolios import (
    create_portfolio,
    delete_portfolio,
    list_portfolios,
    publish_portfolio,
    update_portfolio,
)

router = APIRouter(prefix="/portfolios", tags=["portfolios"])

templates_router = APIRouter(prefix="/templates", tags=["portfolios"])


@router.get("", response_model=list[PortfolioResponse])
def list_portfolios_endpoint(
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> list[PortfolioResponse]:
    """List the caller's portfolios, creating the first one if none exist."""
    return [PortfolioResponse(**p) for p in list_portfolios(user_id)]


@router.post("", response_model=PortfolioResponse, status_code=status.HTTP_201_CREATED)
def create_portfolio_endpoint(
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> PortfolioResponse:
    """Create an additional unpublished portfolio."""
    return PortfolioResponse(**create_portfolio(user_id))


@router.put("/{portfolio_id}", response_model=PortfolioResponse)
def update_portfolio_endpoint(
    portfolio_id: Annotated[str, Path(description="Portfolio ID")],
    data: PortfolioUpdateRequest,
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> PortfolioResponse:
    """Update portfolio settings. Only provided fields are updated."""
    result = update_portfolio(user_id, portfolio_id, data.model_dump(exclude_unset=True))
    return PortfolioResponse(**result)


@router.post("/{portfolio_id}/publish", response_model=PortfolioResponse)
def publish_portfolio_endpoint(
    portfolio_id: Annotated[str, Path(description="Portfolio ID")],
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> PortfolioResponse:
    """Publish a portfolio at its slug. Publishing twice is harmless."""
    return PortfolioResponse(**publish_portfolio(user_id, portfolio_id))


@router.delete("/{portfolio_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_portfolio_endpoint(
    portfolio_id: Annotated[str, Path(description="Portfolio ID")],
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> None:
    """Delete a portfolio and everything in it."""
    delete_portfolio(user_id, portfolio_id)


@templates_router.get("", response_model=list[TemplateResponse])
def list_templates() -> list[TemplateResponse]:
    """List the templates a portfolio can use."""
    return [
        TemplateResponse(
            id=definition.template.value,
            name=definition.name,
            description=definition.description,
            thumbnail=definition.thumbnail,
        )
        for definition in TEMPLATES.values()
    ]
