"""Experience routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from portfolio_builder.api.dependencies import get_current_user_id
from portfolio_builder.api.schemas.common import ReorderRequest, ReorderResponse
from portfolio_builder.api.schemas.experiences import (
    ExperienceCreateRequest,
    ExperienceResponse,
    ExperienceUpdateRequest,
)
from portfolio_builder.services.experiences import (
    create_experience,
    delete_experience,
    list_experiences,
    update_experience,
)
from portfolio_builder.services.ordering import RecordType, reorder_records

router = APIRouter(prefix="/portfolios/{portfolio_id}/experiences", tags=["experiences"])


@router.get("", response_model=list[ExperienceResponse])
def list_experiences_endpoint(
    portfolio_id: Annotated[str, Path(description="Portfolio ID")],
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> list[ExperienceResponse]:
    """List a portfolio's work experience in display order."""
    return [ExperienceResponse(**e) for e in list_experiences(user_id, portfolio_id)]


@router.post("", response_model=ExperienceResponse, status_code=status.HTTP_201_CREATED)
def create_experience_endpoint(
    portfolio_id: Annotated[str, Path(description="Portfolio ID")],
    data: ExperienceCreateRequest,
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> ExperienceResponse:
    """Create a new experience entry."""
    result = create_experience(user_id, portfolio_id, data.model_dump())
    return ExperienceResponse(**result)


@router.post("/reorder", response_model=ReorderResponse)
def reorder_experiences_endpoint(
    portfolio_id: Annotated[str, Path(description="Portfolio ID")],
    data: ReorderRequest,
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> ReorderResponse:
    """Move experience entries to new positions in one transaction."""
    orders = [entry.model_dump() for entry in data.orders] if data.orders is not None else None
    updated = reorder_records(user_id, portfolio_id, RecordType.EXPERIENCES, orders)
    return ReorderResponse(success=True, updated=updated)


@router.put("/{experience_id}", response_model=ExperienceResponse)
def update_experience_endpoint(
    portfolio_id: Annotated[str, Path(description="Portfolio ID")],
    experience_id: Annotated[str, Path(description="Experience ID")],
    data: ExperienceUpdateRequest,
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> ExperienceResponse:
    """Update an experience entry. Only provided fields are updated."""
    result = update_experience(
        user_id, portfolio_id, experience_id, data.model_dump(exclude_unset=True)
    )
    return ExperienceResponse(**result)


@router.delete("/{experience_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_experience_endpoint(
    portfolio_id: Annotated[str, Path(description="Portfolio ID")],
    experience_id: Annotated[str, Path(description="Experience ID")],
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> None:
    """Delete an experience entry."""
    delete_experience(user_id, portfolio_id, experience_id)
