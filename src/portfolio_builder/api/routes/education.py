"""Education routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from portfolio_builder.api.dependencies import get_current_user_id
from portfolio_builder.api.schemas.common import ReorderRequest, ReorderResponse
from portfolio_builder.api.schemas.education import (
    EducationCreateRequest,
    EducationResponse,
    EducationUpdateRequest,
)
from portfolio_builder.services.education import (
    create_education,
    delete_education,
    list_education,
    update_education,
)
from portfolio_builder.services.ordering import RecordType, reorder_records

router = APIRouter(prefix="/portfolios/{portfolio_id}/education", tags=["education"])


@router.get("", response_model=list[EducationResponse])
def list_education_endpoint(
    portfolio_id: Annotated[str, Path(description="Portfolio ID")],
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> list[EducationResponse]:
    """List a portfolio's education entries in display order."""
    return [EducationResponse(**e) for e in list_education(user_id, portfolio_id)]


@router.post("", response_model=EducationResponse, status_code=status.HTTP_201_CREATED)
def create_education_endpoint(
    portfolio_id: Annotated[str, Path(description="Portfolio ID")],
    data: EducationCreateRequest,
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> EducationResponse:
    """Create a new education entry."""
    result = create_education(user_id, portfolio_id, data.model_dump())
    return EducationResponse(**result)


@router.post("/reorder", response_model=ReorderResponse)
def reorder_education_endpoint(
    portfolio_id: Annotated[str, Path(description="Portfolio ID")],
    data: ReorderRequest,
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> ReorderResponse:
    """Move education entries to new positions in one transaction."""
    orders = [entry.model_dump() for entry in data.orders] if data.orders is not None else None
    updated = reorder_records(user_id, portfolio_id, RecordType.EDUCATION, orders)
    return ReorderResponse(success=True, updated=updated)


@router.put("/{education_id}", response_model=EducationResponse)
def update_education_endpoint(
    portfolio_id: Annotated[str, Path(description="Portfolio ID")],
    education_id: Annotated[str, Path(description="Education ID")],
    data: EducationUpdateRequest,
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> EducationResponse:
    """Update an education entry. Only provided fields are updated."""
    result = update_education(
        user_id, portfolio_id, education_id, data.model_dump(exclude_unset=True)
    )
    return EducationResponse(**result)


@router.delete("/{education_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_education_endpoint(
    portfolio_id: Annotated[str, Path(description="Portfolio ID")],
    education_id: Annotated[str, Path(description="Education ID")],
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> None:
    """Delete an education entry."""
    delete_education(user_id, portfolio_id, education_id)
