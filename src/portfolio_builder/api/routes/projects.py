"""Project routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from portfolio_builder.api.dependencies import get_current_user_id
from portfolio_builder.api.schemas.common import ReorderRequest, ReorderResponse
from portfolio_builder.api.schemas.projects import (
    ProjectCreateRequest,
    ProjectResponse,
    ProjectUpdateRequest,
)
from portfolio_builder.services.ordering import RecordType, reorder_records
from portfolio_builder.services.projects import (
    create_project,
    delete_project,
    list_projects,
    update_project,
)

router = APIRouter(prefix="/portfolios/{portfolio_id}/projects", tags=["projects"])


@router.get("", response_model=list[ProjectResponse])
def list_projects_endpoint(
    portfolio_id: Annotated[str, Path(description="Portfolio ID")],
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> list[ProjectResponse]:
    """List all projects of a portfolio in display order, hidden ones included."""
    return [ProjectResponse(**p) for p in list_projects(user_id, portfolio_id)]


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project_endpoint(
    portfolio_id: Annotated[str, Path(description="Portfolio ID")],
    data: ProjectCreateRequest,
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> ProjectResponse:
    """Add a manual project at the end of the list."""
    result = create_project(user_id, portfolio_id, data.model_dump(exclude_unset=True))
    return ProjectResponse(**result)


@router.post("/reorder", response_model=ReorderResponse)
def reorder_projects_endpoint(
    portfolio_id: Annotated[str, Path(description="Portfolio ID")],
    data: ReorderRequest,
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> ReorderResponse:
    """Move projects to new positions in one transaction."""
    orders = [entry.model_dump() for entry in data.orders] if data.orders is not None else None
    updated = reorder_records(user_id, portfolio_id, RecordType.PROJECTS, orders)
    return ReorderResponse(success=True, updated=updated)


@router.put("/{project_id}", response_model=ProjectResponse)
def update_project_endpoint(
    portfolio_id: Annotated[str, Path(description="Portfolio ID")],
    project_id: Annotated[str, Path(description="Project ID")],
    data: ProjectUpdateRequest,
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> ProjectResponse:
    """Update a project. Only provided fields are updated."""
    result = update_project(
        user_id, portfolio_id, project_id, data.model_dump(exclude_unset=True)
    )
    return ProjectResponse(**result)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project_endpoint(
    portfolio_id: Annotated[str, Path(description="Portfolio ID")],
    project_id: Annotated[str, Path(description="Project ID")],
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> None:
    """Delete a project."""
    delete_project(user_id, portfolio_id, project_id)
