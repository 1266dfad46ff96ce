"""Shared Pydantic schemas for API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictInt
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exposing camelCase field names on the wire.

    Python code keeps using snake_case attribute names; both spellings are
    accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ReorderEntry(CamelModel):
    """New position for one record."""

    id: str = Field(description="Record ID")
    order_index: StrictInt = Field(description="New display position (0 or greater)")


class ReorderRequest(CamelModel):
    """Request schema for bulk reordering of a portfolio collection."""

    orders: list[ReorderEntry] | None = Field(
        None, description="Records to move; other records keep their position"
    )


class ReorderResponse(CamelModel):
    """Result of a reorder request."""

    success: bool = True
    updated: int = Field(description="Number of records moved")
