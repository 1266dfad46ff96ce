"""Experience model for storing work history on a portfolio.

This model stores work experience entries shown on the public page.
It has a many:1 relationship with the Portfolio model.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from portfolio_builder.data.db import Base, generate_uuid

if TYPE_CHECKING:
    from portfolio_builder.data.models.portfolio import Portfolio


class Experience(Base):
    """Work experience entry on a portfolio.

    Attributes:
        id: UUID primary key.
        portfolio_id: Foreign key to portfolios table.
        title: Job title/position.
        company: Name of the company/organization.
        location: Job location (city, state, or remote).
        start_date: Start date of employment.
        end_date: End date of employment (None if current).
        is_current: Whether this is the user's current job.
        description: Brief description of the role.
        order_index: User-defined display position (lower = shown first).
        updated_at: UTC timestamp when the record was last updated.
    """

    __tablename__ = "experiences"
    __table_args__ = (
        CheckConstraint("order_index >= 0", name="ck_experiences_order_index_positive"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    portfolio_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("portfolios.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    company: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    is_current: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    # Relationships
    portfolio: Mapped[Portfolio] = relationship("Portfolio", back_populates="experiences")

    @validates("order_index")
    def validate_order_index(self, key: str, value: int) -> int:
        """Validate order_index is non-negative."""
        if value < 0:
            raise ValueError("order_index must be non-negative")
        return value
