"""ORM model for projects shown on a portfolio.

Projects are either added by hand (``github_repo_id`` is NULL) or imported by
the GitHub sync, in which case ``github_repo_id`` holds the repository id and
is unique within the portfolio.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from portfolio_builder.data.db import Base, generate_uuid

if TYPE_CHECKING:
    from portfolio_builder.data.models.portfolio import Portfolio


class Project(Base):
    """Project card within a portfolio.

    Attributes:
        id: UUID primary key.
        portfolio_id: Owning portfolio.
        github_repo_id: GitHub repository id, NULL for manual projects.
        name: Project name.
        description: Short description.
        url: Link to the project or repository.
        language: Primary language.
        stars: Stargazer count at last sync.
        is_visible: Whether the project appears on the public page.
        order_index: User-defined display position (lower first).
    """

    __tablename__ = "projects"
    __table_args__ = (
        UniqueConstraint("portfolio_id", "github_repo_id", name="uq_projects_portfolio_repo"),
        CheckConstraint("order_index >= 0", name="ck_projects_order_index_positive"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    portfolio_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("portfolios.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    github_repo_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    language: Mapped[str | None] = mapped_column(String(64), nullable=True)
    stars: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
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

    portfolio: Mapped[Portfolio] = relationship("Portfolio", back_populates="projects")

    @validates("order_index")
    def validate_order_index(self, key: str, value: int) -> int:
        """Validate order_index is non-negative."""
        if value < 0:
            raise ValueError("order_index must be non-negative")
        return value
