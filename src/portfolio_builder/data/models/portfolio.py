"""ORM model for a user's portfolio page.

A portfolio owns the projects, experiences and education entries shown on
its public page, plus the view events recorded against it.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portfolio_builder.data.db import Base, generate_uuid

if TYPE_CHECKING:
    from portfolio_builder.data.models.education import Education
    from portfolio_builder.data.models.experience import Experience
    from portfolio_builder.data.models.project import Project
    from portfolio_builder.data.models.user import User
    from portfolio_builder.data.models.view_event import ViewEvent


class Portfolio(Base):
    """A publishable portfolio page addressed by a globally unique slug."""

    __tablename__ = "portfolios"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="My Portfolio")
    subtitle: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    slug: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    template: Mapped[str] = mapped_column(String(32), nullable=False, default="minimal")
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    user: Mapped[User] = relationship("User", back_populates="portfolios")
    projects: Mapped[list[Project]] = relationship(
        "Project", back_populates="portfolio", cascade="all, delete-orphan"
    )
    experiences: Mapped[list[Experience]] = relationship(
        "Experience", back_populates="portfolio", cascade="all, delete-orphan"
    )
    education_entries: Mapped[list[Education]] = relationship(
        "Education", back_populates="portfolio", cascade="all, delete-orphan"
    )
    view_events: Mapped[list[ViewEvent]] = relationship(
        "ViewEvent", back_populates="portfolio", cascade="all, delete-orphan"
    )
