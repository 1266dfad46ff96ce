"""User account model backed by the GitHub OAuth identity.

Rows are created or refreshed when the OAuth collaborator hands over a GitHub
profile. Sessions and tokens live outside the database.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import JSON, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portfolio_builder.data.db import Base, generate_uuid

if TYPE_CHECKING:
    from portfolio_builder.data.models.portfolio import Portfolio


class User(Base):
    """Application user account.

    Attributes:
        id: UUID primary key.
        github_id: Unique GitHub account id (external identity key).
        username: GitHub login, used to derive portfolio slugs.
        email: Primary email reported by GitHub.
        name: Display name.
        title: Professional headline shown on public pages.
        bio: Free-form biography.
        avatar_url: URL of the avatar image.
        social_links: Mapping of network name to profile URL.
        created_at: UTC timestamp when the account was created.
        updated_at: UTC timestamp when the account was last updated.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    github_id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)
    username: Mapped[str | None] = mapped_column(String(128), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    social_links: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    portfolios: Mapped[list[Portfolio]] = relationship(
        "Portfolio", back_populates="user", cascade="all, delete-orphan"
    )
