"""ORM models package for database tables.

This package provides SQLAlchemy ORM models representing database tables:
- User: Account created from the GitHub OAuth identity
- Portfolio: Publishable page owned by a user
- Project / Experience / Education: Ordered child collections of a portfolio
- ViewEvent: Append-only record of public page views

All models inherit from the shared Base declarative class defined in data.db.
"""

from portfolio_builder.data.db import Base
from portfolio_builder.data.models.education import Education
from portfolio_builder.data.models.experience import Experience
from portfolio_builder.data.models.portfolio import Portfolio
from portfolio_builder.data.models.project import Project
from portfolio_builder.data.models.user import User
from portfolio_builder.data.models.view_event import ViewEvent

__all__ = ["Base", "Education", "Experience", "Portfolio", "Project", "User", "ViewEvent"]
