"""Route handlers for the API."""

from portfolio_builder.api.routes import (
    analytics,
    education,
    experiences,
    github,
    health,
    portfolios,
    projects,
    public,
    users,
)

__all__ = [
    "health",
    "users",
    "portfolios",
    "projects",
    "experiences",
    "education",
    "github",
    "analytics",
    "public",
]
