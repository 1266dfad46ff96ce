from __future__ import annotations

from portfolio_builder.constants.templates import (
    DEFAULT_TEMPLATE,
    TEMPLATES,
    PortfolioTemplate,
    TemplateDefinition,
    is_allowed_template,
)

__all__ = [
    "DEFAULT_TEMPLATE",
    "PortfolioTemplate",
    "TemplateDefinition",
    "TEMPLATES",
    "is_allowed_template",
]
