"""Portfolio page templates.

The set of templates is closed: a portfolio's ``template`` column must hold
one of the :class:`PortfolioTemplate` values.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class PortfolioTemplate(StrEnum):
    """Identifiers of the available page templates."""

    MINIMAL = "minimal"
    TECH = "tech"
    CREATIVE = "creative"


DEFAULT_TEMPLATE = PortfolioTemplate.MINIMAL


@dataclass(frozen=True)
class TemplateDefinition:
    """Display metadata for a page template."""

    template: PortfolioTemplate
    name: str
    description: str
    thumbnail: str


TEMPLATES: dict[PortfolioTemplate, TemplateDefinition] = {
    PortfolioTemplate.MINIMAL: TemplateDefinition(
        template=PortfolioTemplate.MINIMAL,
        name="Minimal",
        description="Clean and simple design with focus on content",
        thumbnail="/templates/minimal.png",
    ),
    PortfolioTemplate.TECH: TemplateDefinition(
        template=PortfolioTemplate.TECH,
        name="Tech",
        description="Modern developer-focused layout with dark accents",
        thumbnail="/templates/tech.png",
    ),
    PortfolioTemplate.CREATIVE: TemplateDefinition(
        template=PortfolioTemplate.CREATIVE,
        name="Creative",
        description="Bold and expressive design for standing out",
        thumbnail="/templates/creative.png",
    ),
}


def is_allowed_template(template_id: str) -> bool:
    """Return True if ``template_id`` names one of the available templates."""
    return template_id in {template.value for template in PortfolioTemplate}
