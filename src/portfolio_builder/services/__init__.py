"""Services"""

from portfolio_builder.services.analytics import get_portfolio_analytics, record_view
from portfolio_builder.services.github_sync import sync_github_projects
from portfolio_builder.services.ordering import RecordType, reorder_records
from portfolio_builder.services.portfolios import (
    create_portfolio,
    delete_portfolio,
    get_public_portfolio,
    list_portfolios,
    publish_portfolio,
    update_portfolio,
)

__all__ = [
    "RecordType",
    "reorder_records",
    "sync_github_projects",
    "get_portfolio_analytics",
    "record_view",
    "create_portfolio",
    "delete_portfolio",
    "get_public_portfolio",
    "list_portfolios",
    "publish_portfolio",
    "update_portfolio",
]
