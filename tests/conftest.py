from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

import portfolio_builder.data.db as app_db
from portfolio_builder.data.db import init_db
from portfolio_builder.data.models import Base, Portfolio, User


@pytest.fixture
def api_db(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Use a temporary SQLite DB for API tests."""
    db_path = tmp_path / "api.db"
    monkeypatch.setenv("DB_URL", f"sqlite:///{db_path.as_posix()}")
    app_db._engine = None
    app_db._SessionLocal = None
    init_db()
    yield
    # Dispose engine to release connections
    if app_db._engine is not None:
        app_db._engine.dispose()
        app_db._engine = None
        app_db._SessionLocal = None


@pytest.fixture
def tmp_db(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Point the service layer at a fresh SQLite file."""
    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}")
    event.listen(engine, "connect", app_db._enable_sqlite_foreign_keys)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(app_db, "_engine", engine)
    monkeypatch.setattr(
        app_db,
        "_SessionLocal",
        sessionmaker(bind=engine, autoflush=False, expire_on_commit=False),
    )
    yield
    engine.dispose()


def make_user(username: str = "octocat", github_id: str | None = None) -> str:
    """Insert a user and return its id."""
    with app_db.get_session() as session:
        user = User(github_id=github_id or f"gh-{username}", username=username, name=username)
        session.add(user)
        session.flush()
        return user.id


def make_portfolio(user_id: str, slug: str, *, is_published: bool = False) -> str:
    """Insert a portfolio and return its id."""
    with app_db.get_session() as session:
        portfolio = Portfolio(user_id=user_id, slug=slug, is_published=is_published)
        session.add(portfolio)
        session.flush()
        return portfolio.id


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Automatically add api_db fixture to tests in API test files."""
    for item in items:
        test_file_path = Path(str(item.fspath))
        if "api" in test_file_path.stem.lower():
            item.add_marker(pytest.mark.usefixtures("api_db"))
