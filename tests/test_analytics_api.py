"""API tests for view tracking and analytics."""

from __future__ import annotations

import uuid

from conftest import make_portfolio, make_user
from fastapi.testclient import TestClient

from portfolio_builder.api.main import app


def test_track_then_read_analytics(api_db: None) -> None:
    client = TestClient(app)
    user_id = make_user("octocat")
    portfolio_id = make_portfolio(user_id, "octocat", is_published=True)

    for _ in range(3):
        response = client.post(
            "/api/analytics/track",
            json={"portfolioId": portfolio_id, "referrer": "https://news.ycombinator.com/"},
            headers={"User-Agent": "pytest-browser"},
        )
        assert response.status_code == 200
        assert response.json() == {"success": True}

    response = client.get(
        f"/api/portfolios/{portfolio_id}/analytics", headers={"X-User-Id": user_id}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["totalViews"] == 3
    assert data["thirtyDayViews"] == 3
    assert len(data["chartData"]) == 7
    assert data["chartData"][-1]["views"] == 3


def test_track_rejects_bad_ids(api_db: None) -> None:
    client = TestClient(app)

    assert client.post("/api/analytics/track", json={}).status_code == 400
    response = client.post("/api/analytics/track", json={"portfolioId": "abc"})
    assert response.status_code == 400
    assert response.json()["detail"] == "portfolioId must be a valid UUID"
    response = client.post("/api/analytics/track", json={"portfolioId": str(uuid.uuid4())})
    assert response.status_code == 404


def test_analytics_hidden_from_other_users(api_db: None) -> None:
    client = TestClient(app)
    portfolio_id = make_portfolio(make_user("octocat"), "octocat")

    response = client.get(
        f"/api/portfolios/{portfolio_id}/analytics", headers={"X-User-Id": make_user("mallory")}
    )

    assert response.status_code == 404
