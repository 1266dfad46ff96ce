"""API tests for portfolio endpoints, templates and the public page."""

from __future__ import annotations

import uuid

from conftest import make_user
from fastapi.testclient import TestClient

from portfolio_builder.api.main import app


def _headers(user_id: str) -> dict[str, str]:
    return {"X-User-Id": user_id}


def test_health(api_db: None) -> None:
    client = TestClient(app)
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_missing_auth_header_is_unauthorized(api_db: None) -> None:
    client = TestClient(app)
    response = client.get("/api/portfolios")
    assert response.status_code == 401
    assert response.json() == {"detail": "Unauthorized"}


def test_list_auto_provisions_portfolio(api_db: None) -> None:
    client = TestClient(app)
    user_id = make_user("Octocat")

    response = client.get("/api/portfolios", headers=_headers(user_id))

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    assert data[0]["slug"] == "octocat"
    assert data[0]["isPublished"] is False
    assert data[0]["template"] == "minimal"
    assert data[0]["userId"] == user_id


def test_create_additional_portfolio(api_db: None) -> None:
    client = TestClient(app)
    user_id = make_user("octocat")
    client.get("/api/portfolios", headers=_headers(user_id))

    response = client.post("/api/portfolios", headers=_headers(user_id))

    assert response.status_code == 201
    assert response.json()["slug"] == "octocat-2"
    assert len(client.get("/api/portfolios", headers=_headers(user_id)).json()) == 2


def test_update_publish_and_view_public_page(api_db: None) -> None:
    client = TestClient(app)
    user_id = make_user("octocat")
    portfolio_id = client.post("/api/portfolios", headers=_headers(user_id)).json()["id"]

    response = client.put(
        f"/api/portfolios/{portfolio_id}",
        json={"title": "Octo Works", "subtitle": "Builder of things", "template": "creative"},
        headers=_headers(user_id),
    )
    assert response.status_code == 200
    assert response.json()["subtitle"] == "Builder of things"

    assert client.get("/api/public/octocat").status_code == 404

    response = client.post(f"/api/portfolios/{portfolio_id}/publish", headers=_headers(user_id))
    assert response.status_code == 200
    assert response.json()["isPublished"] is True

    response = client.get("/api/public/octocat")
    assert response.status_code == 200
    data = response.json()
    assert data["portfolio"]["title"] == "Octo Works"
    assert data["portfolio"]["template"] == "creative"
    assert data["user"]["name"] == "octocat"
    assert data["user"]["socialLinks"] == {}
    assert data["projects"] == []


def test_update_validation_errors_are_400(api_db: None) -> None:
    client = TestClient(app)
    user_id = make_user("octocat")
    portfolio_id = client.post("/api/portfolios", headers=_headers(user_id)).json()["id"]

    response = client.put(
        f"/api/portfolios/{portfolio_id}",
        json={"template": "neon"},
        headers=_headers(user_id),
    )
    assert response.status_code == 400
    assert "Unknown template" in response.json()["detail"]

    response = client.put(
        f"/api/portfolios/{portfolio_id}", json={}, headers=_headers(user_id)
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "No valid fields to update"


def test_foreign_and_malformed_portfolio_ids(api_db: None) -> None:
    client = TestClient(app)
    owner = make_user("octocat")
    portfolio_id = client.post("/api/portfolios", headers=_headers(owner)).json()["id"]
    mallory = make_user("mallory")

    response = client.delete(f"/api/portfolios/{portfolio_id}", headers=_headers(mallory))
    assert response.status_code == 404

    response = client.post(
        f"/api/portfolios/{uuid.uuid4()}/publish", headers=_headers(owner)
    )
    assert response.status_code == 404

    response = client.put(
        "/api/portfolios/not-a-uuid", json={"title": "x"}, headers=_headers(owner)
    )
    assert response.status_code == 400


def test_delete_portfolio(api_db: None) -> None:
    client = TestClient(app)
    user_id = make_user("octocat")
    portfolio_id = client.post("/api/portfolios", headers=_headers(user_id)).json()["id"]

    response = client.delete(f"/api/portfolios/{portfolio_id}", headers=_headers(user_id))

    assert response.status_code == 204
    response = client.put(
        f"/api/portfolios/{portfolio_id}", json={"title": "gone"}, headers=_headers(user_id)
    )
    assert response.status_code == 404


def test_list_templates(api_db: None) -> None:
    client = TestClient(app)

    response = client.get("/api/templates")

    assert response.status_code == 200
    assert [t["id"] for t in response.json()] == ["minimal", "tech", "creative"]
