"""Tests for bulk reordering of portfolio collections."""

from __future__ import annotations

import uuid
from datetime import date

import pytest
from conftest import make_portfolio, make_user

import portfolio_builder.data.db as db_module
from portfolio_builder.data.models import Education, Experience, Project
from portfolio_builder.services.errors import AccessDenied, NotFound, ValidationFailed
from portfolio_builder.services.ordering import RecordType, reorder_records
from portfolio_builder.services.projects import create_project


@pytest.fixture
def owner(tmp_db):
    user_id = make_user("alice")
    portfolio_id = make_portfolio(user_id, "alice")
    return user_id, portfolio_id


@pytest.fixture
def three_projects(owner):
    user_id, portfolio_id = owner
    return [
        create_project(user_id, portfolio_id, {"name": name})["id"] for name in ("a", "b", "c")
    ]


def _indices(model, portfolio_id):
    with db_module.get_session() as session:
        rows = session.query(model).filter(model.portfolio_id == portfolio_id).all()
        return {row.id: row.order_index for row in rows}


def test_new_projects_are_appended(owner, three_projects):
    _, portfolio_id = owner
    indices = _indices(Project, portfolio_id)
    assert [indices[pid] for pid in three_projects] == [0, 1, 2]


def test_reorder_applies_all_entries(owner, three_projects):
    user_id, portfolio_id = owner
    a, b, c = three_projects

    updated = reorder_records(
        user_id,
        portfolio_id,
        RecordType.PROJECTS,
        [{"id": a, "orderIndex": 2}, {"id": b, "orderIndex": 0}, {"id": c, "orderIndex": 1}],
    )

    assert updated == 3
    assert _indices(Project, portfolio_id) == {a: 2, b: 0, c: 1}


def test_partial_and_sparse_reorder(owner, three_projects):
    user_id, portfolio_id = owner
    a, b, c = three_projects

    assert reorder_records(user_id, portfolio_id, "projects", [{"id": c, "orderIndex": 10}]) == 1
    assert _indices(Project, portfolio_id) == {a: 0, b: 1, c: 10}


def test_unknown_id_rejects_whole_request(owner, three_projects):
    user_id, portfolio_id = owner
    a, b, _ = three_projects
    stranger = str(uuid.uuid4())

    with pytest.raises(ValidationFailed, match=f"Project {stranger} does not belong"):
        reorder_records(
            user_id,
            portfolio_id,
            RecordType.PROJECTS,
            [{"id": a, "orderIndex": 5}, {"id": stranger, "orderIndex": 0}],
        )

    assert _indices(Project, portfolio_id)[a] == 0


def test_project_from_other_portfolio_rejected(owner, three_projects):
    user_id, portfolio_id = owner
    other_portfolio = make_portfolio(user_id, "alice-2")
    foreign = create_project(user_id, other_portfolio, {"name": "elsewhere"})["id"]

    with pytest.raises(ValidationFailed, match="does not belong to this portfolio"):
        reorder_records(user_id, portfolio_id, "projects", [{"id": foreign, "orderIndex": 0}])


def test_duplicate_ids_rejected(owner, three_projects):
    user_id, portfolio_id = owner
    a = three_projects[0]

    with pytest.raises(ValidationFailed, match="Duplicate project IDs in request"):
        reorder_records(
            user_id,
            portfolio_id,
            "projects",
            [{"id": a, "orderIndex": 2}, {"id": a, "orderIndex": 5}],
        )

    assert _indices(Project, portfolio_id)[a] == 0


@pytest.mark.parametrize(
    ("orders", "message"),
    [
        ([], "Orders array is required"),
        (None, "Orders array is required"),
        ([{"id": "nope", "orderIndex": 0}], "Invalid project ID format: nope"),
        ([{"id": "6f1c7b2a-4d3e-4f5a-9b8c-7d6e5f4a3b2c", "orderIndex": -1}], "Invalid orderIndex"),
        ([{"id": "6f1c7b2a-4d3e-4f5a-9b8c-7d6e5f4a3b2c", "orderIndex": "1"}], "Invalid orderIndex"),
    ],
)
def test_malformed_requests(owner, orders, message):
    user_id, portfolio_id = owner
    with pytest.raises(ValidationFailed, match=message):
        reorder_records(user_id, portfolio_id, "projects", orders)


def test_other_users_portfolio_is_forbidden(owner, three_projects):
    _, portfolio_id = owner
    mallory = make_user("mallory")

    with pytest.raises(AccessDenied):
        reorder_records(
            mallory, portfolio_id, "projects", [{"id": three_projects[0], "orderIndex": 1}]
        )


def test_missing_portfolio(owner):
    user_id, _ = owner
    with pytest.raises(NotFound, match="Portfolio not found"):
        reorder_records(
            user_id,
            str(uuid.uuid4()),
            "projects",
            [{"id": str(uuid.uuid4()), "orderIndex": 0}],
        )


@pytest.mark.parametrize(
    ("record_type", "model", "label"),
    [("experiences", Experience, "Experience"), ("education", Education, "Education")],
)
def test_timeline_collections_share_the_rules(owner, record_type, model, label):
    user_id, portfolio_id = owner
    with db_module.get_session() as session:
        if model is Experience:
            row = Experience(
                portfolio_id=portfolio_id, title="Dev", company="Acme", start_date=date(2020, 1, 1)
            )
        else:
            row = Education(
                portfolio_id=portfolio_id, school="MIT", degree="BS", start_date=date(2016, 9, 1)
            )
        session.add(row)
        session.flush()
        row_id = row.id

    updated = reorder_records(user_id, portfolio_id, record_type, [{"id": row_id, "orderIndex": 4}])
    assert updated == 1
    assert _indices(model, portfolio_id) == {row_id: 4}

    with pytest.raises(ValidationFailed, match=f"{label} {'0' * 8}"):
        reorder_records(
            user_id,
            portfolio_id,
            record_type,
            [{"id": "00000000-0000-4000-8000-000000000000", "orderIndex": 0}],
        )
