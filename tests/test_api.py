import pytest
from fastapi.testclient import TestClient

import seatplan.api as api
from seatplan.models import OptimizationResult
from seatplan.store import InMemoryDataStore


@pytest.fixture
def client():
    yield TestClient(api.app)
    api.app.dependency_overrides.clear()


def solve_payload(**overrides):
    payload = {
        "attendees": [{"id": g} for g in "ABCD"],
        "tables": [{"id": "T1", "capacity": 2}, {"id": "T2", "capacity": 2}],
        "relationships": [
            {"guest_id": "A", "related_guest_id": "B", "relationship_type": "couple", "strength": 10},
        ],
    }
    payload.update(overrides)
    return payload


def test_health_check(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_solve_returns_assignments(client):
    response = client.post("/solve", json=solve_payload())

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert [(a["attendee_id"], a["table_id"]) for a in body["assignments"]] == [
        ("A", "T1"), ("B", "T1"), ("C", "T2"), ("D", "T2"),
    ]
    assert body["score"] == 50.0


def test_solve_rejects_self_relationship(client):
    payload = solve_payload(relationships=[
        {"guest_id": "A", "related_guest_id": "A", "relationship_type": "friend", "strength": 3},
    ])

    response = client.post("/solve", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error_type"] == "InvalidRelationshipError"
    assert body["assignments"] == []
    assert body["score"] == 0.0
    assert "itself" in body["message"]


def test_solve_validates_strength(client):
    payload = solve_payload(relationships=[
        {"guest_id": "A", "related_guest_id": "B", "relationship_type": "friend", "strength": 11},
    ])

    assert client.post("/solve", json=payload).status_code == 422


def test_optimize_event_uses_data_store(client, make_attendees, make_tables):
    store = InMemoryDataStore(make_attendees("A", "B", "C"), make_tables(T1=2), venue_id="e1")
    api.app.dependency_overrides[api.get_data_store] = lambda: store

    response = client.post("/events/e1/optimize", json={"balance_tables": False})

    assert response.status_code == 200
    assert response.json()["unplaced"] == ["C"]
    assert store.seat_assignments() == {"T1-1": "A", "T1-2": "B"}


def test_optimize_event_busy_is_conflict(client, monkeypatch, make_attendees, make_tables):
    api.app.dependency_overrides[api.get_data_store] = lambda: InMemoryDataStore([], [])
    busy = OptimizationResult(success=False, message="Optimization failed: busy", error_type="OptimizationInProgressError")
    monkeypatch.setattr(api, "optimize_venue", lambda store, options: busy)

    response = client.post("/events/e1/optimize", json={})

    assert response.status_code == 409
