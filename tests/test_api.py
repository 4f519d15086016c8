"""HTTP surface tests using FastAPI's TestClient."""

import pytest
from fastapi.testclient import TestClient

from lostfound.api import deps
from lostfound.api.endpoints import items
from lostfound.main import app
from lostfound.tasks import celery_tasks


@pytest.fixture
def client(db, sink):
    app.dependency_overrides[deps.get_notification_sink] = lambda: sink
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def scheduled(monkeypatch):
    calls = []
    monkeypatch.setattr(items, "schedule_match_evaluation", lambda item_id, status: calls.append((item_id, status)))
    return calls


LOST_PAYLOAD = {
    "title": "Black iPhone 13",
    "description": "Black iPhone 13 with a cracked screen",
    "category": "electronics",
    "status": "lost",
    "location_lost": "Library Building",
}


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_report_item_requires_caller(client, scheduled):
    response = client.post("/api/items", json=LOST_PAYLOAD)
    assert response.status_code == 401
    assert scheduled == []


def test_report_item_queues_evaluation(client, scheduled):
    response = client.post("/api/items", json=LOST_PAYLOAD, headers={"X-User-Id": "1"})

    assert response.status_code == 201
    body = response.json()
    assert body["user_id"] == 1
    assert body["item_status"] == "active"
    assert scheduled == [(body["id"], "lost")]


def test_report_item_rejects_mismatched_location(client, scheduled):
    payload = dict(LOST_PAYLOAD, location_found="Cafeteria")
    response = client.post("/api/items", json=payload, headers={"X-User-Id": "1"})
    assert response.status_code == 422

    missing = {k: v for k, v in LOST_PAYLOAD.items() if k != "location_lost"}
    response = client.post("/api/items", json=missing, headers={"X-User-Id": "1"})
    assert response.status_code == 422

    found_payload = dict(missing, status="found", location_found="   ")
    response = client.post("/api/items", json=found_payload, headers={"X-User-Id": "1"})
    assert response.status_code == 422
    assert scheduled == []


def test_report_item_survives_queue_outage(client, monkeypatch):
    def broken_delay(*args, **kwargs):
        raise ConnectionError("broker unreachable")

    monkeypatch.setattr(celery_tasks.evaluate_item_task, "delay", broken_delay)

    response = client.post("/api/items", json=LOST_PAYLOAD, headers={"X-User-Id": "1"})
    assert response.status_code == 201


def test_get_unknown_item(client):
    response = client.get("/api/items/404")
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_check_found_creates_match(client, sink, matching_pair):
    _, found = matching_pair

    response = client.post("/api/match/check-found", json={"foundItemId": found.id})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Found 1 potential match(es)"
    assert body["matches"][0]["status"] == "pending"
    assert body["matches"][0]["match_score"] == 1.0
    assert len(sink.sent) == 2


def test_check_lost_with_found_item_is_noop(client, matching_pair):
    _, found = matching_pair
    response = client.post("/api/match/check-lost", json={"lostItemId": found.id})
    assert response.json()["matches"] == []


def test_check_lost_unknown_item(client):
    response = client.post("/api/match/check-lost", json={"lostItemId": 999})
    assert response.status_code == 404
    assert response.json() == {"error": "not_found", "detail": "Item 999 not found"}


def test_check_lost_invalid_id(client):
    response = client.post("/api/match/check-lost", json={"lostItemId": 0})
    assert response.status_code == 400
    assert response.json()["error"] == "invalid_input"


def test_confirm_and_list(client, matching_pair):
    lost, found = matching_pair
    match_id = client.post("/api/match/check-lost", json={"lostItemId": lost.id}).json()["matches"][0]["id"]

    forbidden = client.post("/api/match/confirm", json={"matchId": match_id}, headers={"X-User-Id": "42"})
    assert forbidden.status_code == 403
    assert forbidden.json()["error"] == "forbidden"

    confirmed = client.post(
        "/api/match/confirm",
        json={"matchId": match_id, "notes": "Picked it up"},
        headers={"X-User-Id": str(lost.user_id)},
    )
    assert confirmed.status_code == 200
    assert confirmed.json()["status"] == "confirmed"
    assert confirmed.json()["notes"] == "Picked it up"

    listing = client.get("/api/match/list", headers={"X-User-Id": str(found.user_id)}).json()
    assert listing["count"] == 1
    assert listing["matches"][0]["id"] == match_id


def test_reject(client, matching_pair):
    lost, found = matching_pair
    match_id = client.post("/api/match/check-found", json={"foundItemId": found.id}).json()["matches"][0]["id"]

    response = client.post("/api/match/reject", json={"matchId": match_id}, headers={"X-User-Id": str(found.user_id)})

    assert response.status_code == 200
    assert response.json()["status"] == "rejected"


def test_confirm_unknown_match(client):
    response = client.post("/api/match/confirm", json={"matchId": 12345}, headers={"X-User-Id": "1"})
    assert response.status_code == 404


def test_list_requires_caller(client):
    assert client.get("/api/match/list").status_code == 401
