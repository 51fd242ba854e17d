"""Integration tests for the notification API endpoints."""

from __future__ import annotations

from pathlib import Path
import sys

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

ROOT = Path(__file__).resolve().parents[4]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from notification_center.config import Settings, get_settings, reset_settings_cache
from notification_center.infrastructure.database import Base, get_db
from notification_center.infrastructure.models import RoleModel, UserModel

USER = {"X-User-Id": "user-1"}


@pytest.fixture(autouse=True)
def fresh_settings():
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False)
    engine.dispose()


def _build_client(session_factory, settings: Settings | None = None) -> TestClient:
    from main import create_app

    app = create_app()

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    if settings is not None:
        app.dependency_overrides[get_settings] = lambda: settings
    return TestClient(app)


@pytest.fixture()
def client(session_factory) -> TestClient:
    return _build_client(session_factory)


def _create(client: TestClient, **overrides) -> str:
    payload = {"user_id": "user-1", "type": "lab_result", "title": "New Lab Result Available"}
    payload.update(overrides)
    response = client.post("/notifications/", json=payload, headers=USER)
    assert response.status_code == 201, response.text
    return response.json()["notification_id"]


def test_requests_without_identity_are_rejected(client):
    response = client.get("/notifications/")

    assert response.status_code == 401


def test_create_and_list_notifications(client):
    notification_id = _create(client, message="CBC ready", data={"patient_id": "p-1"})

    response = client.get("/notifications/", headers=USER)

    assert response.status_code == 200
    body = response.json()
    assert (body["total"], body["unread"], body["has_more"]) == (1, 1, False)
    assert (body["limit"], body["offset"]) == (20, 0)
    (item,) = body["notifications"]
    assert item["id"] == notification_id
    assert item["priority"] == "normal"
    assert item["data"] == {"patient_id": "p-1"}
    assert item["time_ago"] == "Just now"
    assert item["expires_at"] is not None


def test_create_rejects_blank_title(client):
    response = client.post(
        "/notifications/",
        json={"user_id": "user-1", "type": "lab_result", "title": "  "},
        headers=USER,
    )

    assert response.status_code == 400
    assert "title" in response.json()["detail"]


def test_create_rejects_unknown_priority(client):
    response = client.post(
        "/notifications/",
        json={"user_id": "user-1", "type": "lab_result", "title": "x", "priority": "urgent"},
        headers=USER,
    )

    assert response.status_code == 422


@pytest.mark.parametrize("query", ["limit=0", "limit=101", "offset=-1"])
def test_list_rejects_out_of_range_paging(client, query):
    response = client.get(f"/notifications/?{query}", headers=USER)

    assert response.status_code == 422


def test_page_size_bound_follows_settings(session_factory, monkeypatch):
    monkeypatch.setenv("NOTIFICATION_MAX_PAGE_SIZE", "50")
    client = _build_client(session_factory)

    too_large = client.get("/notifications/?limit=80", headers=USER)
    assert too_large.status_code == 422
    by_type = client.get("/notifications/types/lab_result?limit=51", headers=USER)
    assert by_type.status_code == 422

    response = client.get("/notifications/?limit=50", headers=USER)
    assert response.status_code == 200
    assert response.json()["limit"] == 50


def test_mark_read_and_unread_status(client):
    first = _create(client)
    second = _create(client)

    response = client.post(
        "/notifications/read", json={"ids": [first, first, "missing"]}, headers=USER
    )
    assert response.json() == {"updated": 1, "requested": 3}

    repeat = client.post("/notifications/read", json={"ids": [first]}, headers=USER)
    assert repeat.json()["updated"] == 0

    unread_page = client.get("/notifications/?unread_only=true", headers=USER).json()
    assert [item["id"] for item in unread_page["notifications"]] == [second]
    assert (unread_page["total"], unread_page["unread"]) == (2, 1)

    assert client.get("/notifications/unread", headers=USER).json() == {"has_unread": True}
    read_all = client.post("/notifications/read-all", headers=USER)
    assert read_all.json()["updated"] == 1
    assert client.get("/notifications/unread", headers=USER).json() == {"has_unread": False}


def test_mark_read_requires_ids(client):
    response = client.post("/notifications/read", json={"ids": []}, headers=USER)

    assert response.status_code == 422


def test_list_by_type(client):
    _create(client)
    _create(client, type="appointment_reminder", title="Upcoming Appointment")

    response = client.get("/notifications/types/lab_result?limit=5", headers=USER)

    body = response.json()
    assert body["type"] == "lab_result"
    assert body["count"] == 1
    assert body["notifications"][0]["type"] == "lab_result"


def test_broadcast_to_role(client, session_factory):
    db = session_factory()
    db.add_all(
        [
            RoleModel(id=1, name="Doctor", alias="doctor"),
            UserModel(id="doc-1", role_id=1, name="Ana", email="ana@example.com"),
            UserModel(id="doc-2", role_id=1, name="Ben", email="ben@example.com"),
        ]
    )
    db.commit()
    db.close()

    response = client.post(
        "/notifications/broadcast",
        json={"role": "doctor", "title": "EHR downtime", "message": "Saturday 02:00"},
        headers=USER,
    )

    assert response.json() == {"created": 2}
    page = client.get("/notifications/", headers={"X-User-Id": "doc-2"}).json()
    assert page["notifications"][0]["type"] == "system_alert"


def test_list_seeds_samples_when_enabled(session_factory):
    client = _build_client(session_factory, Settings(seed_sample_notifications=True))

    body = client.get("/notifications/", headers=USER).json()

    assert body["total"] == 5
    assert len(body["notifications"]) == 5


def test_list_does_not_seed_by_default(client):
    body = client.get("/notifications/", headers=USER).json()

    assert body["total"] == 0
    assert body["notifications"] == []
