"""Integration tests for the SQLAlchemy notification store using in-memory SQLite."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from notification_center.domain import NotificationStore, StoreError
from notification_center.domain.entities import NotificationDraft, NotificationTemplate
from notification_center.domain.payload import decode_payload
from notification_center.infrastructure.database import Base
from notification_center.infrastructure.models import NotificationModel, RoleModel, UserModel
from notification_center.infrastructure.repositories import NotificationRepository

START = datetime(2026, 2, 1, 8, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine):
    db = sessionmaker(bind=engine, autoflush=False)()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(START)


@pytest.fixture()
def repository(session, clock) -> NotificationRepository:
    return NotificationRepository(session, clock=clock)


def _draft(user_id="user-1", minutes=0, **overrides) -> NotificationDraft:
    values = {
        "user_id": user_id,
        "type": "patient_update",
        "title": "Status changed",
        "message": "Patient moved to ward B",
        "priority": "normal",
        "data": {},
        "created_at": START + timedelta(minutes=minutes),
        "expires_at": START + timedelta(days=30),
    }
    values.update(overrides)
    return NotificationDraft(**values)


def test_create_round_trips_record(repository):
    notification_id = repository.create(
        _draft(data={"patient_id": "p-1", "beds": [1, 2]}, priority="high")
    )

    (record,) = repository.get_for_user("user-1", unread_only=False, limit=10, offset=0)
    assert record.id == notification_id
    assert record.priority == "high"
    assert record.is_read is False and record.read_at is None
    assert record.created_at == START
    assert record.expires_at == START + timedelta(days=30)
    assert decode_payload(record.data) == {"patient_id": "p-1", "beds": [1, 2]}


def test_get_for_user_orders_newest_first_and_pages(repository):
    for minute in range(5):
        repository.create(_draft(minutes=minute, title=f"Update {minute}"))
    repository.create(_draft(user_id="user-2"))

    page = repository.get_for_user("user-1", unread_only=False, limit=2, offset=1)

    assert [record.title for record in page] == ["Update 3", "Update 2"]


def test_unread_filter_and_counts(repository):
    ids = repository.create_batch([_draft(minutes=m) for m in range(3)])
    repository.mark_as_read("user-1", ids[:1])

    unread = repository.get_for_user("user-1", unread_only=True, limit=10, offset=0)
    counts = repository.get_counts("user-1")

    assert {record.id for record in unread} == set(ids[1:])
    assert (counts.total, counts.unread) == (3, 2)


def test_counts_for_unknown_user_are_zero(repository):
    counts = repository.get_counts("nobody")

    assert (counts.total, counts.unread) == (0, 0)
    assert repository.has_notifications("nobody") is False


def test_get_by_type_limits_results(repository):
    for minute in range(3):
        repository.create(_draft(minutes=minute, type="lab_result"))
    repository.create(_draft(type="appointment_reminder"))

    records = repository.get_by_type("user-1", "lab_result", limit=2)

    assert len(records) == 2
    assert all(record.type == "lab_result" for record in records)


def test_mark_as_read_only_touches_owned_unread_rows(repository, clock):
    mine = repository.create(_draft())
    theirs = repository.create(_draft(user_id="user-2"))

    assert repository.mark_as_read("user-1", [mine, theirs]) == 1
    first = repository.get_for_user("user-1", unread_only=False, limit=1, offset=0)[0]

    clock.now = START + timedelta(hours=1)
    assert repository.mark_as_read("user-1", [mine]) == 0
    again = repository.get_for_user("user-1", unread_only=False, limit=1, offset=0)[0]

    assert first.is_read is True
    assert first.read_at == START
    assert again.read_at == first.read_at
    assert repository.get_counts("user-2").unread == 1
    assert repository.mark_as_read("user-1", []) == 0


def test_mark_all_as_read(repository):
    repository.create_batch([_draft(minutes=m) for m in range(4)])

    assert repository.mark_all_as_read("user-1") == 4
    assert repository.get_counts("user-1").unread == 0
    assert repository.mark_all_as_read("user-1") == 0


def test_expired_rows_are_hidden_then_deleted(repository, clock, session):
    live = repository.create(_draft(expires_at=START + timedelta(days=1)))
    stale = repository.create(_draft(expires_at=START + timedelta(minutes=5)))
    read_stale = repository.create(
        _draft(user_id="user-2", expires_at=START + timedelta(minutes=5))
    )
    never = repository.create(_draft(expires_at=None))
    repository.mark_as_read("user-2", [read_stale])

    clock.now = START + timedelta(hours=1)
    visible = repository.get_for_user("user-1", unread_only=False, limit=10, offset=0)

    assert {record.id for record in visible} == {live, never}
    assert repository.get_counts("user-1").total == 2
    assert repository.has_notifications("user-2") is False

    assert repository.delete_expired() == 2
    remaining = {row.id for row in session.query(NotificationModel).all()}
    assert remaining == {live, never}
    assert stale not in remaining


def test_create_for_role_targets_active_members(repository, session):
    doctor = RoleModel(id=1, name="Doctor", alias="doctor")
    nurse = RoleModel(id=2, name="Nurse", alias="nurse")
    session.add_all(
        [
            doctor,
            nurse,
            UserModel(id="doc-1", role_id=1, name="Ana", email="ana@example.com"),
            UserModel(id="doc-2", role_id=1, name="Ben", email="ben@example.com"),
            UserModel(
                id="doc-3", role_id=1, name="Cy", email="cy@example.com", is_active=False
            ),
            UserModel(id="doc-4", role_id=1, name="Di", email="di@example.com", deleted=True),
            UserModel(id="nurse-1", role_id=2, name="Ed", email="ed@example.com"),
        ]
    )
    session.commit()
    template = NotificationTemplate(
        type="system_alert",
        title="EHR downtime",
        message="Saturday night",
        priority="high",
        created_at=START,
        expires_at=START + timedelta(days=30),
    )

    created = repository.create_for_role("DOCTOR", template)

    rows = session.query(NotificationModel).order_by(NotificationModel.user_id).all()
    assert created == 2
    assert [row.user_id for row in rows] == ["doc-1", "doc-2"]
    assert {row.title for row in rows} == {"EHR downtime"}
    assert repository.create_for_role("Nurse", template) == 1
    assert repository.create_for_role("pharmacist", template) == 0


def test_create_table_if_not_exists_is_repeatable(repository):
    repository.create_table_if_not_exists()
    repository.create_table_if_not_exists()

    assert repository.get_counts("user-1").total == 0


def test_storage_failures_raise_store_error(repository, engine):
    Base.metadata.drop_all(bind=engine)

    with pytest.raises(StoreError) as exc_info:
        repository.get_counts("user-1")
    assert exc_info.value.__cause__ is not None

    with pytest.raises(StoreError):
        repository.create(_draft())


def test_repository_satisfies_store_protocol(repository):
    assert isinstance(repository, NotificationStore)


def test_delete_expired_keeps_rows_expiring_exactly_now(repository, clock, session):
    expires_at = START + timedelta(hours=2)
    notification_id = repository.create(_draft(expires_at=expires_at))

    clock.now = expires_at
    assert repository.delete_expired() == 0
    assert session.query(NotificationModel).filter_by(id=notification_id).count() == 1

    clock.now = expires_at + timedelta(microseconds=1)
    assert repository.delete_expired() == 1
    assert session.query(NotificationModel).count() == 0
