from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from atams.exceptions import BadRequestException, NotFoundException

from app.core.exceptions import StoreUnavailableException
from app.core.timezone import now_local
from app.models import PunchEvent
from app.schemas.punch import BatchPunchRequest, PunchRequest
from app.services.punch_service import PunchService


@pytest.fixture
def service():
    return PunchService()


def test_clock_by_user_id(db, service, users, activities):
    response = service.clock(db, PunchRequest(
        user_id=users["john"].u_id,
        activity_type_id=activities["work"].at_id,
        occurred_at=datetime(2022, 4, 11, 9, 5),
        comment="early shift"
    ))

    assert response.event.pe_user_id == users["john"].u_id
    assert response.event.pe_occurred_at == datetime(2022, 4, 11, 9, 5)
    assert response.event.pe_comment == "early shift"
    assert response.auto_checkout is None
    assert response.message == "John Doe: work 09:05"
    assert db.query(PunchEvent).count() == 1


def test_clock_by_stamp_key(db, service, users, activities):
    response = service.clock(db, PunchRequest(
        stamp_key=users["jane"].u_stamp_key,
        activity_type_id=activities["end of work"].at_id,
        occurred_at=datetime(2022, 4, 11, 18, 0)
    ))

    assert response.event.pe_user_id == users["jane"].u_id


def test_clock_defaults_to_now(db, service, users, activities):
    before = now_local()
    response = service.clock(db, PunchRequest(
        user_id=users["john"].u_id,
        activity_type_id=activities["work"].at_id
    ))

    assert before <= response.event.pe_occurred_at <= now_local() + timedelta(seconds=1)


def test_clock_converts_aware_timestamp_to_local_time(db, service, users, activities):
    response = service.clock(db, PunchRequest(
        user_id=users["john"].u_id,
        activity_type_id=activities["work"].at_id,
        occurred_at=datetime(2022, 1, 10, 8, 0, tzinfo=timezone.utc)
    ))

    # CET is UTC+1 in January
    assert response.event.pe_occurred_at == datetime(2022, 1, 10, 9, 0)


def test_unknown_user_is_not_found(db, service, users, activities):
    with pytest.raises(NotFoundException):
        service.clock(db, PunchRequest(user_id=9999, activity_type_id=activities["work"].at_id))

    with pytest.raises(NotFoundException):
        service.clock(db, PunchRequest(stamp_key="000000000000", activity_type_id=activities["work"].at_id))

    assert db.query(PunchEvent).count() == 0


def test_unknown_activity_is_not_found(db, service, users, activities):
    with pytest.raises(NotFoundException):
        service.clock(db, PunchRequest(user_id=users["john"].u_id, activity_type_id=9999))


def test_missing_user_reference_is_rejected(db, service, users, activities):
    with pytest.raises(BadRequestException):
        service.clock(db, PunchRequest(activity_type_id=activities["work"].at_id))


def test_failed_write_rolls_back_auto_checkout(db, service, users, activities, punch, monkeypatch):
    alice = users["alice"]
    alice.u_auto_checkout_midnight = True
    db.commit()
    punch(alice, activities["work"], "2022-04-11 09:00:00")

    def broken_append(db, event_data):
        raise OperationalError("INSERT INTO punch_events", {}, Exception("disk I/O error"))

    monkeypatch.setattr(service.event_repo, "append_event", broken_append)

    with pytest.raises(StoreUnavailableException) as exc_info:
        service.clock(db, PunchRequest(
            user_id=alice.u_id,
            activity_type_id=activities["work"].at_id,
            occurred_at=datetime(2022, 4, 12, 9, 0)
        ))

    assert exc_info.value.status_code == 503
    assert db.query(PunchEvent).count() == 1


def test_batch_skips_unknown_stamp_keys(db, service, users, activities):
    response = service.clock_batch(db, BatchPunchRequest(
        stamp_keys=[users["john"].u_stamp_key, "123", users["jane"].u_stamp_key],
        activity_type_id=activities["Break"].at_id,
        occurred_at=datetime(2022, 4, 11, 12, 0)
    ))

    assert [e.pe_user_id for e in response.events] == [users["john"].u_id, users["jane"].u_id]
    assert all(e.pe_occurred_at == datetime(2022, 4, 11, 12, 0) for e in response.events)
    assert response.skipped_stamp_keys == ["123"]
    assert db.query(PunchEvent).count() == 2


def test_batch_by_activity_code(db, service, users, activities):
    response = service.clock_batch(db, BatchPunchRequest(
        stamp_keys=[users["alice"].u_stamp_key],
        activity_code="W"
    ))

    assert response.events[0].pe_activity_type_id == activities["work"].at_id


def test_batch_with_unknown_activity_code_is_not_found(db, service, users, activities):
    with pytest.raises(NotFoundException):
        service.clock_batch(db, BatchPunchRequest(stamp_keys=[users["john"].u_stamp_key], activity_code="X"))


def test_batch_without_activity_is_rejected(db, service, users, activities):
    with pytest.raises(BadRequestException):
        service.clock_batch(db, BatchPunchRequest(stamp_keys=[users["john"].u_stamp_key]))


def test_delete_event(db, service, users, activities, punch):
    event = punch(users["john"], activities["work"], "2022-04-11 09:00:00")
    event_id = event.pe_id

    deleted = service.delete_event(db, event_id)

    assert deleted.pe_id == event_id
    assert db.query(PunchEvent).count() == 0
    with pytest.raises(NotFoundException):
        service.delete_event(db, event_id)
