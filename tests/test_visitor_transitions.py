from datetime import datetime, timezone

import pytest
from sqlalchemy.orm.exc import StaleDataError

from shared.core.database import SessionLocal
from shared.utils.exceptions import InvalidTransitionError, NotFoundError
from visitor_service.app.crud import visitor_crud
from visitor_service.app.enum.visitor_enum import VisitorStatus
from visitor_service.app.models.custom_fields import CustomField
from visitor_service.app.models.visitors import Visitor
from visitor_service.app.schemas.visitor_schemas import VisitorCreate


def _payload(location_id, **overrides):
    data = {
        "fullName": "Jane Doe",
        "phoneNumber": "+15551234567",
        "purposeOfVisit": "Interview",
        "whomToMeet": "Bob",
        "dateTime": "2025-01-01T09:00:00Z",
        "locationId": location_id,
    }
    data.update(overrides)
    return VisitorCreate.model_validate(data)


def test_registration_starts_awaiting_approval(db, make_location):
    location = make_location()

    visitor = visitor_crud.create_visitor(db, _payload(location.id))

    assert visitor.id is not None
    assert visitor.status == VisitorStatus.AWAITING_APPROVAL.value
    assert visitor.created_at == visitor.updated_at
    assert visitor.date_time == datetime(2025, 1, 1, 9, 0)
    assert visitor.check_in_time is None


def test_registration_converts_offset_times_to_utc(db, make_location):
    location = make_location()

    visitor = visitor_crud.create_visitor(
        db, _payload(location.id, dateTime="2025-01-01T09:00:00+02:00"))

    assert visitor.date_time == datetime(2025, 1, 1, 7, 0)
    assert visitor.date_time.tzinfo is None


def test_registration_for_unknown_location_fails(db):
    with pytest.raises(NotFoundError):
        visitor_crud.create_visitor(db, _payload(999))


def test_registration_keeps_only_defined_custom_fields(db, make_location):
    location = make_location()
    db.add(CustomField(name="vehicle", label="Vehicle number"))
    db.add(CustomField(name="badge", label="Badge", is_active=False))
    db.commit()

    visitor = visitor_crud.create_visitor(db, _payload(
        location.id, customFields={"vehicle": "KA-01", "badge": "7", "unknown": "x"}))

    assert visitor.custom_fields == {"vehicle": "KA-01"}


def _snapshot(db, visitor_id):
    db.expire_all()
    v = db.get(Visitor, visitor_id)
    return (v.status, v.check_in_time, v.check_out_time, v.updated_at, v.version)


@pytest.mark.parametrize("status", [
    VisitorStatus.AWAITING_APPROVAL,
    VisitorStatus.REJECTED,
    VisitorStatus.RESCHEDULED,
    VisitorStatus.CHECKED_IN,
    VisitorStatus.CHECKED_OUT,
])
def test_check_in_requires_approval(db, make_location, make_visitor, status):
    visitor = make_visitor(make_location(), status=status)
    before = _snapshot(db, visitor.id)

    with pytest.raises(InvalidTransitionError) as exc:
        visitor_crud.check_in(db, visitor.id)

    assert exc.value.message == "Cannot check in visitor"
    assert _snapshot(db, visitor.id) == before


def test_check_in_stamps_time(db, make_location, make_visitor):
    visitor = make_visitor(make_location(), status=VisitorStatus.APPROVED)

    checked_in = visitor_crud.check_in(db, visitor.id)

    assert checked_in.status == VisitorStatus.CHECKED_IN.value
    assert checked_in.check_in_time is not None
    assert checked_in.updated_at == checked_in.check_in_time


@pytest.mark.parametrize("status", [
    VisitorStatus.AWAITING_APPROVAL,
    VisitorStatus.APPROVED,
    VisitorStatus.REJECTED,
    VisitorStatus.RESCHEDULED,
    VisitorStatus.CHECKED_OUT,
])
def test_check_out_requires_checked_in(db, make_location, make_visitor, status):
    visitor = make_visitor(make_location(), status=status)
    before = _snapshot(db, visitor.id)

    with pytest.raises(InvalidTransitionError) as exc:
        visitor_crud.check_out(db, visitor.id)

    assert exc.value.message == "Cannot check out visitor"
    assert _snapshot(db, visitor.id) == before


def test_check_out_after_check_in(db, make_location, make_visitor):
    visitor = make_visitor(make_location(), status=VisitorStatus.APPROVED)
    visitor_crud.check_in(db, visitor.id)

    checked_out = visitor_crud.check_out(db, visitor.id)

    assert checked_out.status == VisitorStatus.CHECKED_OUT.value
    assert checked_out.check_out_time >= checked_out.check_in_time


def test_approval_records_actor(db, make_location, make_visitor):
    visitor = make_visitor(make_location())

    approved = visitor_crud.update_status(
        db, visitor.id, VisitorStatus.APPROVED, "Sarah Johnson", "See you soon")

    assert approved.approved_by == "Sarah Johnson"
    assert approved.approved_at is not None
    assert approved.notes == "See you soon"


def test_status_update_accepts_any_target(db, make_location, make_visitor):
    visitor = make_visitor(make_location(), status=VisitorStatus.CHECKED_OUT)

    reopened = visitor_crud.update_status(
        db, visitor.id, VisitorStatus.AWAITING_APPROVAL)

    assert reopened.status == VisitorStatus.AWAITING_APPROVAL.value


def test_status_update_for_missing_visitor(db):
    with pytest.raises(NotFoundError):
        visitor_crud.update_status(db, 42, VisitorStatus.APPROVED)


def test_concurrent_writes_are_detected(db, make_location, make_visitor):
    visitor = make_visitor(make_location(), status=VisitorStatus.APPROVED)

    first = SessionLocal()
    second = SessionLocal()
    try:
        a = first.get(Visitor, visitor.id)
        b = second.get(Visitor, visitor.id)

        a.status = VisitorStatus.CHECKED_IN.value
        first.commit()

        b.status = VisitorStatus.REJECTED.value
        with pytest.raises(StaleDataError):
            second.commit()
        second.rollback()
    finally:
        first.close()
        second.close()


def test_delete_visitor(db, make_location, make_visitor):
    visitor = make_visitor(make_location())

    visitor_crud.delete_visitor(db, visitor.id)

    with pytest.raises(NotFoundError):
        visitor_crud.get_visitor_by_id(db, visitor.id)


def test_created_at_is_naive_utc(db, make_location):
    before = datetime.now(timezone.utc).replace(tzinfo=None)
    visitor = visitor_crud.create_visitor(db, _payload(make_location().id))

    assert visitor.created_at.tzinfo is None
    assert visitor.created_at >= before


def test_visit_lifecycle(db, make_location, monkeypatch):
    ticks = iter(datetime(2025, 1, 1, 8, minute) for minute in range(0, 60, 5))
    monkeypatch.setattr(visitor_crud, "utcnow", lambda: next(ticks))
    location = make_location()

    visitor = visitor_crud.create_visitor(db, _payload(location.id))
    registered_at = visitor.updated_at

    approved = visitor_crud.update_status(db, visitor.id, VisitorStatus.APPROVED, "Bob Smith")
    assert approved.updated_at > registered_at
    assert approved.approved_by == "Bob Smith"
    assert approved.approved_at == approved.updated_at

    checked_in = visitor_crud.check_in(db, visitor.id)
    assert checked_in.status == VisitorStatus.CHECKED_IN.value
    check_in_time = checked_in.check_in_time

    with pytest.raises(InvalidTransitionError):
        visitor_crud.check_in(db, visitor.id)

    checked_out = visitor_crud.check_out(db, visitor.id)
    assert checked_out.check_out_time > check_in_time
    assert checked_out.check_in_time == check_in_time

    with pytest.raises(InvalidTransitionError):
        visitor_crud.check_out(db, visitor.id)

    final = db.get(Visitor, visitor.id)
    assert final.status == VisitorStatus.CHECKED_OUT.value
    assert final.check_out_time == checked_out.check_out_time
