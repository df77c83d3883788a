import logging
from datetime import date, datetime, time, timedelta
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.models.locations import Location
from shared.models.staff_members import StaffMember
from shared.utils.datetime_utils import today, utcnow
from shared.utils.exceptions import InvalidTransitionError, NotFoundError, UnknownStaffError, VisitorAppError
from ..enum.visitor_enum import APPROVED_STATUSES, VisitorStatus
from ..models.custom_fields import CustomField, VisitorCustomFieldValue
from ..models.visitors import Visitor
from ..schemas.visitor_schemas import VisitorCreate, VisitorOut, VisitorStats
from ...util.approval_token import validate_approval_token

logger = logging.getLogger(__name__)


def get_visitor_by_id(db: Session, visitor_id: int) -> Visitor:
    visitor = db.query(Visitor).filter(Visitor.id == visitor_id).first()
    if not visitor:
        raise NotFoundError("Visitor not found")
    return visitor


def get_visitor(db: Session, visitor_id: int) -> VisitorOut:
    return VisitorOut.model_validate(get_visitor_by_id(db, visitor_id))


def create_visitor(db: Session, data: VisitorCreate) -> Visitor:
    location = db.query(Location).filter(Location.id == data.location_id).first()
    if not location:
        raise NotFoundError("Location not found")

    now = utcnow()
    visitor = Visitor(
        **data.model_dump(exclude={"custom_fields"}),
        status=VisitorStatus.AWAITING_APPROVAL.value,
        created_at=now,
        updated_at=now,
    )
    db.add(visitor)
    db.flush()

    # values are kept only for fields the admin has defined
    if data.custom_fields:
        fields = db.query(CustomField).filter(
            CustomField.name.in_(list(data.custom_fields.keys())),
            CustomField.is_active == True
        ).all()
        for field in fields:
            db.add(VisitorCustomFieldValue(
                visitor_id=visitor.id,
                custom_field_id=field.id,
                value=data.custom_fields[field.name]
            ))

    db.commit()
    db.refresh(visitor)
    logger.info(
        f"Visitor {visitor.id} registered at location {visitor.location_id} to meet '{visitor.whom_to_meet}'")
    return visitor


def _day_start(value: date) -> datetime:
    return datetime.combine(value, time.min)


def _visitor_query(db: Session, location_id: Optional[int] = None, visit_date: Optional[date] = None,
                   status: Optional[VisitorStatus] = None):
    query = db.query(Visitor)

    if location_id is not None:
        query = query.filter(Visitor.location_id == location_id)
    if visit_date is not None:
        query = query.filter(
            Visitor.date_time >= _day_start(visit_date),
            Visitor.date_time < _day_start(visit_date + timedelta(days=1)))
    if status is not None:
        query = query.filter(Visitor.status == status.value)

    return query


def get_visitors(db: Session, location_id: Optional[int] = None, visit_date: Optional[date] = None,
                 status: Optional[VisitorStatus] = None) -> List[VisitorOut]:
    visitors = (
        _visitor_query(db, location_id, visit_date, status)
        .order_by(Visitor.created_at.desc(), Visitor.id.desc())
        .all()
    )
    return [VisitorOut.model_validate(v) for v in visitors]


def get_todays_visitors(db: Session, location_id: Optional[int] = None) -> List[VisitorOut]:
    return get_visitors(db, location_id, today())


def get_visitors_by_staff(db: Session, staff_name: str, status: Optional[VisitorStatus] = None,
                          location_id: Optional[int] = None) -> List[VisitorOut]:
    query = _visitor_query(db, location_id, None, status).filter(
        Visitor.whom_to_meet == staff_name)
    visitors = query.order_by(Visitor.created_at.desc(), Visitor.id.desc()).all()
    return [VisitorOut.model_validate(v) for v in visitors]


def get_visitor_stats(db: Session, location_id: Optional[int] = None, from_date: Optional[date] = None,
                      to_date: Optional[date] = None) -> VisitorStats:
    query = db.query(Visitor.status, func.count(Visitor.id))

    if location_id is not None:
        query = query.filter(Visitor.location_id == location_id)
    if from_date is not None:
        query = query.filter(Visitor.date_time >= _day_start(from_date))
    if to_date is not None:
        query = query.filter(
            Visitor.date_time < _day_start(to_date + timedelta(days=1)))

    counts = dict(query.group_by(Visitor.status).all())

    total = sum(counts.values())
    approved = sum(counts.get(s.value, 0) for s in APPROVED_STATUSES)
    approval_rate = round(approved / total * 100, 1) if total > 0 else 0.0

    return VisitorStats(
        total=total,
        awaiting_approval=counts.get(VisitorStatus.AWAITING_APPROVAL.value, 0),
        approved=approved,
        checked_in=counts.get(VisitorStatus.CHECKED_IN.value, 0),
        checked_out=counts.get(VisitorStatus.CHECKED_OUT.value, 0),
        rejected=counts.get(VisitorStatus.REJECTED.value, 0),
        approval_rate=approval_rate,
    )


def update_status(db: Session, visitor_id: int, status: VisitorStatus, actor_name: Optional[str] = None,
                  notes: Optional[str] = None) -> Visitor:
    """Write a new status as requested.

    Only check-in and check-out are guarded; this path accepts any target
    status. Approval stamps approved_by/approved_at when an actor is known.
    """
    visitor = get_visitor_by_id(db, visitor_id)
    previous = visitor.status
    now = utcnow()

    visitor.status = status.value
    visitor.notes = notes
    visitor.updated_at = now
    if status == VisitorStatus.APPROVED and actor_name:
        visitor.approved_by = actor_name
        visitor.approved_at = now

    db.commit()
    db.refresh(visitor)
    logger.info(
        f"Visitor {visitor.id} status {previous} -> {visitor.status} by {actor_name or 'unknown'}")
    return visitor


def check_in(db: Session, visitor_id: int) -> Visitor:
    visitor = get_visitor_by_id(db, visitor_id)
    if visitor.status != VisitorStatus.APPROVED.value:
        raise InvalidTransitionError("Cannot check in visitor")

    now = utcnow()
    visitor.status = VisitorStatus.CHECKED_IN.value
    visitor.check_in_time = now
    visitor.updated_at = now
    db.commit()
    db.refresh(visitor)
    logger.info(f"Visitor {visitor.id} checked in")
    return visitor


def check_out(db: Session, visitor_id: int) -> Visitor:
    visitor = get_visitor_by_id(db, visitor_id)
    if visitor.status != VisitorStatus.CHECKED_IN.value:
        raise InvalidTransitionError("Cannot check out visitor")

    now = utcnow()
    visitor.status = VisitorStatus.CHECKED_OUT.value
    visitor.check_out_time = now
    visitor.updated_at = now
    db.commit()
    db.refresh(visitor)
    logger.info(f"Visitor {visitor.id} checked out")
    return visitor


def delete_visitor(db: Session, visitor_id: int) -> None:
    visitor = get_visitor_by_id(db, visitor_id)
    db.delete(visitor)
    db.commit()
    logger.info(f"Visitor {visitor_id} deleted")


def _staff_for_token(db: Session, visitor_id: int, token: Optional[str]) -> StaffMember:
    try:
        claims = validate_approval_token(visitor_id, token)
    except VisitorAppError as e:
        logger.warning(
            f"Approval link rejected for visitor {visitor_id}: {e}")
        raise

    staff = db.query(StaffMember).filter(
        func.lower(StaffMember.email) == claims.staff_email.lower()).first()
    if not staff:
        logger.warning(
            f"Approval link for visitor {visitor_id} names unknown staff {claims.staff_email}")
        raise UnknownStaffError()
    return staff


def approve_via_token(db: Session, visitor_id: int, token: Optional[str]) -> Visitor:
    staff = _staff_for_token(db, visitor_id, token)
    get_visitor_by_id(db, visitor_id)

    name = staff.full_name
    note = f"Approved via email link by {name} at {utcnow():%Y-%m-%d %H:%M:%S} UTC"
    return update_status(db, visitor_id, VisitorStatus.APPROVED, name, note)


def reject_via_token(db: Session, visitor_id: int, token: Optional[str], reason: Optional[str] = None) -> Visitor:
    staff = _staff_for_token(db, visitor_id, token)
    get_visitor_by_id(db, visitor_id)

    note = reason or f"Rejected via email link by {staff.full_name} at {utcnow():%Y-%m-%d %H:%M:%S} UTC"
    return update_status(db, visitor_id, VisitorStatus.REJECTED, staff.full_name, note)
