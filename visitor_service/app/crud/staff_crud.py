import logging
from typing import List
from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.models.locations import Location
from shared.models.staff_members import StaffMember
from shared.utils.datetime_utils import utcnow
from shared.utils.exceptions import DuplicateError, NotFoundError
from ..schemas.staff_schemas import StaffCreate, StaffOut, StaffUpdate

logger = logging.getLogger(__name__)


def get_staff_by_id(db: Session, staff_id: int) -> StaffMember:
    staff = db.query(StaffMember).filter(StaffMember.id == staff_id).first()
    if not staff:
        raise NotFoundError("Staff member not found")
    return staff


def _ensure_location(db: Session, location_id: int):
    if not db.query(Location.id).filter(Location.id == location_id).first():
        raise NotFoundError("Location not found")


def _ensure_unique_email(db: Session, email: str, exclude_id: int = None):
    query = db.query(StaffMember.id).filter(
        func.lower(StaffMember.email) == email.lower())
    if exclude_id is not None:
        query = query.filter(StaffMember.id != exclude_id)
    if query.first():
        raise DuplicateError(f"Email '{email}' is already registered.")


def get_all_staff(db: Session) -> List[StaffOut]:
    staff = db.query(StaffMember).order_by(
        StaffMember.first_name, StaffMember.last_name).all()
    return [StaffOut.model_validate(s) for s in staff]


def get_active_staff(db: Session) -> List[StaffOut]:
    staff = db.query(StaffMember).filter(StaffMember.is_active == True).order_by(
        StaffMember.first_name, StaffMember.last_name).all()
    return [StaffOut.model_validate(s) for s in staff]


def get_staff_by_location(db: Session, location_id: int) -> List[StaffOut]:
    staff = db.query(StaffMember).filter(
        StaffMember.location_id == location_id,
        StaffMember.is_active == True
    ).order_by(StaffMember.first_name, StaffMember.last_name).all()
    return [StaffOut.model_validate(s) for s in staff]


def get_staff(db: Session, staff_id: int) -> StaffOut:
    return StaffOut.model_validate(get_staff_by_id(db, staff_id))


def create_staff(db: Session, data: StaffCreate) -> StaffOut:
    _ensure_location(db, data.location_id)
    _ensure_unique_email(db, data.email)

    staff = StaffMember(**data.model_dump(exclude={"password"}))
    if data.password:
        staff.set_password(data.password)

    db.add(staff)
    db.commit()
    db.refresh(staff)
    logger.info(f"Staff member {staff.id} ({staff.email}) created")
    return StaffOut.model_validate(staff)


def update_staff(db: Session, staff_id: int, data: StaffUpdate) -> StaffOut:
    staff = get_staff_by_id(db, staff_id)
    _ensure_location(db, data.location_id)
    _ensure_unique_email(db, data.email, exclude_id=staff_id)

    for key, value in data.model_dump(exclude={"password", "is_active"}).items():
        setattr(staff, key, value)
    if data.is_active is not None:
        staff.is_active = data.is_active
    if data.password:
        staff.set_password(data.password)
    staff.updated_at = utcnow()

    db.commit()
    db.refresh(staff)
    return StaffOut.model_validate(staff)


def delete_staff(db: Session, staff_id: int) -> None:
    staff = get_staff_by_id(db, staff_id)
    db.delete(staff)
    db.commit()
    logger.info(f"Staff member {staff_id} deleted")


def toggle_staff_status(db: Session, staff_id: int) -> StaffOut:
    staff = get_staff_by_id(db, staff_id)
    staff.is_active = not staff.is_active
    staff.updated_at = utcnow()
    db.commit()
    db.refresh(staff)
    return StaffOut.model_validate(staff)
