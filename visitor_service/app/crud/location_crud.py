import logging
from typing import List
from urllib.parse import quote
from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.core.schemas import Lookup
from shared.models.locations import Location
from shared.models.staff_members import StaffMember
from shared.utils.datetime_utils import utcnow
from shared.utils.exceptions import ConflictError, NotFoundError
from ..models.visitors import Visitor
from ..schemas.location_schemas import LocationCreate, LocationOut, LocationUpdate

logger = logging.getLogger(__name__)

QR_CODE_SERVICE = "https://api.qrserver.com/v1/create-qr-code/?size=200x200&data="


def generate_registration_slug(name: str) -> str:
    slug = name.strip().lower().replace(" ", "-").replace("&", "and")
    for ch in "'.,()":
        slug = slug.replace(ch, "")
    return slug


def qr_code_url(slug: str) -> str:
    target = f"{settings.APP_BASE_URL}/register/{slug}"
    return QR_CODE_SERVICE + quote(target, safe="")


def _unique_slug(db: Session, name: str) -> str:
    base = generate_registration_slug(name) or "location"
    slug, n = base, 2
    while db.query(Location.id).filter(Location.registration_url == slug).first():
        slug = f"{base}-{n}"
        n += 1
    return slug


def _to_out(db: Session, location: Location) -> LocationOut:
    out = LocationOut.model_validate(location)
    out.visitor_count = db.query(func.count(Visitor.id)).filter(
        Visitor.location_id == location.id).scalar() or 0
    out.staff_count = db.query(func.count(StaffMember.id)).filter(
        StaffMember.location_id == location.id).scalar() or 0
    return out


def get_location_by_id(db: Session, location_id: int) -> Location:
    location = db.query(Location).filter(Location.id == location_id).first()
    if not location:
        raise NotFoundError("Location not found")
    return location


def get_locations(db: Session, active_only: bool = False) -> List[LocationOut]:
    query = db.query(Location)
    if active_only:
        query = query.filter(Location.is_active == True)
    return [_to_out(db, l) for l in query.order_by(Location.name).all()]


def get_location(db: Session, location_id: int) -> LocationOut:
    return _to_out(db, get_location_by_id(db, location_id))


def get_location_by_slug(db: Session, slug: str) -> LocationOut:
    location = db.query(Location).filter(
        Location.registration_url == slug).first()
    if not location:
        raise NotFoundError("Location not found")
    return _to_out(db, location)


def get_location_lookup(db: Session) -> List[Lookup]:
    rows = db.query(Location.id, Location.name).filter(
        Location.is_active == True).order_by(Location.name).all()
    return [Lookup(id=r.id, name=r.name) for r in rows]


def create_location(db: Session, data: LocationCreate) -> LocationOut:
    slug = _unique_slug(db, data.name)
    location = Location(
        **data.model_dump(),
        registration_url=slug,
        qr_code_url=qr_code_url(slug),
    )
    db.add(location)
    db.commit()
    db.refresh(location)
    logger.info(f"Location {location.id} created with slug '{slug}'")
    return _to_out(db, location)


def update_location(db: Session, location_id: int, data: LocationUpdate) -> LocationOut:
    # slug stays fixed so printed QR codes keep working
    location = get_location_by_id(db, location_id)
    for key, value in data.model_dump(exclude_unset=True).items():
        if key == "is_active" and value is None:
            continue
        setattr(location, key, value)
    location.updated_at = utcnow()
    db.commit()
    db.refresh(location)
    return _to_out(db, location)


def delete_location(db: Session, location_id: int) -> None:
    location = get_location_by_id(db, location_id)

    in_use = db.query(Visitor.id).filter(Visitor.location_id == location_id).first() or \
        db.query(StaffMember.id).filter(StaffMember.location_id == location_id).first()
    if in_use:
        raise ConflictError(
            "Location has visitors or staff members and cannot be deleted")

    db.delete(location)
    db.commit()
    logger.info(f"Location {location_id} deleted")


def toggle_location_status(db: Session, location_id: int) -> LocationOut:
    location = get_location_by_id(db, location_id)
    location.is_active = not location.is_active
    location.updated_at = utcnow()
    db.commit()
    db.refresh(location)
    return _to_out(db, location)
