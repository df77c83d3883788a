import logging
from dataclasses import dataclass
from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.core.schemas import UserToken
from shared.models.staff_members import StaffMember
from shared.utils.enums import AccountType
from shared.utils.exceptions import AccessDeniedError

logger = logging.getLogger(__name__)

NO_LOCATION_MESSAGE = "Access denied: No location assignment found."
OTHER_LOCATION_MESSAGE = "Access denied: You can only manage visitors for your assigned location."


@dataclass(frozen=True)
class VisitorScope:
    """Locations a caller may see. ``location_id`` is None only for admins."""
    is_admin: bool
    location_id: Optional[int] = None

    def covers(self, location_id: int) -> bool:
        return self.is_admin or self.location_id == location_id


def _staff_location(db: Session, current_user: UserToken) -> Optional[int]:
    # staff logins carry the staff id; user accounts only match by email
    if current_user.account_type == AccountType.STAFF.value and current_user.user_id.isdigit():
        staff = db.query(StaffMember).filter(
            StaffMember.id == int(current_user.user_id)).first()
        if staff:
            return staff.location_id

    if current_user.email:
        staff = db.query(StaffMember).filter(
            func.lower(StaffMember.email) == current_user.email.lower()).first()
        if staff:
            return staff.location_id

    return None


def resolve_scope(db: Session, current_user: UserToken) -> VisitorScope:
    if current_user.is_admin:
        return VisitorScope(is_admin=True)

    location_id = _staff_location(db, current_user) or current_user.location_id
    if location_id is None:
        logger.info(
            f"No location assignment for user {current_user.user_id} ({current_user.email})")
        raise AccessDeniedError(NO_LOCATION_MESSAGE)

    return VisitorScope(is_admin=False, location_id=location_id)


def ensure_location_filter(scope: VisitorScope, requested_location_id: Optional[int]) -> Optional[int]:
    """Location to filter a visitor query by.

    Admins get whatever they asked for (None = all). Everybody else is
    pinned to their own location, and asking for another one is refused.
    """
    if scope.is_admin:
        return requested_location_id

    if requested_location_id is not None and requested_location_id != scope.location_id:
        logger.info(
            f"Denied location {requested_location_id} for scope {scope.location_id}")
        raise AccessDeniedError(
            "Access denied: You can only view visitors for your assigned location.")

    return scope.location_id


def ensure_visitor_in_scope(scope: VisitorScope, visitor) -> None:
    if not scope.covers(visitor.location_id):
        logger.info(
            f"Denied visitor {visitor.id} at location {visitor.location_id} for scope {scope.location_id}")
        raise AccessDeniedError(OTHER_LOCATION_MESSAGE)
