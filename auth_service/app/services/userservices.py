import logging
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.models.staff_members import StaffMember
from shared.models.users import Users
from shared.utils.datetime_utils import utcnow
from shared.utils.enums import AccountType
from shared.utils.exceptions import DuplicateError, NotFoundError
from ..schemas.userschema import UserCreate, UserOut, UserUpdate

logger = logging.getLogger(__name__)


def _staff_record(db: Session, email: str) -> Optional[StaffMember]:
    return db.query(StaffMember).filter(
        func.lower(StaffMember.email) == email.lower()).first()


def to_user_out(db: Session, user: Users) -> UserOut:
    # a user working at a location also has a staff record with the same email
    staff = _staff_record(db, user.email)
    return UserOut(
        id=str(user.id),
        first_name=user.first_name,
        last_name=user.last_name,
        full_name=user.full_name,
        email=user.email,
        phone_number=user.phone_number,
        extension=user.extension,
        department=user.department,
        role=user.role,
        is_active=user.is_active,
        created_at=user.created_at,
        location_id=staff.location_id if staff else None,
        location_name=staff.location_name if staff else None,
        role_configuration_id=user.role_configuration_id,
        account_type=AccountType.USER.value,
    )


def staff_to_user_out(staff: StaffMember) -> UserOut:
    return UserOut(
        id=str(staff.id),
        first_name=staff.first_name,
        last_name=staff.last_name,
        full_name=staff.full_name,
        email=staff.email,
        phone_number=staff.phone_number,
        extension=staff.extension,
        department=staff.designation,
        role=staff.role,
        is_active=staff.is_active,
        created_at=staff.created_at,
        location_id=staff.location_id,
        location_name=staff.location_name,
        account_type=AccountType.STAFF.value,
    )


def get_user_by_email(db: Session, email: str) -> Optional[Users]:
    return db.query(Users).filter(func.lower(Users.email) == email.lower()).first()


def get_user_by_id(db: Session, user_id: int) -> Users:
    user = db.query(Users).filter(Users.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user


def get_user(db: Session, user_id: int) -> UserOut:
    return to_user_out(db, get_user_by_id(db, user_id))


def get_users(db: Session) -> List[UserOut]:
    users = db.query(Users).filter(Users.is_active == True).order_by(
        Users.first_name, Users.last_name).all()
    return [to_user_out(db, u) for u in users]


def create_user(db: Session, data: UserCreate) -> UserOut:
    if get_user_by_email(db, data.email):
        raise DuplicateError(f"Email '{data.email}' is already registered")

    now = utcnow()
    user = Users(
        **data.model_dump(exclude={"password", "role"}),
        role=data.role.value,
        is_active=True,
        created_at=now,
        updated_at=now,
    )
    user.set_password(data.password)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"User {user.id} ({user.email}) registered as {user.role}")
    return to_user_out(db, user)


def update_user(db: Session, user_id: int, data: UserUpdate) -> UserOut:
    user = get_user_by_id(db, user_id)

    other = get_user_by_email(db, data.email)
    if other and other.id != user.id:
        raise DuplicateError(f"Email '{data.email}' is already registered")

    for key, value in data.model_dump(exclude={"password", "role", "is_active"}).items():
        setattr(user, key, value)
    user.role = data.role.value
    if data.is_active is not None:
        user.is_active = data.is_active
    if data.password:
        user.set_password(data.password)
    user.updated_at = utcnow()

    db.commit()
    db.refresh(user)
    return to_user_out(db, user)


def delete_user(db: Session, user_id: int) -> None:
    """Deactivate the account; rows are kept for the audit trail on visitors."""
    user = get_user_by_id(db, user_id)
    user.is_active = False
    user.updated_at = utcnow()
    db.commit()
    logger.info(f"User {user_id} deactivated")
