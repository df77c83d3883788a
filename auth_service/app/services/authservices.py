import logging
from fastapi import status
from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.core import auth
from shared.helpers.json_response_helper import error_response
from shared.models.staff_members import StaffMember
from shared.utils.app_status_code import AppStatusCode
from ..schemas.authschema import LoginRequest, LoginResponse
from ..schemas.userschema import UserOut
from . import userservices

logger = logging.getLogger(__name__)


def get_user_token(user: UserOut) -> LoginResponse:
    token = auth.create_access_token({
        "user_id": user.id,
        "email": user.email,
        "name": user.full_name,
        "role": user.role,
        "location_id": user.location_id,
        "account_type": user.account_type,
    })
    return LoginResponse(token=token, user=user)


def _invalid_credentials():
    return error_response(
        message="Invalid credentials",
        status_code=AppStatusCode.AUTHENTICATION_CREDENTIALS_INVALID,
        http_status=status.HTTP_401_UNAUTHORIZED
    )


def login(db: Session, request: LoginRequest) -> LoginResponse:
    """Password login against user accounts first, then login-capable staff."""
    user = userservices.get_user_by_email(db, request.email)
    if user and user.is_active and user.verify_password(request.password):
        logger.info(f"User {user.id} logged in")
        return get_user_token(userservices.to_user_out(db, user))

    staff = db.query(StaffMember).filter(
        func.lower(StaffMember.email) == request.email.lower(),
        StaffMember.can_login == True,
        StaffMember.is_active == True
    ).first()
    if staff and staff.verify_password(request.password):
        logger.info(f"Staff member {staff.id} logged in")
        return get_user_token(userservices.staff_to_user_out(staff))

    logger.warning(f"Failed login for {request.email}")
    return _invalid_credentials()

