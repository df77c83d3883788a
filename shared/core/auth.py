from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import status, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from pydantic import ValidationError

from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import UserRole
from shared.core.config import settings
from shared.helpers.json_response_helper import error_response
from shared.core.schemas import UserToken

security = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    payload = data.copy()

    expires = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.JWT_EXPIRE_MINUTES))
    payload['exp'] = expires

    # user_id is always a string claim (staff and user ids share the claim)
    if 'user_id' in payload:
        payload['user_id'] = str(payload['user_id'])

    token = jwt.encode(payload, settings.JWT_SECRET,
                       algorithm=settings.JWT_ALGORITHM)
    return token


def verify_token(token: str) -> UserToken:
    """Verify and decode a JWT token."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET,
                             algorithms=[settings.JWT_ALGORITHM])
        user = UserToken(**payload)
    except (JWTError, ValidationError):
        return error_response(
            message="Invalid or expired token",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_EXPIRED,
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    if not user.user_id:
        return error_response(
            message="Invalid token structure",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_INVALID,
            http_status=status.HTTP_401_UNAUTHORIZED
        )
    return user


def validate_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> UserToken:
    if credentials is None or not credentials.credentials:
        return error_response(
            message="Not authenticated",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_INVALID,
            http_status=status.HTTP_401_UNAUTHORIZED
        )
    return verify_token(credentials.credentials)


def require_roles(*roles: str):
    allowed = {r.lower() for r in roles}

    def checker(current_user: UserToken = Depends(validate_current_token)):
        if current_user.role.lower() not in allowed:
            return error_response(
                message="Access forbidden: insufficient role",
                status_code=AppStatusCode.ACCESS_FORBIDDEN,
                http_status=status.HTTP_403_FORBIDDEN
            )
        return current_user

    return checker


allow_admin = require_roles(UserRole.ADMIN.value)
allow_reception_or_admin = require_roles(
    UserRole.RECEPTION.value, UserRole.ADMIN.value)
