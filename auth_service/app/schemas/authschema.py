from typing import Optional
from pydantic import Field

from shared.core.schemas import CamelModel
from ..schemas.userschema import UserOut


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(CamelModel):
    token: str
    token_type: str = "bearer"
    user: UserOut


class CurrentUser(CamelModel):
    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: str
    location_id: Optional[int] = None
    account_type: str
