from datetime import datetime
from typing import Optional
from pydantic import EmailStr, Field, field_validator

from shared.core.schemas import CamelModel
from shared.utils.enums import UserRole


class UserBase(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone_number: Optional[str] = Field(None, max_length=20)
    extension: Optional[str] = Field(None, max_length=20)
    department: Optional[str] = Field(None, max_length=100)
    role: UserRole = UserRole.STAFF
    role_configuration_id: Optional[int] = None

    @field_validator("role", mode="before")
    @classmethod
    def lower_role(cls, value):
        return value.lower() if isinstance(value, str) else value


class UserCreate(UserBase):
    password: str = Field(..., min_length=6)


class UserUpdate(UserBase):
    # blank keeps the current password
    password: Optional[str] = None
    is_active: Optional[bool] = None


class UserOut(CamelModel):
    id: str
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone_number: Optional[str] = None
    extension: Optional[str] = None
    department: Optional[str] = None
    role: str
    is_active: bool
    created_at: datetime
    location_id: Optional[int] = None
    location_name: Optional[str] = None
    role_configuration_id: Optional[int] = None
    account_type: str = "user"
