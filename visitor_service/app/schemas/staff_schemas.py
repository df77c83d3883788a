from datetime import datetime
from typing import Optional
from pydantic import EmailStr, Field

from shared.core.schemas import CamelModel


class StaffBase(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    location_id: int
    email: EmailStr
    mobile_number: str = Field("", max_length=20)
    phone_number: str = Field("", max_length=20)
    extension: str = Field("", max_length=10)
    designation: Optional[str] = Field(None, max_length=100)
    role: str = "staff"
    can_login: bool = False
    photo_url: Optional[str] = None


class StaffCreate(StaffBase):
    password: Optional[str] = Field(None, min_length=6)


class StaffUpdate(StaffBase):
    # blank keeps the current password
    password: Optional[str] = None
    is_active: Optional[bool] = None


class StaffOut(StaffBase):
    id: int
    full_name: str
    location_name: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
