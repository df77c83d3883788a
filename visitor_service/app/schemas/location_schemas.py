from datetime import datetime
from typing import Optional
from pydantic import Field

from shared.core.schemas import CamelModel


class LocationBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    address: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = Field(None, max_length=1000)


class LocationCreate(LocationBase):
    pass


class LocationUpdate(LocationBase):
    is_active: Optional[bool] = None


class LocationOut(LocationBase):
    id: int
    is_active: bool
    registration_url: str
    qr_code_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    visitor_count: int = 0
    staff_count: int = 0
