from datetime import datetime
from typing import Dict, Optional
from pydantic import EmailStr, Field, field_validator

from shared.core.schemas import CamelModel
from shared.utils.datetime_utils import to_naive_utc
from ..enum.visitor_enum import VisitorStatus


class VisitorCreate(CamelModel):
    location_id: int
    full_name: str = Field(..., min_length=1, max_length=200)
    phone_number: str = Field(..., min_length=1, max_length=20)
    email: Optional[EmailStr] = None
    company_name: Optional[str] = Field(None, max_length=200)
    purpose_of_visit: str = Field(..., min_length=1, max_length=200)
    whom_to_meet: str = Field(..., min_length=1, max_length=200)
    date_time: datetime
    id_proof_type: Optional[str] = Field(None, max_length=50)
    id_proof_number: Optional[str] = Field(None, max_length=100)
    photo_url: Optional[str] = Field(None, max_length=500)
    custom_fields: Optional[Dict[str, str]] = None

    @field_validator("date_time")
    @classmethod
    def _naive_utc(cls, v: datetime) -> datetime:
        return to_naive_utc(v)

    @field_validator("email", "company_name", "id_proof_type", "id_proof_number", "photo_url", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class VisitorStatusUpdate(CamelModel):
    status: VisitorStatus
    notes: Optional[str] = Field(None, max_length=1000)


class VisitorOut(CamelModel):
    id: int
    location_id: int
    location_name: str = ""
    full_name: str
    phone_number: str
    email: Optional[str] = None
    company_name: Optional[str] = None
    purpose_of_visit: str
    whom_to_meet: str
    date_time: datetime
    id_proof_type: Optional[str] = None
    id_proof_number: Optional[str] = None
    photo_url: Optional[str] = None
    status: VisitorStatus
    created_at: datetime
    updated_at: datetime
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    notes: Optional[str] = None
    custom_fields: Dict[str, Optional[str]] = {}


class VisitorStats(CamelModel):
    total: int
    awaiting_approval: int
    approved: int
    checked_in: int
    checked_out: int
    rejected: int
    approval_rate: float
