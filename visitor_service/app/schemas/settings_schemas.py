from datetime import datetime
from typing import Optional
from pydantic import EmailStr, Field

from shared.core.schemas import CamelModel


class SettingUpsert(CamelModel):
    value: str
    description: Optional[str] = Field(None, max_length=200)


class SettingOut(CamelModel):
    id: int
    key: str
    value: str
    description: Optional[str] = None
    updated_at: datetime


class EmailTestRequest(CamelModel):
    to_email: EmailStr
    subject: str = "Test Email from Visitor Management System"
    body: str = "This is a test email to verify SMTP configuration."
