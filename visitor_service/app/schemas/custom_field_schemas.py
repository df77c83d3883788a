import json
from datetime import datetime
from typing import List, Optional
from pydantic import Field, field_validator

from shared.core.schemas import CamelModel
from ..enum.visitor_enum import CustomFieldType


class CustomFieldBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    type: CustomFieldType = CustomFieldType.TEXT
    label: str = Field(..., min_length=1, max_length=200)
    placeholder: Optional[str] = Field(None, max_length=200)
    required: bool = False
    options: List[str] = []
    order: int = 0

    @field_validator("options", mode="before")
    @classmethod
    def _parse_options(cls, v):
        # stored as JSON text on the model
        if v is None or v == "":
            return []
        if isinstance(v, str):
            try:
                v = json.loads(v)
            except ValueError:
                return []
        return v


class CustomFieldCreate(CustomFieldBase):
    pass


class CustomFieldUpdate(CustomFieldBase):
    is_active: bool = True


class CustomFieldOut(CustomFieldBase):
    id: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
