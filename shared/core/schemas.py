from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Generic, Optional, TypeVar, Union

# Shared properties
T = TypeVar("T")


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase JSON (the SPA's wire format)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserToken(BaseModel):
    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: str
    location_id: Optional[int] = None
    account_type: str = "user"  # "user" or "staff"
    exp: Optional[int] = None

    @property
    def is_admin(self) -> bool:
        return self.role.lower() == "admin"


class Lookup(BaseModel):
    id: Union[int, str]
    name: str

    model_config = {"from_attributes": True}


class JsonOutResult(BaseModel, Generic[T]):
    data: Optional[T] = None
    status: str
    status_code: str
    message: str
