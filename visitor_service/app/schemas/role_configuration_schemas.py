from datetime import datetime
from typing import List, Optional
from pydantic import Field

from shared.core.schemas import CamelModel


class RolePermissionIn(CamelModel):
    permission_name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=200)


class RoleRouteIn(CamelModel):
    route_path: str = Field(..., min_length=1, max_length=200)
    route_label: str = Field(..., min_length=1, max_length=100)
    icon_name: str = Field(..., min_length=1, max_length=50)
    sort_order: int = 0


class RoleConfigurationCreate(CamelModel):
    role_name: str = Field(..., min_length=1, max_length=50)
    display_name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    color_class: str = "bg-gray-500"
    icon_class: str = "User"
    sort_order: int = 0
    permissions: List[RolePermissionIn] = []
    routes: List[RoleRouteIn] = []


class RoleConfigurationUpdate(RoleConfigurationCreate):
    is_active: bool = True


class RolePermissionOut(RolePermissionIn):
    id: int
    is_active: bool


class RoleRouteOut(RoleRouteIn):
    id: int
    is_active: bool


class RoleConfigurationOut(CamelModel):
    id: int
    role_name: str
    display_name: str
    description: Optional[str] = None
    color_class: str
    icon_class: str
    is_active: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime
    permissions: List[RolePermissionOut] = []
    routes: List[RoleRouteOut] = []
