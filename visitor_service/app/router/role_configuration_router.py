from typing import List
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin, validate_current_token
from shared.core.database import get_db
from ..crud import role_configuration_crud as crud
from ..schemas.role_configuration_schemas import (
    RoleConfigurationCreate, RoleConfigurationOut, RoleConfigurationUpdate,
    RolePermissionOut, RoleRouteOut
)

router = APIRouter(
    prefix="/api/role-configurations",
    tags=["role configuration"],
    dependencies=[Depends(validate_current_token)]
)


@router.get("", response_model=List[RoleConfigurationOut])
def get_role_configurations(db: Session = Depends(get_db)):
    return crud.get_role_configurations(db)


@router.get("/check-permission", response_model=bool)
def check_permission(
        role_name: str = Query(..., alias="roleName"),
        permission_name: str = Query(..., alias="permissionName"),
        db: Session = Depends(get_db)):
    return crud.has_permission(db, role_name, permission_name)


@router.get("/by-name/{role_name}", response_model=RoleConfigurationOut)
def get_role_configuration_by_name(role_name: str, db: Session = Depends(get_db)):
    return crud.get_role_configuration_by_name(db, role_name)


@router.post("/seed", response_model=int, dependencies=[Depends(allow_admin)])
def seed_default_role_configurations(db: Session = Depends(get_db)):
    return crud.seed_default_role_configurations(db)


@router.get("/{role_id}", response_model=RoleConfigurationOut)
def get_role_configuration(role_id: int, db: Session = Depends(get_db)):
    return crud.get_role_configuration(db, role_id)


@router.get("/{role_id}/permissions", response_model=List[RolePermissionOut])
def get_role_permissions(role_id: int, db: Session = Depends(get_db)):
    return crud.get_role_permissions(db, role_id)


@router.get("/{role_id}/routes", response_model=List[RoleRouteOut])
def get_role_routes(role_id: int, db: Session = Depends(get_db)):
    return crud.get_role_routes(db, role_id)


@router.post("", response_model=RoleConfigurationOut, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(allow_admin)])
def create_role_configuration(data: RoleConfigurationCreate, db: Session = Depends(get_db)):
    return crud.create_role_configuration(db, data)


@router.put("/{role_id}", response_model=RoleConfigurationOut, dependencies=[Depends(allow_admin)])
def update_role_configuration(role_id: int, data: RoleConfigurationUpdate, db: Session = Depends(get_db)):
    return crud.update_role_configuration(db, role_id, data)


@router.delete("/{role_id}", status_code=status.HTTP_204_NO_CONTENT,
               dependencies=[Depends(allow_admin)])
def delete_role_configuration(role_id: int, db: Session = Depends(get_db)):
    crud.delete_role_configuration(db, role_id)


@router.patch("/{role_id}/activate", response_model=RoleConfigurationOut,
              dependencies=[Depends(allow_admin)])
def activate_role_configuration(role_id: int, db: Session = Depends(get_db)):
    return crud.set_role_configuration_active(db, role_id, True)


@router.patch("/{role_id}/deactivate", response_model=RoleConfigurationOut,
              dependencies=[Depends(allow_admin)])
def deactivate_role_configuration(role_id: int, db: Session = Depends(get_db)):
    return crud.set_role_configuration_active(db, role_id, False)
