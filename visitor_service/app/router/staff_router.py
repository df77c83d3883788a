from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin, validate_current_token
from shared.core.database import get_db
from ..crud import staff_crud as crud
from ..schemas.staff_schemas import StaffCreate, StaffOut, StaffUpdate

router = APIRouter(
    prefix="/api/staff",
    tags=["staff"],
    dependencies=[Depends(validate_current_token)]
)


@router.get("", response_model=List[StaffOut])
def get_all_staff(db: Session = Depends(get_db)):
    return crud.get_all_staff(db)


@router.get("/active", response_model=List[StaffOut])
def get_active_staff(db: Session = Depends(get_db)):
    return crud.get_active_staff(db)


@router.get("/location/{location_id}", response_model=List[StaffOut])
def get_staff_by_location(location_id: int, db: Session = Depends(get_db)):
    return crud.get_staff_by_location(db, location_id)


@router.get("/{staff_id}", response_model=StaffOut)
def get_staff(staff_id: int, db: Session = Depends(get_db)):
    return crud.get_staff(db, staff_id)


@router.post("", response_model=StaffOut, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(allow_admin)])
def create_staff(data: StaffCreate, db: Session = Depends(get_db)):
    return crud.create_staff(db, data)


@router.put("/{staff_id}", response_model=StaffOut, dependencies=[Depends(allow_admin)])
def update_staff(staff_id: int, data: StaffUpdate, db: Session = Depends(get_db)):
    return crud.update_staff(db, staff_id, data)


@router.delete("/{staff_id}", status_code=status.HTTP_204_NO_CONTENT,
               dependencies=[Depends(allow_admin)])
def delete_staff(staff_id: int, db: Session = Depends(get_db)):
    crud.delete_staff(db, staff_id)


@router.patch("/{staff_id}/toggle-status", response_model=StaffOut,
              dependencies=[Depends(allow_admin)])
def toggle_staff_status(staff_id: int, db: Session = Depends(get_db)):
    return crud.toggle_staff_status(db, staff_id)
