from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin
from shared.core.database import get_db
from ..crud import custom_field_crud as crud
from ..schemas.custom_field_schemas import CustomFieldCreate, CustomFieldOut, CustomFieldUpdate

router = APIRouter(prefix="/api/custom-fields", tags=["custom fields"])


@router.get("", response_model=List[CustomFieldOut])
def get_custom_fields(db: Session = Depends(get_db)):
    # registration form renders these without login
    return crud.get_custom_fields(db)


@router.get("/all", response_model=List[CustomFieldOut], dependencies=[Depends(allow_admin)])
def get_all_custom_fields(db: Session = Depends(get_db)):
    return crud.get_custom_fields(db, include_inactive=True)


@router.get("/{field_id}", response_model=CustomFieldOut)
def get_custom_field(field_id: int, db: Session = Depends(get_db)):
    return crud.get_custom_field(db, field_id)


@router.post("", response_model=CustomFieldOut, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(allow_admin)])
def create_custom_field(data: CustomFieldCreate, db: Session = Depends(get_db)):
    return crud.create_custom_field(db, data)


@router.put("/{field_id}", response_model=CustomFieldOut, dependencies=[Depends(allow_admin)])
def update_custom_field(field_id: int, data: CustomFieldUpdate, db: Session = Depends(get_db)):
    return crud.update_custom_field(db, field_id, data)


@router.delete("/{field_id}", status_code=status.HTTP_204_NO_CONTENT,
               dependencies=[Depends(allow_admin)])
def delete_custom_field(field_id: int, db: Session = Depends(get_db)):
    crud.delete_custom_field(db, field_id)
