from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin, validate_current_token
from shared.core.database import get_db
from shared.core.schemas import Lookup, UserToken
from ..crud import location_crud as crud
from ..schemas.location_schemas import LocationCreate, LocationOut, LocationUpdate

router = APIRouter(prefix="/api/locations", tags=["locations"])


@router.get("", response_model=List[LocationOut])
def get_locations(
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.get_locations(db)


@router.get("/lookup", response_model=List[Lookup])
def location_lookup(db: Session = Depends(get_db)):
    return crud.get_location_lookup(db)


@router.get("/url/{slug}", response_model=LocationOut)
def get_location_by_url(slug: str, db: Session = Depends(get_db)):
    # kiosk registration page, no login
    return crud.get_location_by_slug(db, slug)


@router.get("/{location_id}", response_model=LocationOut)
def get_location(
        location_id: int,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.get_location(db, location_id)


@router.post("", response_model=LocationOut, status_code=status.HTTP_201_CREATED)
def create_location(
        data: LocationCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(allow_admin)):
    return crud.create_location(db, data)


@router.put("/{location_id}", response_model=LocationOut)
def update_location(
        location_id: int,
        data: LocationUpdate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(allow_admin)):
    return crud.update_location(db, location_id, data)


@router.delete("/{location_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_location(
        location_id: int,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(allow_admin)):
    crud.delete_location(db, location_id)


@router.patch("/{location_id}/toggle-status", response_model=LocationOut)
def toggle_location_status(
        location_id: int,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(allow_admin)):
    return crud.toggle_location_status(db, location_id)
