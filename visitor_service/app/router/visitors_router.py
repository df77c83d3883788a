from datetime import date
from typing import List, Optional
from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin, allow_reception_or_admin, validate_current_token
from shared.core.config import settings
from shared.core.database import get_db
from shared.core.schemas import UserToken
from ..crud import notification_crud, visitor_crud as crud
from ..crud.visitor_scope import ensure_location_filter, ensure_visitor_in_scope, resolve_scope
from ..enum.visitor_enum import VisitorStatus
from ..schemas.visitor_schemas import VisitorCreate, VisitorOut, VisitorStats, VisitorStatusUpdate

router = APIRouter(prefix="/api/visitors", tags=["visitors"])


@router.post("", response_model=VisitorOut, status_code=status.HTTP_201_CREATED)
def create_visitor(
        data: VisitorCreate,
        background_tasks: BackgroundTasks,
        db: Session = Depends(get_db)):
    visitor = crud.create_visitor(db, data)
    notification_crud.notify_staff_of_registration(background_tasks, db, visitor)
    return visitor


@router.get("", response_model=List[VisitorOut])
def get_visitors(
        location_id: Optional[int] = Query(None, alias="locationId"),
        visit_date: Optional[date] = Query(None, alias="date"),
        visitor_status: Optional[VisitorStatus] = Query(None, alias="status"),
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    scope = resolve_scope(db, current_user)
    return crud.get_visitors(db, ensure_location_filter(scope, location_id), visit_date, visitor_status)


@router.get("/today", response_model=List[VisitorOut])
def get_todays_visitors(
        location_id: Optional[int] = Query(None, alias="locationId"),
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    scope = resolve_scope(db, current_user)
    return crud.get_todays_visitors(db, ensure_location_filter(scope, location_id))


@router.get("/stats", response_model=VisitorStats)
def get_visitor_stats(
        location_id: Optional[int] = Query(None, alias="locationId"),
        from_date: Optional[date] = Query(None, alias="fromDate"),
        to_date: Optional[date] = Query(None, alias="toDate"),
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    scope = resolve_scope(db, current_user)
    return crud.get_visitor_stats(db, ensure_location_filter(scope, location_id), from_date, to_date)


@router.get("/staff/{staff_name}", response_model=List[VisitorOut])
def get_visitors_by_staff(
        staff_name: str,
        visitor_status: Optional[VisitorStatus] = Query(None, alias="status"),
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    scope = resolve_scope(db, current_user)
    return crud.get_visitors_by_staff(db, staff_name, visitor_status, ensure_location_filter(scope, None))


@router.get("/{visitor_id}/approve")
def approve_visitor_from_email(
        visitor_id: int,
        background_tasks: BackgroundTasks,
        token: Optional[str] = None,
        db: Session = Depends(get_db)):
    visitor = crud.approve_via_token(db, visitor_id, token)
    notification_crud.notify_status_change(
        background_tasks, db, visitor, VisitorStatus.APPROVED, visitor.notes)
    return RedirectResponse(
        url=f"{settings.APP_BASE_URL}/staff/approval-success/{visitor_id}",
        status_code=status.HTTP_302_FOUND)


@router.get("/{visitor_id}/reject")
def reject_visitor_from_email(
        visitor_id: int,
        background_tasks: BackgroundTasks,
        token: Optional[str] = None,
        reason: Optional[str] = None,
        db: Session = Depends(get_db)):
    visitor = crud.reject_via_token(db, visitor_id, token, reason)
    notification_crud.notify_status_change(
        background_tasks, db, visitor, VisitorStatus.REJECTED, reason)
    return RedirectResponse(
        url=f"{settings.APP_BASE_URL}/staff/rejection-success/{visitor_id}",
        status_code=status.HTTP_302_FOUND)


@router.get("/{visitor_id}", response_model=VisitorOut)
def get_visitor(
        visitor_id: int,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    scope = resolve_scope(db, current_user)
    visitor = crud.get_visitor_by_id(db, visitor_id)
    ensure_visitor_in_scope(scope, visitor)
    return visitor


@router.put("/{visitor_id}/status", response_model=VisitorOut)
def update_visitor_status(
        visitor_id: int,
        data: VisitorStatusUpdate,
        background_tasks: BackgroundTasks,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    scope = resolve_scope(db, current_user)
    ensure_visitor_in_scope(scope, crud.get_visitor_by_id(db, visitor_id))

    visitor = crud.update_status(
        db, visitor_id, data.status, current_user.name, data.notes)
    notification_crud.notify_status_change(
        background_tasks, db, visitor, data.status, data.notes)
    return visitor


@router.post("/{visitor_id}/checkin", response_model=VisitorOut)
def check_in_visitor(
        visitor_id: int,
        background_tasks: BackgroundTasks,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(allow_reception_or_admin)):
    scope = resolve_scope(db, current_user)
    ensure_visitor_in_scope(scope, crud.get_visitor_by_id(db, visitor_id))

    visitor = crud.check_in(db, visitor_id)
    notification_crud.notify_status_change(
        background_tasks, db, visitor, VisitorStatus.CHECKED_IN)
    return visitor


@router.post("/{visitor_id}/checkout", response_model=VisitorOut)
def check_out_visitor(
        visitor_id: int,
        background_tasks: BackgroundTasks,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(allow_reception_or_admin)):
    scope = resolve_scope(db, current_user)
    ensure_visitor_in_scope(scope, crud.get_visitor_by_id(db, visitor_id))

    visitor = crud.check_out(db, visitor_id)
    notification_crud.notify_status_change(
        background_tasks, db, visitor, VisitorStatus.CHECKED_OUT)
    return visitor


@router.delete("/{visitor_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_visitor(
        visitor_id: int,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(allow_admin)):
    crud.delete_visitor(db, visitor_id)
