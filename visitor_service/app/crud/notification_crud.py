import logging
from typing import Dict, List, Optional
from fastapi import BackgroundTasks
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.helpers.email_helper import NOT_PROVIDED, EmailHelper
from shared.models.staff_members import StaffMember
from shared.utils.datetime_utils import format_visit_datetime
from shared.utils.enums import EmailTemplateType
from ..enum.visitor_enum import VisitorStatus
from ..models.visitors import Visitor
from ...util.approval_token import generate_approval_token

logger = logging.getLogger(__name__)

DEFAULT_REJECTION_REASON = "Your visit request has been reviewed and cannot be approved at this time."


def _queue_email(
        background_tasks: BackgroundTasks,
        db: Session,
        template_type: EmailTemplateType,
        recipients: List[str],
        data: Dict[str, str],
        high_priority: bool = False) -> bool:
    email_helper = EmailHelper()
    try:
        subject, body = email_helper.build_email(db, template_type, data)
    except SQLAlchemyError:
        logger.exception(
            f"Could not load email template '{template_type.value}'")
        return False

    background_tasks.add_task(
        email_helper.send_email,
        recipients=recipients,
        subject=subject,
        html_body=body,
        high_priority=high_priority,
    )
    return True


def find_staff_for_visit(db: Session, whom_to_meet: str) -> Optional[StaffMember]:
    """Staff member a visitor asked for: full name, then email, then first or last name."""
    wanted = (whom_to_meet or "").strip().lower()
    if not wanted:
        return None

    full_name = func.trim(StaffMember.first_name + " " + StaffMember.last_name)
    for condition in (
        func.lower(full_name) == wanted,
        func.lower(StaffMember.email) == wanted,
        (func.lower(StaffMember.first_name) == wanted) | (func.lower(StaffMember.last_name) == wanted),
    ):
        match = db.query(StaffMember).filter(
            StaffMember.is_active == True, condition
        ).order_by(StaffMember.id).first()
        if match:
            return match
    return None


def _location_admins(db: Session, location_id: int) -> List[StaffMember]:
    return db.query(StaffMember).filter(
        StaffMember.location_id == location_id,
        func.lower(StaffMember.role) == "admin",
        StaffMember.is_active == True
    ).all()


def approval_url(visitor_id: int, staff_email: str) -> str:
    token = generate_approval_token(visitor_id, staff_email)
    return f"{settings.APP_BASE_URL}/api/visitors/{visitor_id}/approve?token={token}"


def reject_url(visitor_id: int, staff_email: str) -> str:
    token = generate_approval_token(visitor_id, staff_email)
    return f"{settings.APP_BASE_URL}/api/visitors/{visitor_id}/reject?token={token}"


def staff_notification_data(visitor: Visitor, staff: StaffMember) -> Dict[str, str]:
    location = visitor.location
    return {
        "VisitorName": visitor.full_name,
        "VisitorEmail": visitor.email or NOT_PROVIDED,
        "VisitorPhone": visitor.phone_number,
        "CompanyName": visitor.company_name or NOT_PROVIDED,
        "PurposeOfVisit": visitor.purpose_of_visit,
        "VisitDateTime": format_visit_datetime(visitor.date_time),
        "StaffName": staff.full_name,
        "StaffEmail": staff.email,
        "LocationName": location.name if location else "Unknown Location",
        "LocationAddress": location.address if location else "Address not available",
        "ApprovalUrl": approval_url(visitor.id, staff.email),
        "RejectUrl": reject_url(visitor.id, staff.email),
        "Notes": visitor.notes or "",
        "IdProofType": visitor.id_proof_type or NOT_PROVIDED,
        "IdProofNumber": visitor.id_proof_number or NOT_PROVIDED,
    }


def _visitor_data(visitor: Visitor) -> Dict[str, str]:
    location = visitor.location
    return {
        "VisitorName": visitor.full_name,
        "LocationName": location.name if location else "",
        "LocationAddress": location.address if location else "",
        "VisitDateTime": format_visit_datetime(visitor.date_time),
        "WhomToMeet": visitor.whom_to_meet,
        "PurposeOfVisit": visitor.purpose_of_visit,
        "Notes": visitor.notes or "",
        "ContactInfo": settings.EMAIL_SENDER,
    }


def notify_staff_of_registration(background_tasks: BackgroundTasks, db: Session, visitor: Visitor) -> bool:
    logger.info(
        f"Sending staff notification for visitor {visitor.id} to '{visitor.whom_to_meet}'")

    staff = find_staff_for_visit(db, visitor.whom_to_meet)
    recipients = [staff] if staff and staff.email else []
    if not recipients:
        logger.warning(
            f"Staff member '{visitor.whom_to_meet}' not found for visitor {visitor.id}, falling back to location admins")
        recipients = [s for s in _location_admins(db, visitor.location_id) if s.email]

    if not recipients:
        logger.warning(f"Nobody to notify for visitor {visitor.id}")
        return False

    queued = False
    for member in recipients:
        queued = _queue_email(
            background_tasks,
            db,
            EmailTemplateType.VISITOR_NOTIFICATION_TO_STAFF,
            [member.email],
            staff_notification_data(visitor, member),
            high_priority=True,
        ) or queued
    return queued


def notify_status_change(
        background_tasks: BackgroundTasks,
        db: Session,
        visitor: Visitor,
        new_status: VisitorStatus,
        notes: Optional[str] = None) -> bool:
    """Email for a status change. Returns False when nothing was queued."""
    if new_status in (VisitorStatus.CHECKED_IN, VisitorStatus.CHECKED_OUT):
        return _notify_host(background_tasks, db, visitor, new_status)

    if new_status not in (VisitorStatus.APPROVED, VisitorStatus.REJECTED, VisitorStatus.RESCHEDULED):
        return False

    if not visitor.email:
        logger.warning(
            f"Visitor {visitor.id} has no email, skipping {new_status.value} notification")
        return False

    data = _visitor_data(visitor)
    if new_status == VisitorStatus.APPROVED:
        template_type = EmailTemplateType.VISITOR_APPROVAL_CONFIRMATION
        data["ApprovedBy"] = visitor.approved_by or "System"
        data["ApprovedAt"] = format_visit_datetime(visitor.approved_at)
    elif new_status == VisitorStatus.REJECTED:
        template_type = EmailTemplateType.VISITOR_REJECTION_NOTICE
        data["RejectionReason"] = notes or DEFAULT_REJECTION_REASON
    else:
        template_type = EmailTemplateType.VISITOR_RESCHEDULED_NOTIFICATION

    return _queue_email(background_tasks, db, template_type, [visitor.email], data)


def _notify_host(background_tasks: BackgroundTasks, db: Session, visitor: Visitor, new_status: VisitorStatus) -> bool:
    staff = find_staff_for_visit(db, visitor.whom_to_meet)
    if not staff or not staff.email:
        logger.info(
            f"No host found for visitor {visitor.id}, skipping {new_status.value} notification")
        return False

    data = _visitor_data(visitor)
    data["StaffName"] = staff.full_name
    if new_status == VisitorStatus.CHECKED_IN:
        template_type = EmailTemplateType.VISITOR_CHECKIN_NOTIFICATION
        data["CheckInTime"] = format_visit_datetime(visitor.check_in_time)
    else:
        template_type = EmailTemplateType.VISITOR_CHECKOUT_NOTIFICATION
        data["CheckOutTime"] = format_visit_datetime(visitor.check_out_time)
        if visitor.check_in_time and visitor.check_out_time:
            minutes = int((visitor.check_out_time -
                          visitor.check_in_time).total_seconds() // 60)
            data["VisitDuration"] = f"{minutes // 60}h {minutes % 60}m"

    return _queue_email(background_tasks, db, template_type, [staff.email], data)
