from enum import Enum


class UserRole(str, Enum):
    RECEPTION = "reception"
    ADMIN = "admin"
    STAFF = "staff"


class AccountType(str, Enum):
    USER = "user"
    STAFF = "staff"


class EmailTemplateType(str, Enum):
    VISITOR_NOTIFICATION_TO_STAFF = "visitor_notification_to_staff"
    VISITOR_APPROVAL_CONFIRMATION = "visitor_approval_confirmation"
    VISITOR_REJECTION_NOTICE = "visitor_rejection_notice"
    VISITOR_CHECKIN_NOTIFICATION = "visitor_checkin_notification"
    VISITOR_CHECKOUT_NOTIFICATION = "visitor_checkout_notification"
    VISITOR_RESCHEDULED_NOTIFICATION = "visitor_rescheduled_notification"
