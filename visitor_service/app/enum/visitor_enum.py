from enum import Enum


class VisitorStatus(str, Enum):
    AWAITING_APPROVAL = "awaiting_approval"
    APPROVED = "approved"
    REJECTED = "rejected"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
    RESCHEDULED = "rescheduled"


# statuses counted as "approved" in visitor statistics
APPROVED_STATUSES = (
    VisitorStatus.APPROVED,
    VisitorStatus.CHECKED_IN,
    VisitorStatus.CHECKED_OUT,
)


class CustomFieldType(str, Enum):
    TEXT = "text"
    SELECT = "select"
    TEXTAREA = "textarea"
    CHECKBOX = "checkbox"
    DATE = "date"
