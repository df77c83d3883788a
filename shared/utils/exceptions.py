from shared.utils.app_status_code import AppStatusCode


class VisitorAppError(Exception):
    """Base exception for business rule violations surfaced to HTTP callers."""

    http_status = 400
    status_code = AppStatusCode.OPERATION_FAILED
    default_message = "Operation failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(VisitorAppError):
    http_status = 404
    status_code = AppStatusCode.RECORD_NOT_FOUND
    default_message = "Record not found"


class AccessDeniedError(VisitorAppError):
    """Caller's location scope does not cover the requested records."""

    http_status = 403
    status_code = AppStatusCode.ACCESS_FORBIDDEN
    default_message = "Access denied"


class InvalidTransitionError(VisitorAppError):
    status_code = AppStatusCode.INVALID_STATUS_TRANSITION
    default_message = "Invalid status transition"


class DuplicateError(VisitorAppError):
    status_code = AppStatusCode.DUPLICATE_ENTRY
    default_message = "Record already exists"


class ConflictError(VisitorAppError):
    http_status = 409
    status_code = AppStatusCode.CONFLICT
    default_message = "Record was modified by another request"


class InvalidTokenError(VisitorAppError):
    status_code = AppStatusCode.APPROVAL_TOKEN_INVALID
    default_message = "Invalid approval token"


class TokenMismatchError(VisitorAppError):
    status_code = AppStatusCode.APPROVAL_TOKEN_MISMATCH
    default_message = "Token does not match visitor ID"


class TokenExpiredError(VisitorAppError):
    status_code = AppStatusCode.APPROVAL_TOKEN_EXPIRED
    default_message = "Approval token has expired"


class UnknownStaffError(VisitorAppError):
    status_code = AppStatusCode.APPROVAL_STAFF_UNKNOWN
    default_message = "Invalid staff member"
