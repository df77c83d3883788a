class AppStatusCode:
    DATA_RETRIEVED_SUCCESSFULLY = "100"
    OPERATION_SUCCESSFUL = "101"

    OPERATION_FAILED = "200"
    INVALID_INPUT = "201"
    REQUIRED_VALIDATION_ERROR = "202"
    DUPLICATE_ENTRY = "203"
    RECORD_NOT_FOUND = "204"
    CONFLICT = "205"
    INVALID_STATUS_TRANSITION = "206"

    AUTHENTICATION_TOKEN_INVALID = "300"
    AUTHENTICATION_TOKEN_EXPIRED = "301"
    AUTHENTICATION_CREDENTIALS_INVALID = "302"
    AUTHENTICATION_USER_INVALID = "303"
    AUTHENTICATION_USER_INACTIVE = "304"
    ACCESS_FORBIDDEN = "305"

    APPROVAL_TOKEN_INVALID = "400"
    APPROVAL_TOKEN_MISMATCH = "401"
    APPROVAL_TOKEN_EXPIRED = "402"
    APPROVAL_STAFF_UNKNOWN = "403"
