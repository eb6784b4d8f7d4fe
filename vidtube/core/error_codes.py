"""业务错误码

五位数字：前三位对应 HTTP 状态码，后两位为业务细分。
"""

from enum import IntEnum


class ErrorCode(IntEnum):
    # 400
    INVALID_REQUEST = 40000
    INVALID_PARAMETER = 40001
    FILE_REQUIRED = 40002

    # 401
    UNAUTHORIZED = 40100
    INVALID_CREDENTIALS = 40101
    TOKEN_EXPIRED = 40102
    TOKEN_INVALID = 40103
    TOKEN_MALFORMED = 40104
    REFRESH_TOKEN_REUSED = 40105

    # 403
    FORBIDDEN = 40300

    # 404
    RESOURCE_NOT_FOUND = 40400
    USER_NOT_FOUND = 40401
    VIDEO_NOT_FOUND = 40402
    LIKE_NOT_FOUND = 40403

    # 405
    METHOD_NOT_ALLOWED = 40500

    # 409
    DUPLICATE_ENTRY = 40900
    USER_ALREADY_EXISTS = 40901
    EMAIL_ALREADY_EXISTS = 40902
    ALREADY_LIKED = 40903

    # 500
    SYSTEM_ERROR = 50000
    TOKEN_GENERATION_FAILED = 50001

    # 503
    SERVICE_UNAVAILABLE = 50300
