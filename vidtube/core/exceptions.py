"""业务异常

每个子类固定 HTTP 状态码并给出默认 message / code，
抛出时可以覆盖 message 与更细的 ErrorCode。
"""

from typing import Any, ClassVar

from vidtube.core.error_codes import ErrorCode


class ApiError(Exception):
    status_code: ClassVar[int] = 400
    default_code: ClassVar[ErrorCode] = ErrorCode.INVALID_REQUEST
    default_message: ClassVar[str] = "Bad request"

    def __init__(
        self,
        message: str | None = None,
        code: ErrorCode | None = None,
        detail: Any = None,
    ) -> None:
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.detail = detail
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code.name}, {self.message!r})"


class ValidationError(ApiError):
    default_code = ErrorCode.INVALID_PARAMETER
    default_message = "Invalid parameter"


class UnauthorizedError(ApiError):
    status_code = 401
    default_code = ErrorCode.UNAUTHORIZED
    default_message = "Unauthorized request"


class InvalidCredentialsError(UnauthorizedError):
    default_code = ErrorCode.INVALID_CREDENTIALS
    default_message = "Invalid user credentials"


class TokenExpiredError(UnauthorizedError):
    default_code = ErrorCode.TOKEN_EXPIRED
    default_message = "Token has expired"


class TokenInvalidError(UnauthorizedError):
    """签名不符或 token 类型不符"""

    default_code = ErrorCode.TOKEN_INVALID
    default_message = "Invalid token"


class TokenMalformedError(UnauthorizedError):
    default_code = ErrorCode.TOKEN_MALFORMED
    default_message = "Malformed token"


class NotFoundError(ApiError):
    status_code = 404
    default_code = ErrorCode.RESOURCE_NOT_FOUND
    default_message = "Resource not found"


class ConflictError(ApiError):
    status_code = 409
    default_code = ErrorCode.DUPLICATE_ENTRY
    default_message = "Resource conflict"


class InternalError(ApiError):
    """存储或签名等依赖失败，message 不包含内部细节"""

    status_code = 500
    default_code = ErrorCode.SYSTEM_ERROR
    default_message = "Internal server error"
