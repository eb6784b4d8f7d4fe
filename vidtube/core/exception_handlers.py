"""全局异常处理：所有错误都以 ErrorResponse 信封返回"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from vidtube.core.context import current_context
from vidtube.core.error_codes import ErrorCode
from vidtube.core.exceptions import ApiError
from vidtube.schemas.response import ErrorResponse

STATUS_CODE_MAP = {
    400: ErrorCode.INVALID_REQUEST,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.RESOURCE_NOT_FOUND,
    405: ErrorCode.METHOD_NOT_ALLOWED,
    409: ErrorCode.DUPLICATE_ENTRY,
    422: ErrorCode.INVALID_PARAMETER,
    503: ErrorCode.SERVICE_UNAVAILABLE,
}


def error_response(
    status_code: int,
    code: ErrorCode,
    message: str,
    detail: Any = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    if status_code == 401:
        headers = {"WWW-Authenticate": "Bearer", **(headers or {})}
    body = ErrorResponse(code=int(code), message=message, detail=detail)
    return JSONResponse(
        status_code=status_code, content=body.model_dump(), headers=headers
    )


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    # 守卫通过后 bind_user 写入的访问者
    user_id = current_context().user_id or "anonymous"
    if exc.status_code >= 500:
        logger.opt(exception=exc).error(
            "{} {} 失败: {} ({}) user={}",
            request.method,
            request.url.path,
            exc.message,
            exc.code.name,
            user_id,
        )
    else:
        logger.warning(
            "{} {} 拒绝: {} ({}) user={}",
            request.method,
            request.url.path,
            exc.message,
            exc.code.name,
            user_id,
        )
    return error_response(exc.status_code, exc.code, exc.message, exc.detail)


def _field_name(loc: tuple) -> str:
    # 去掉首段 body / query
    return ".".join(str(part) for part in loc[1:]) or str(loc[0])


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """请求体 / 查询参数校验失败统一返回 400"""
    errors = [
        {
            "field": _field_name(error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    return error_response(
        400,
        ErrorCode.INVALID_PARAMETER,
        "Request validation failed",
        {"errors": errors},
    )


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """路由不存在、方法不允许等框架级错误"""
    code = STATUS_CODE_MAP.get(exc.status_code, ErrorCode.SYSTEM_ERROR)
    return error_response(
        exc.status_code, code, str(exc.detail), headers=dict(exc.headers or {}) or None
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error(
        "未捕获异常 {} {}", request.method, request.url.path
    )
    return error_response(500, ErrorCode.SYSTEM_ERROR, "Internal server error")


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
