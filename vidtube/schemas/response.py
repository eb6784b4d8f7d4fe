"""响应信封

成功：{"code": 0, "message": ..., "data": ...}
失败：{"code": <ErrorCode>, "message": ..., "data": null, "detail": ...}
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class BaseSchema(BaseModel):
    """可直接从 ORM 对象构建；时间字段统一用 UTCDateTime"""

    model_config = ConfigDict(from_attributes=True, str_strip_whitespace=True)


class ApiResponse(BaseModel, Generic[T]):
    code: int = 0
    message: str = "success"
    data: T


class ApiPagedResponse(BaseModel, Generic[T]):
    """分页列表，page 从 1 开始，total 为过滤后的总条数"""

    code: int = 0
    message: str = "success"
    data: list[T]
    total: int
    page: int
    limit: int


class ErrorResponse(BaseModel):
    code: int
    message: str
    data: None = None
    detail: Any = None
