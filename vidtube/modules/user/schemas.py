"""用户模块 - Schema"""

from uuid import UUID

from pydantic import BaseModel, Field

from vidtube.schemas.datetime_types import UTCDateTime
from vidtube.schemas.response import BaseSchema

from .models import EMAIL_MAX_LENGTH, FULL_NAME_MAX_LENGTH


class UserResponse(BaseSchema):
    """对外公开的用户信息（不含密码与 refresh token）"""

    id: UUID
    username: str
    email: str
    full_name: str
    avatar: str
    cover_image: str
    created_at: UTCDateTime
    updated_at: UTCDateTime


class AccountUpdate(BaseModel):
    full_name: str | None = Field(default=None, max_length=FULL_NAME_MAX_LENGTH)
    email: str | None = Field(default=None, max_length=EMAIL_MAX_LENGTH)
