"""认证模块 - Schema"""

from pydantic import BaseModel, ConfigDict, Field

from vidtube.modules.user.schemas import UserResponse


class LoginRequest(BaseModel):
    """用户名或邮箱二选一"""

    username: str | None = None
    email: str | None = None
    password: str = ""


class RefreshRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    refresh_token: str | None = Field(default=None, alias="refreshToken")


class ChangePasswordRequest(BaseModel):
    old_password: str = ""
    new_password: str = ""


class LoginResult(BaseModel):
    user: UserResponse
    access_token: str
    refresh_token: str
