"""认证模块 - 路由"""

from typing import Annotated

from fastapi import APIRouter, Cookie, File, Form, Response, UploadFile, status

from vidtube.core.security import ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE, TokenPair
from vidtube.modules.user.models import (
    EMAIL_MAX_LENGTH,
    FULL_NAME_MAX_LENGTH,
    USERNAME_MAX_LENGTH,
)
from vidtube.modules.user.schemas import UserResponse
from vidtube.schemas.response import ApiResponse

from .dependencies import AuthServiceDep, CurrentUser
from .schemas import ChangePasswordRequest, LoginRequest, LoginResult, RefreshRequest

router = APIRouter()


def set_auth_cookies(response: Response, access_token: str, refresh_token: str) -> None:
    """token 只通过 httpOnly + secure cookie 下发"""
    response.set_cookie(ACCESS_TOKEN_COOKIE, access_token, httponly=True, secure=True)
    response.set_cookie(REFRESH_TOKEN_COOKIE, refresh_token, httponly=True, secure=True)


def clear_auth_cookies(response: Response) -> None:
    response.delete_cookie(ACCESS_TOKEN_COOKIE, httponly=True, secure=True)
    response.delete_cookie(REFRESH_TOKEN_COOKIE, httponly=True, secure=True)


@router.post(
    "/register",
    response_model=ApiResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
async def register(
    service: AuthServiceDep,
    full_name: Annotated[str | None, Form(max_length=FULL_NAME_MAX_LENGTH)] = None,
    email: Annotated[str | None, Form(max_length=EMAIL_MAX_LENGTH)] = None,
    username: Annotated[str | None, Form(max_length=USERNAME_MAX_LENGTH)] = None,
    password: Annotated[str | None, Form()] = None,
    avatar: Annotated[UploadFile | None, File()] = None,
    cover_image: Annotated[UploadFile | None, File()] = None,
) -> ApiResponse[UserResponse]:
    """注册（multipart/form-data，头像必填）"""
    user = await service.register(
        full_name=full_name,
        email=email,
        username=username,
        password=password,
        avatar=avatar,
        cover_image=cover_image,
    )
    return ApiResponse(data=user, message="User registered successfully")


@router.post("/login", response_model=ApiResponse[LoginResult])
async def login(
    body: LoginRequest,
    response: Response,
    service: AuthServiceDep,
) -> ApiResponse[LoginResult]:
    """登录：返回用户信息与 token，同时写入 cookie"""
    result = await service.login(
        username=body.username, email=body.email, password=body.password
    )
    set_auth_cookies(response, result.access_token, result.refresh_token)
    return ApiResponse(data=result, message="User logged in successfully")


@router.post("/logout", response_model=ApiResponse[dict])
async def logout(
    user: CurrentUser,
    response: Response,
    service: AuthServiceDep,
) -> ApiResponse[dict]:
    """登出：作废 refresh token 并清除 cookie"""
    await service.logout(user.id)
    clear_auth_cookies(response)
    return ApiResponse(data={}, message="User logged out")


@router.post("/refresh-token", response_model=ApiResponse[TokenPair])
async def refresh_token(
    response: Response,
    service: AuthServiceDep,
    refresh_cookie: Annotated[str | None, Cookie(alias=REFRESH_TOKEN_COOKIE)] = None,
    body: RefreshRequest | None = None,
) -> ApiResponse[TokenPair]:
    """刷新 access token（refresh token 来自 cookie 或请求体）"""
    incoming = refresh_cookie or (body.refresh_token if body else None)
    pair = await service.refresh(incoming)
    set_auth_cookies(response, pair.access_token, pair.refresh_token)
    return ApiResponse(data=pair, message="Access token refreshed")


@router.post("/change-password", response_model=ApiResponse[dict])
async def change_password(
    body: ChangePasswordRequest,
    user: CurrentUser,
    service: AuthServiceDep,
) -> ApiResponse[dict]:
    """修改当前用户密码"""
    await service.change_password(user.id, body.old_password, body.new_password)
    return ApiResponse(data={}, message="Password changed successfully")
