"""用户模块 - 路由"""

from typing import Annotated

from fastapi import APIRouter, File, UploadFile

from vidtube.modules.auth.dependencies import CurrentUser, OptionalUser
from vidtube.modules.subscription.dependencies import SubscriptionServiceDep
from vidtube.modules.subscription.schemas import ChannelProfile
from vidtube.modules.video.dependencies import VideoServiceDep
from vidtube.modules.video.schemas import WatchHistoryItem
from vidtube.schemas.response import ApiResponse

from .dependencies import UserServiceDep
from .schemas import AccountUpdate, UserResponse

router = APIRouter()


@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_me(user: CurrentUser) -> ApiResponse[UserResponse]:
    """当前登录用户"""
    return ApiResponse(
        data=UserResponse.model_validate(user), message="User fetched successfully"
    )


@router.patch("/me", response_model=ApiResponse[UserResponse])
async def update_account(
    body: AccountUpdate,
    user: CurrentUser,
    service: UserServiceDep,
) -> ApiResponse[UserResponse]:
    updated = await service.update_account(user, body)
    return ApiResponse(data=updated, message="Account details updated successfully")


@router.patch("/me/avatar", response_model=ApiResponse[UserResponse])
async def update_avatar(
    user: CurrentUser,
    service: UserServiceDep,
    avatar: Annotated[UploadFile | None, File()] = None,
) -> ApiResponse[UserResponse]:
    updated = await service.update_avatar(user, avatar)
    return ApiResponse(data=updated, message="Avatar updated successfully")


@router.patch("/me/cover-image", response_model=ApiResponse[UserResponse])
async def update_cover_image(
    user: CurrentUser,
    service: UserServiceDep,
    cover_image: Annotated[UploadFile | None, File()] = None,
) -> ApiResponse[UserResponse]:
    updated = await service.update_cover_image(user, cover_image)
    return ApiResponse(data=updated, message="Cover image updated successfully")


@router.get("/history", response_model=ApiResponse[list[WatchHistoryItem]])
async def get_watch_history(
    user: CurrentUser,
    service: VideoServiceDep,
) -> ApiResponse[list[WatchHistoryItem]]:
    """观看历史（按保存顺序）"""
    history = await service.get_watch_history(user.id)
    return ApiResponse(data=history, message="Watch history fetched successfully")


@router.get("/channel/{username}", response_model=ApiResponse[ChannelProfile])
async def get_channel_profile(
    username: str,
    viewer: OptionalUser,
    service: SubscriptionServiceDep,
) -> ApiResponse[ChannelProfile]:
    """频道资料（登录可选，登录时返回 is_subscribed）"""
    profile = await service.get_channel_profile(
        username, viewer.id if viewer else None
    )
    return ApiResponse(data=profile, message="User channel fetched successfully")
