"""点赞模块 - 路由"""

from fastapi import APIRouter, status

from vidtube.modules.auth.dependencies import CurrentUser
from vidtube.schemas.response import ApiResponse

from .dependencies import LikeServiceDep
from .schemas import LikeResponse, VideoLikeItem

router = APIRouter()


@router.post(
    "/videos/{video_id}",
    response_model=ApiResponse[LikeResponse],
    status_code=status.HTTP_201_CREATED,
)
async def like_video(
    video_id: str,
    user: CurrentUser,
    service: LikeServiceDep,
) -> ApiResponse[LikeResponse]:
    like = await service.like(video_id, user.id)
    return ApiResponse(data=like, message="Video liked successfully")


@router.delete("/videos/{video_id}", response_model=ApiResponse[None])
async def unlike_video(
    video_id: str,
    user: CurrentUser,
    service: LikeServiceDep,
) -> ApiResponse[None]:
    await service.unlike(video_id, user.id)
    return ApiResponse(data=None, message="Video unliked successfully")


@router.get("/videos/{video_id}", response_model=ApiResponse[list[VideoLikeItem]])
async def list_video_likes(
    video_id: str,
    service: LikeServiceDep,
) -> ApiResponse[list[VideoLikeItem]]:
    likes = await service.list_video_likes(video_id)
    return ApiResponse(data=likes, message="Likes fetched successfully")
