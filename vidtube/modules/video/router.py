"""视频模块 - 路由"""

from fastapi import APIRouter

from vidtube.modules.auth.dependencies import CurrentUser
from vidtube.schemas.response import ApiResponse

from .dependencies import VideoServiceDep

router = APIRouter()


@router.post("/{video_id}/watch", response_model=ApiResponse[dict])
async def watch_video(
    video_id: str,
    user: CurrentUser,
    service: VideoServiceDep,
) -> ApiResponse[dict]:
    """记录观看（写入观看历史）"""
    await service.record_watch(user.id, video_id)
    return ApiResponse(data={}, message="Watch history updated")
