"""视频模块 - 业务逻辑层"""

from uuid import UUID

from vidtube.core.error_codes import ErrorCode
from vidtube.core.exceptions import NotFoundError, ValidationError

from .repository import VideoRepository
from .schemas import VideoOwner, WatchHistoryItem


def parse_video_id(value: str) -> UUID:
    """路径中的视频 ID 必须是合法 UUID"""
    try:
        return UUID(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError("Invalid video ID") from exc


class VideoService:
    def __init__(self, repository: VideoRepository) -> None:
        self.repository = repository

    async def record_watch(self, user_id: UUID, video_id: str) -> None:
        vid = parse_video_id(video_id)
        if not await self.repository.exists(vid):
            raise NotFoundError("Video not found", code=ErrorCode.VIDEO_NOT_FOUND)
        await self.repository.record_view(user_id, vid)

    async def get_watch_history(self, user_id: UUID) -> list[WatchHistoryItem]:
        rows = await self.repository.list_watch_history(user_id)
        return [
            WatchHistoryItem.model_validate(
                {
                    **video.to_dict(),
                    "owner": VideoOwner(
                        full_name=full_name, username=username, avatar=avatar
                    ),
                }
            )
            for video, full_name, username, avatar in rows
        ]
