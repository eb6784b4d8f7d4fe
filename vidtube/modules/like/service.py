"""点赞模块 - 业务逻辑层"""

from uuid import UUID

from loguru import logger
from sqlalchemy.exc import IntegrityError

from vidtube.core.error_codes import ErrorCode
from vidtube.core.exceptions import ConflictError, NotFoundError
from vidtube.modules.video.repository import VideoRepository
from vidtube.modules.video.service import parse_video_id

from .models import Like
from .repository import LikeRepository
from .schemas import LikeResponse, VideoLikeItem


class LikeService:
    def __init__(self, repository: LikeRepository, video_repo: VideoRepository) -> None:
        self.repository = repository
        self.video_repo = video_repo

    async def like(self, video_id: str, user_id: UUID) -> LikeResponse:
        """点赞（同一用户对同一视频只能点赞一次）"""
        vid = parse_video_id(video_id)
        if not await self.video_repo.exists(vid):
            raise NotFoundError("Video not found", code=ErrorCode.VIDEO_NOT_FOUND)

        if await self.repository.find(user_id, vid):
            raise ConflictError(
                "You have already liked this video", code=ErrorCode.ALREADY_LIKED
            )

        try:
            like = await self.repository.create(Like(user_id=user_id, video_id=vid))
        except IntegrityError as exc:
            raise ConflictError(
                "You have already liked this video", code=ErrorCode.ALREADY_LIKED
            ) from exc

        logger.debug("点赞 user={} video={}", user_id, vid)
        return LikeResponse.model_validate(like)

    async def unlike(self, video_id: str, user_id: UUID) -> None:
        vid = parse_video_id(video_id)
        if not await self.repository.delete_one(user_id, vid):
            raise NotFoundError("Like not found", code=ErrorCode.LIKE_NOT_FOUND)
        logger.debug("取消点赞 user={} video={}", user_id, vid)

    async def list_video_likes(self, video_id: str) -> list[VideoLikeItem]:
        vid = parse_video_id(video_id)
        rows = await self.repository.list_for_video(vid)
        return [
            VideoLikeItem.model_validate(
                {**like.to_dict(), "full_name": full_name, "username": username}
            )
            for like, full_name, username in rows
        ]
