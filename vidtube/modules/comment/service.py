"""评论模块 - 业务逻辑层"""

from uuid import UUID

from vidtube.core.error_codes import ErrorCode
from vidtube.core.exceptions import NotFoundError, ValidationError
from vidtube.modules.video.repository import VideoRepository
from vidtube.modules.video.service import parse_video_id

from .models import Comment
from .repository import CommentRepository
from .schemas import CommentResponse


class CommentService:
    def __init__(
        self, repository: CommentRepository, video_repo: VideoRepository
    ) -> None:
        self.repository = repository
        self.video_repo = video_repo

    async def get_video_comments(
        self, video_id: str, page: int = 1, limit: int = 10
    ) -> tuple[list[CommentResponse], int]:
        """分页获取视频评论；无评论时 total 为 0"""
        vid = parse_video_id(video_id)
        comments, total = await self.repository.list_for_video(
            vid, page=page, limit=limit
        )
        return [CommentResponse.model_validate(c) for c in comments], total

    async def add_comment(
        self, video_id: str, owner_id: UUID, content: str
    ) -> CommentResponse:
        vid = parse_video_id(video_id)
        content = (content or "").strip()
        if not content:
            raise ValidationError("Comment content is required")
        if not await self.video_repo.exists(vid):
            raise NotFoundError("Video not found", code=ErrorCode.VIDEO_NOT_FOUND)

        comment = await self.repository.create(
            Comment(video_id=vid, owner_id=owner_id, content=content)
        )
        return CommentResponse.model_validate(comment)
