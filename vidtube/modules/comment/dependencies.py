"""评论模块 - 依赖注入"""

from typing import Annotated

from fastapi import Depends

from vidtube.dependencies import DBSession
from vidtube.modules.video.dependencies import VideoRepositoryDep

from .repository import CommentRepository
from .service import CommentService


def get_comment_service(
    db: DBSession, video_repo: VideoRepositoryDep
) -> CommentService:
    return CommentService(CommentRepository(db), video_repo)


CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]
