"""点赞模块 - 依赖注入"""

from typing import Annotated

from fastapi import Depends

from vidtube.dependencies import DBSession
from vidtube.modules.video.dependencies import VideoRepositoryDep

from .repository import LikeRepository
from .service import LikeService


def get_like_service(db: DBSession, video_repo: VideoRepositoryDep) -> LikeService:
    return LikeService(LikeRepository(db), video_repo)


LikeServiceDep = Annotated[LikeService, Depends(get_like_service)]
