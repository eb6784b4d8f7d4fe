"""视频模块 - 依赖注入"""

from typing import Annotated

from fastapi import Depends

from vidtube.dependencies import DBSession

from .repository import VideoRepository
from .service import VideoService


def get_video_repository(db: DBSession) -> VideoRepository:
    return VideoRepository(db)


VideoRepositoryDep = Annotated[VideoRepository, Depends(get_video_repository)]


def get_video_service(repository: VideoRepositoryDep) -> VideoService:
    return VideoService(repository)


VideoServiceDep = Annotated[VideoService, Depends(get_video_service)]
