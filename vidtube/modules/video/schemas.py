"""视频模块 - Schema"""

from uuid import UUID

from vidtube.schemas.datetime_types import UTCDateTime
from vidtube.schemas.response import BaseSchema


class VideoOwner(BaseSchema):
    """视频作者的最小投影"""

    full_name: str
    username: str
    avatar: str


class VideoResponse(BaseSchema):
    id: UUID
    owner_id: UUID
    title: str
    description: str
    video_file: str
    thumbnail: str
    duration: float
    views: int
    is_published: bool
    created_at: UTCDateTime


class WatchHistoryItem(VideoResponse):
    owner: VideoOwner
