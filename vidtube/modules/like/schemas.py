"""点赞模块 - Schema"""

from uuid import UUID

from vidtube.schemas.datetime_types import UTCDateTime
from vidtube.schemas.response import BaseSchema


class LikeResponse(BaseSchema):
    id: UUID
    user_id: UUID
    video_id: UUID
    created_at: UTCDateTime


class VideoLikeItem(LikeResponse):
    full_name: str
    username: str
