"""评论模块 - Schema"""

from uuid import UUID

from pydantic import BaseModel

from vidtube.schemas.datetime_types import UTCDateTime
from vidtube.schemas.response import BaseSchema


class CommentCreate(BaseModel):
    content: str = ""


class CommentResponse(BaseSchema):
    id: UUID
    video_id: UUID
    owner_id: UUID
    content: str
    created_at: UTCDateTime
