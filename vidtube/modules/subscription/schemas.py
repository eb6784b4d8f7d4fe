"""订阅模块 - Schema"""

from uuid import UUID

from pydantic import BaseModel

from vidtube.schemas.response import BaseSchema


class ChannelProfile(BaseSchema):
    id: UUID
    full_name: str
    username: str
    email: str
    avatar: str
    cover_image: str
    subscribers_count: int
    channels_subscribed_to_count: int
    is_subscribed: bool


class SubscriptionState(BaseModel):
    channel_id: UUID
    subscribed: bool
