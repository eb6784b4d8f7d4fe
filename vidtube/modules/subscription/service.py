"""订阅模块 - 业务逻辑层"""

from uuid import UUID

from loguru import logger

from vidtube.core.error_codes import ErrorCode
from vidtube.core.exceptions import NotFoundError, ValidationError

from .models import Subscription
from .repository import SubscriptionRepository
from .schemas import ChannelProfile, SubscriptionState


class SubscriptionService:
    def __init__(self, repository: SubscriptionRepository) -> None:
        self.repository = repository

    async def get_channel_profile(
        self, username: str, viewer_id: UUID | None = None
    ) -> ChannelProfile:
        """频道资料（含订阅计数与 is_subscribed）"""
        username = (username or "").strip().lower()
        if not username:
            raise ValidationError("username is missing")

        row = await self.repository.get_channel_profile(username, viewer_id)
        if row is None:
            raise NotFoundError("channel does not exist", code=ErrorCode.USER_NOT_FOUND)
        return ChannelProfile.model_validate(dict(row))

    async def toggle(self, subscriber_id: UUID, channel_id: str) -> SubscriptionState:
        """已订阅则取消，未订阅则订阅"""
        try:
            channel = UUID(channel_id)
        except ValueError as exc:
            raise ValidationError("Invalid channel ID") from exc

        if channel == subscriber_id:
            raise ValidationError("You cannot subscribe to your own channel")
        if not await self.repository.channel_exists(channel):
            raise NotFoundError("channel does not exist", code=ErrorCode.USER_NOT_FOUND)

        existing = await self.repository.find(subscriber_id, channel)
        if existing:
            await self.repository.delete(existing)
            logger.info("取消订阅 subscriber={} channel={}", subscriber_id, channel)
            return SubscriptionState(channel_id=channel, subscribed=False)

        await self.repository.create(
            Subscription(subscriber_id=subscriber_id, channel_id=channel)
        )
        logger.info("订阅 subscriber={} channel={}", subscriber_id, channel)
        return SubscriptionState(channel_id=channel, subscribed=True)
