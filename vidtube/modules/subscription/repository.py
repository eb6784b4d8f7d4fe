"""订阅模块 - 数据访问层"""

from uuid import UUID

from sqlalchemy import RowMapping, func, literal, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.modules.user.models import User

from .models import Subscription


class SubscriptionRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find(self, subscriber_id: UUID, channel_id: UUID) -> Subscription | None:
        stmt = (
            select(Subscription)
            .where(
                Subscription.subscriber_id == subscriber_id,
                Subscription.channel_id == channel_id,
            )
            .limit(1)
        )
        return await self.db.scalar(stmt)

    async def create(self, subscription: Subscription) -> Subscription:
        self.db.add(subscription)
        await self.db.flush()
        return subscription

    async def delete(self, subscription: Subscription) -> None:
        await self.db.delete(subscription)
        await self.db.flush()

    async def channel_exists(self, channel_id: UUID) -> bool:
        return await self.db.scalar(select(User.id).where(User.id == channel_id)) is not None

    async def get_channel_profile(
        self, username: str, viewer_id: UUID | None
    ) -> RowMapping | None:
        """
        频道资料：一次查询得出订阅数、关注数与当前访问者是否已订阅

        计数与 is_subscribed 均为关联子查询，不修改任何数据。
        """
        subscribers_count = (
            select(func.count(Subscription.id))
            .where(Subscription.channel_id == User.id)
            .scalar_subquery()
        )
        subscribed_to_count = (
            select(func.count(Subscription.id))
            .where(Subscription.subscriber_id == User.id)
            .scalar_subquery()
        )
        if viewer_id is None:
            is_subscribed = literal(False)
        else:
            is_subscribed = (
                select(Subscription.id)
                .where(
                    Subscription.channel_id == User.id,
                    Subscription.subscriber_id == viewer_id,
                )
                .exists()
            )

        stmt = select(
            User.id,
            User.full_name,
            User.username,
            User.email,
            User.avatar,
            User.cover_image,
            subscribers_count.label("subscribers_count"),
            subscribed_to_count.label("channels_subscribed_to_count"),
            is_subscribed.label("is_subscribed"),
        ).where(User.username == username)
        result = await self.db.execute(stmt)
        return result.mappings().one_or_none()
