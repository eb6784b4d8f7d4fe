"""视频模块 - 数据访问层"""

from uuid import UUID

from sqlalchemy import Row, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.modules.user.models import User

from .models import Video, WatchHistory


class VideoRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_by_id(self, video_id: UUID) -> Video | None:
        return await self.db.get(Video, video_id)

    async def exists(self, video_id: UUID) -> bool:
        stmt = select(Video.id).where(Video.id == video_id)
        return await self.db.scalar(stmt) is not None

    async def record_view(self, user_id: UUID, video_id: UUID) -> None:
        """记录一次观看：移到观看历史最前面并累加播放数"""
        await self.db.execute(
            delete(WatchHistory).where(
                WatchHistory.user_id == user_id,
                WatchHistory.video_id == video_id,
            )
        )
        front = await self.db.scalar(
            select(func.min(WatchHistory.position)).where(
                WatchHistory.user_id == user_id
            )
        )
        position = front - 1 if front is not None else 0
        self.db.add(WatchHistory(user_id=user_id, video_id=video_id, position=position))
        await self.db.execute(
            update(Video)
            .where(Video.id == video_id)
            .values(views=Video.views + 1)
            .execution_options(synchronize_session=False)
        )
        await self.db.flush()

    async def list_watch_history(
        self, user_id: UUID
    ) -> list[Row[tuple[Video, str, str, str]]]:
        """按保存顺序返回观看历史，并连接作者的最小信息"""
        stmt = (
            select(Video, User.full_name, User.username, User.avatar)
            .join(WatchHistory, WatchHistory.video_id == Video.id)
            .join(User, User.id == Video.owner_id)
            .where(WatchHistory.user_id == user_id)
            .order_by(WatchHistory.position)
        )
        result = await self.db.execute(stmt)
        return list(result.all())
