"""点赞模块 - 数据访问层"""

from uuid import UUID

from sqlalchemy import Row, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.modules.user.models import User

from .models import Like


class LikeRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find(self, user_id: UUID, video_id: UUID) -> Like | None:
        stmt = select(Like).where(Like.user_id == user_id, Like.video_id == video_id)
        return await self.db.scalar(stmt)

    async def create(self, like: Like) -> Like:
        self.db.add(like)
        await self.db.flush()
        await self.db.refresh(like)
        return like

    async def delete_one(self, user_id: UUID, video_id: UUID) -> bool:
        """删除点赞，返回是否存在过"""
        stmt = (
            delete(Like)
            .where(Like.user_id == user_id, Like.video_id == video_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount > 0

    async def list_for_video(self, video_id: UUID) -> list[Row[tuple[Like, str, str]]]:
        stmt = (
            select(Like, User.full_name, User.username)
            .join(User, User.id == Like.user_id)
            .where(Like.video_id == video_id)
            .order_by(Like.created_at.desc(), Like.id.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.all())
