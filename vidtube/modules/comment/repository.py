"""评论模块 - 数据访问层"""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Comment


class CommentRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_for_video(
        self, video_id: UUID, *, page: int = 1, limit: int = 10
    ) -> tuple[list[Comment], int]:
        """按创建时间倒序分页（page 从 1 开始，id 作为同一时间的次序）"""
        count_stmt = select(func.count(Comment.id)).where(Comment.video_id == video_id)
        total = await self.db.scalar(count_stmt) or 0

        offset = (page - 1) * limit
        if offset >= total:
            # 越界页直接返回空，超大 offset 不下发到数据库
            return [], total
        stmt = (
            select(Comment)
            .where(Comment.video_id == video_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all()), total

    async def create(self, comment: Comment) -> Comment:
        self.db.add(comment)
        await self.db.flush()
        await self.db.refresh(comment)
        return comment
