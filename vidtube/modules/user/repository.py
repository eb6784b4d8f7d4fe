"""用户模块 - 数据访问层"""

from uuid import UUID

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .models import User


class UserRepository:
    """
    用户数据访问层（凭证存储）

    注意：事务由 get_db() 依赖自动管理，Repository 只用 flush/refresh
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # ============================================================
    # 查询方法
    # ============================================================

    async def get_by_id(self, user_id: UUID) -> User | None:
        return await self.db.get(User, user_id)

    async def get_by_username_or_email(
        self, username: str | None = None, email: str | None = None
    ) -> User | None:
        """按用户名或邮箱查找（任一匹配即可）"""
        conditions = []
        if username:
            conditions.append(User.username == username)
        if email:
            conditions.append(User.email == email)
        if not conditions:
            return None
        stmt = select(User).where(or_(*conditions)).limit(1)
        return await self.db.scalar(stmt)

    async def email_taken(self, email: str, *, exclude_id: UUID | None = None) -> bool:
        stmt = select(User.id).where(User.email == email)
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        return await self.db.scalar(stmt.limit(1)) is not None

    # ============================================================
    # 写操作
    # ============================================================

    async def create(self, user: User) -> User:
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        return user

    async def update(self, user: User) -> User:
        await self.db.flush()
        await self.db.refresh(user)
        return user

    async def set_refresh_token(self, user_id: UUID, token: str | None) -> None:
        """无条件覆盖 refresh token（登录 / 登出）"""
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(refresh_token=token)
            .execution_options(synchronize_session=False)
        )
        await self.db.execute(stmt)

    async def rotate_refresh_token(
        self, user_id: UUID, expected: str, new_token: str
    ) -> bool:
        """
        比较并替换 refresh token

        仅当数据库中的当前值等于 expected 时才写入 new_token，
        并发刷新同一个 token 时只有一个能成功。
        """
        stmt = (
            update(User)
            .where(User.id == user_id, User.refresh_token == expected)
            .values(refresh_token=new_token)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount == 1

    async def commit(self) -> None:
        """提前提交：之后要执行无法回滚的外部操作（如删除对象存储文件）时使用"""
        await self.db.commit()
