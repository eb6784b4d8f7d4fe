"""用户模块 - ORM 模型"""

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from vidtube.core.database import Base

# 列长度同时用于请求校验，超长输入在入口处返回 400
USERNAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 255
FULL_NAME_MAX_LENGTH = 100


class User(Base):
    """
    用户模型

    继承自 Base，自动获得：
    - id: UUIDv7 主键
    - created_at, updated_at: 时间戳

    refresh_token 为空表示已登出；同一时刻最多只有一个有效值。
    """

    __tablename__ = "app_user"

    username: Mapped[str] = mapped_column(String(USERNAME_MAX_LENGTH))
    email: Mapped[str] = mapped_column(String(EMAIL_MAX_LENGTH))
    full_name: Mapped[str] = mapped_column(String(FULL_NAME_MAX_LENGTH))
    hashed_password: Mapped[str] = mapped_column(String(255))
    avatar: Mapped[str] = mapped_column(String(1024))
    cover_image: Mapped[str] = mapped_column(String(1024), default="")
    refresh_token: Mapped[str | None] = mapped_column(Text, default=None)

    __table_args__ = (
        Index("uq_app_user_username", "username", unique=True),
        Index("uq_app_user_email", "email", unique=True),
    )
