"""订阅模块 - ORM 模型"""

from uuid import UUID

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from vidtube.core.database import Base


class Subscription(Base):
    """订阅关系：subscriber -> channel（均为用户）"""

    __tablename__ = "subscription"

    subscriber_id: Mapped[UUID] = mapped_column(
        ForeignKey("app_user.id", ondelete="CASCADE"), index=True
    )
    channel_id: Mapped[UUID] = mapped_column(
        ForeignKey("app_user.id", ondelete="CASCADE"), index=True
    )
