"""点赞模块 - ORM 模型"""

from uuid import UUID

from sqlalchemy import ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column

from vidtube.core.database import Base


class Like(Base):
    __tablename__ = "video_like"

    user_id: Mapped[UUID] = mapped_column(ForeignKey("app_user.id", ondelete="CASCADE"))
    video_id: Mapped[UUID] = mapped_column(
        ForeignKey("video.id", ondelete="CASCADE"), index=True
    )

    __table_args__ = (
        # 每个用户对同一视频最多一个赞
        Index("uq_video_like_user_video", "user_id", "video_id", unique=True),
    )
