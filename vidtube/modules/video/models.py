"""视频模块 - ORM 模型"""

from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from vidtube.core.database import Base


class Video(Base):
    __tablename__ = "video"

    owner_id: Mapped[UUID] = mapped_column(
        ForeignKey("app_user.id", ondelete="CASCADE"), index=True
    )
    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text, default="")
    video_file: Mapped[str] = mapped_column(String(1024))
    thumbnail: Mapped[str] = mapped_column(String(1024), default="")
    duration: Mapped[float] = mapped_column(default=0.0)
    views: Mapped[int] = mapped_column(Integer, default=0)
    is_published: Mapped[bool] = mapped_column(Boolean, default=True)


class WatchHistory(Base):
    """
    观看历史

    position 越小越靠前；重复观看会把视频移到最前面。
    """

    __tablename__ = "watch_history"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("app_user.id", ondelete="CASCADE")
    )
    video_id: Mapped[UUID] = mapped_column(ForeignKey("video.id", ondelete="CASCADE"))
    position: Mapped[int] = mapped_column(Integer)

    __table_args__ = (
        Index("uq_watch_history_user_video", "user_id", "video_id", unique=True),
        Index("ix_watch_history_user_position", "user_id", "position"),
    )
