"""评论模块 - ORM 模型"""

from uuid import UUID

from sqlalchemy import ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from vidtube.core.database import Base


class Comment(Base):
    __tablename__ = "comment"

    video_id: Mapped[UUID] = mapped_column(ForeignKey("video.id", ondelete="CASCADE"))
    owner_id: Mapped[UUID] = mapped_column(
        ForeignKey("app_user.id", ondelete="CASCADE")
    )
    content: Mapped[str] = mapped_column(Text)

    __table_args__ = (Index("ix_comment_video_created", "video_id", "created_at"),)
