"""Comment 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from forum.database import Base


class Comment(Base):
    __tablename__ = "comment"

    comment_id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(Integer, ForeignKey("post.post_id"), nullable=False)
    author_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    parent_id = Column(Integer, ForeignKey("comment.comment_id"), nullable=True)  # null이면 최상위 댓글
    content = Column(Text, nullable=False)
    like_count = Column(Integer, nullable=False, default=0)
    helpful_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
    deleted_at = Column(DateTime, nullable=True)

    post = relationship("Post", back_populates="comments")
    author = relationship("User", back_populates="comments")

    __table_args__ = (
        Index("idx_comment_post", "post_id", "created_at"),
        Index("idx_comment_parent", "parent_id"),
    )

    @property
    def is_archived(self) -> bool:
        return self.deleted_at is not None
