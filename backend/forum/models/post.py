"""Post 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from forum.database import Base


class Post(Base):
    __tablename__ = "post"

    post_id = Column(Integer, primary_key=True, autoincrement=True)
    community_id = Column(Integer, ForeignKey("community.community_id"), nullable=False)
    author_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    is_pinned = Column(Boolean, nullable=False, default=False)
    is_solved = Column(Boolean, nullable=False, default=False)
    like_count = Column(Integer, nullable=False, default=0)
    helpful_count = Column(Integer, nullable=False, default=0)
    comment_count = Column(Integer, nullable=False, default=0)
    view_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
    published_at = Column(DateTime, nullable=True)  # null이면 임시저장
    deleted_at = Column(DateTime, nullable=True)  # 보관(soft delete)

    community = relationship("Community", back_populates="posts")
    author = relationship("User", back_populates="posts")
    comments = relationship("Comment", back_populates="post")

    __table_args__ = (
        Index("idx_post_community", "community_id", "is_pinned", "created_at"),
        Index("idx_post_author", "author_id"),
    )

    @property
    def is_archived(self) -> bool:
        return self.deleted_at is not None

    @property
    def is_draft(self) -> bool:
        return self.published_at is None

    @property
    def is_published(self) -> bool:
        return self.published_at is not None

    @property
    def status(self) -> str:
        if self.is_archived:
            return "archived"
        return "draft" if self.is_draft else "published"
