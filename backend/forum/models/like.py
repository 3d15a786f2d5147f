"""게시글/댓글 좋아요의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, DateTime, ForeignKey, Index, UniqueConstraint, CheckConstraint
from sqlalchemy.sql import func
from forum.database import Base


class ContentLike(Base):
    __tablename__ = "content_like"

    like_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    post_id = Column(Integer, ForeignKey("post.post_id"), nullable=True)
    comment_id = Column(Integer, ForeignKey("comment.comment_id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    __table_args__ = (
        CheckConstraint(
            "(post_id IS NULL) <> (comment_id IS NULL)",
            name="ck_content_like_single_target",
        ),
        UniqueConstraint("user_id", "post_id", name="uq_content_like_user_post"),
        UniqueConstraint("user_id", "comment_id", name="uq_content_like_user_comment"),
        Index("idx_content_like_post", "post_id"),
        Index("idx_content_like_comment", "comment_id"),
    )

    def __init__(self, *, user_id: int, post_id: int | None = None, comment_id: int | None = None, **kwargs):
        if (post_id is None) == (comment_id is None):
            raise ValueError("like must target exactly one of post_id/comment_id")
        super().__init__(user_id=user_id, post_id=post_id, comment_id=comment_id, **kwargs)
