"""게시글/댓글 본문의 변경 이력 스냅샷을 저장하는 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.sql import func

from forum.database import Base


class ContentVersion(Base):
    __tablename__ = "content_version"

    version_id = Column(Integer, primary_key=True, autoincrement=True)
    content_type = Column(String(20), nullable=False)  # post/comment
    content_id = Column(Integer, nullable=False)
    version_number = Column(Integer, nullable=False)
    content = Column(Text, nullable=False)  # 전체 본문 스냅샷 (diff 아님)
    created_by = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    __table_args__ = (
        UniqueConstraint(
            "content_type", "content_id", "version_number",
            name="uq_content_version_ref_number",
        ),
        Index("idx_content_version_ref", "content_type", "content_id"),
    )
