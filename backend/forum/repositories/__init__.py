"""세션 기반 저장소(Repository) 패키지 초기화 모듈입니다."""

from forum.repositories.content_version_repository import ContentVersionRepository
from forum.repositories.comment_repository import CommentRepository
from forum.repositories.post_repository import PostRepository
from forum.repositories.like_repository import LikeRepository

__all__ = [
    "ContentVersionRepository",
    "CommentRepository",
    "PostRepository",
    "LikeRepository",
]
