"""SQLAlchemy 모델 패키지 초기화 모듈입니다."""

from forum.models.user import User
from forum.models.community import Community
from forum.models.post import Post
from forum.models.comment import Comment
from forum.models.content_version import ContentVersion
from forum.models.like import ContentLike
from forum.models.notification import Notification

__all__ = [
    "User",
    "Community",
    "Post",
    "Comment",
    "ContentVersion",
    "ContentLike",
    "Notification",
]
