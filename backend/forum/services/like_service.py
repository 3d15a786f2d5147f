"""Like Service 도메인 서비스 레이어입니다. 게시글/댓글 좋아요 토글과 좋아요 수 동기화를 담당합니다."""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from forum.errors import ErrorCode, ServiceError, service_boundary
from forum.models.like import ContentLike
from forum.models.user import User
from forum.repositories.comment_repository import CommentRepository
from forum.repositories.like_repository import LikeRepository
from forum.repositories.post_repository import PostRepository
from forum.services import notification_service

logger = logging.getLogger(__name__)


@dataclass
class LikeResult:
    is_liked: bool
    like_count: int


def _toggle(db: Session, existing: ContentLike | None, new_like: ContentLike) -> bool:
    repo = LikeRepository(db)
    if existing is not None:
        repo.delete(existing)
        db.commit()
        return False
    try:
        repo.create(new_like)
        db.commit()
    except IntegrityError:
        # 동시 요청으로 같은 좋아요가 먼저 저장된 경우: 좋아요 상태로 본다.
        db.rollback()
        logger.info("[likes] duplicate like ignored for user %s", new_like.user_id)
    return True


@service_boundary("likes")
def toggle_post_like(db: Session, post_id: int, current_user: User) -> LikeResult:
    post = PostRepository(db).find_by_id(post_id)
    if not post or post.is_draft:
        raise ServiceError(ErrorCode.POST_NOT_FOUND)
    if post.is_archived:
        raise ServiceError(ErrorCode.CANNOT_LIKE_ARCHIVED_CONTENT)

    repo = LikeRepository(db)
    existing = repo.find_by_user_and_post(current_user.user_id, post.post_id)
    is_liked = _toggle(db, existing, ContentLike(user_id=current_user.user_id, post_id=post.post_id))

    # 좋아요 수는 증감 대신 테이블 기준으로 다시 센다.
    post.like_count = repo.count_by_post(post.post_id)
    db.commit()

    if is_liked and existing is None:
        notification_service.notify_unless_self(
            db,
            recipient_id=post.author_id,
            actor_id=current_user.user_id,
            noti_type="post_like",
            title="게시글 좋아요",
            message=f"{current_user.name}님이 게시글을 좋아합니다.",
            link_url=f"#/posts/{post.post_id}",
        )
    return LikeResult(is_liked=is_liked, like_count=int(post.like_count))


@service_boundary("likes")
def toggle_comment_like(db: Session, comment_id: int, current_user: User) -> LikeResult:
    comment = CommentRepository(db).find_by_id(comment_id)
    if not comment:
        raise ServiceError(ErrorCode.COMMENT_NOT_FOUND)
    if comment.is_archived:
        raise ServiceError(ErrorCode.CANNOT_LIKE_ARCHIVED_CONTENT)

    repo = LikeRepository(db)
    existing = repo.find_by_user_and_comment(current_user.user_id, comment.comment_id)
    is_liked = _toggle(db, existing, ContentLike(user_id=current_user.user_id, comment_id=comment.comment_id))

    comment.like_count = repo.count_by_comment(comment.comment_id)
    db.commit()

    if is_liked and existing is None:
        notification_service.notify_unless_self(
            db,
            recipient_id=comment.author_id,
            actor_id=current_user.user_id,
            noti_type="comment_like",
            title="댓글 좋아요",
            message=f"{current_user.name}님이 댓글을 좋아합니다.",
            link_url=f"#/posts/{comment.post_id}?comment={comment.comment_id}",
        )
    return LikeResult(is_liked=is_liked, like_count=int(comment.like_count))
