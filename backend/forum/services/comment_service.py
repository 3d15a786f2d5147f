"""Comment Service 도메인 서비스 레이어입니다. 2단계(댓글/답글) 댓글 트리와 보관 규칙을 캡슐화합니다."""

import logging
from typing import List

from sqlalchemy.orm import Session

from forum.domain.comment_tree import CommentNode, build_tree
from forum.domain.content_ref import ContentRef
from forum.errors import ErrorCode, ServiceError, service_boundary
from forum.models.comment import Comment
from forum.models.post import Post
from forum.models.user import User
from forum.repositories.comment_repository import CommentRepository
from forum.repositories.post_repository import PostRepository
from forum.services import content_service, notification_service, version_service
from forum.utils.permissions import ensure_can_modify

logger = logging.getLogger(__name__)


def _post_link(post_id: int, comment_id: int | None = None) -> str:
    link = f"#/posts/{post_id}"
    return f"{link}?comment={comment_id}" if comment_id is not None else link


def _get_comment(db: Session, comment_id: int) -> Comment:
    comment = CommentRepository(db).find_by_id(comment_id)
    if not comment:
        raise ServiceError(ErrorCode.COMMENT_NOT_FOUND)
    return comment


def _visible_post(db: Session, post_id: int) -> Post:
    post = PostRepository(db).find_by_id(post_id)
    # 임시저장 게시글에는 댓글 흐름이 열리지 않는다.
    if not post or post.is_draft:
        raise ServiceError(ErrorCode.POST_NOT_FOUND)
    return post


@service_boundary("comments")
def get_comment(db: Session, comment_id: int, current_user: User) -> Comment:
    comment = _get_comment(db, comment_id)
    post = PostRepository(db).find_by_id(comment.post_id)
    # 보관된 댓글과 숨김 게시글의 댓글은 작성자와 운영진에게만 보인다.
    content_service.ensure_visible(comment, current_user, post)
    return comment


@service_boundary("comments")
def list_comments(db: Session, post_id: int, current_user: User | None = None) -> List[CommentNode]:
    post = _visible_post(db, post_id)
    content_service.ensure_visible(post, current_user)
    return build_tree(CommentRepository(db).find_by_post_id(post_id))


@service_boundary("comments")
def create_comment(
    db: Session,
    post_id: int,
    content: str,
    current_user: User,
    parent_id: int | None = None,
) -> Comment:
    content_service.validate_comment_body(content)

    repo = CommentRepository(db)
    post = _visible_post(db, post_id)
    parent = None
    if parent_id is not None:
        parent = repo.find_by_id(parent_id)
        if not parent or int(parent.post_id) != int(post.post_id):
            raise ServiceError(ErrorCode.PARENT_COMMENT_NOT_FOUND)

    if post.is_archived:
        raise ServiceError(ErrorCode.CANNOT_COMMENT_ON_ARCHIVED_POST)
    if parent is not None:
        if parent.is_archived:
            raise ServiceError(ErrorCode.CANNOT_REPLY_TO_ARCHIVED_COMMENT)
        # 답글의 부모는 반드시 최상위 댓글이어야 한다 (최대 2단계).
        if parent.parent_id is not None:
            raise ServiceError(ErrorCode.MAX_NESTING_DEPTH_EXCEEDED)

    comment = repo.create(
        Comment(
            post_id=post.post_id,
            author_id=current_user.user_id,
            parent_id=parent.comment_id if parent is not None else None,
            content=content,
        )
    )
    post.comment_count = int(post.comment_count or 0) + 1
    db.commit()

    version_service.record_snapshot(db, ContentRef.comment(comment.comment_id), comment.content, current_user.user_id)

    if parent is not None:
        notification_service.notify_unless_self(
            db,
            recipient_id=parent.author_id,
            actor_id=current_user.user_id,
            noti_type="comment_reply",
            title="새 답글",
            message=f"{current_user.name}님이 댓글에 답글을 남겼습니다.",
            link_url=_post_link(post.post_id, comment.comment_id),
        )
    else:
        notification_service.notify_unless_self(
            db,
            recipient_id=post.author_id,
            actor_id=current_user.user_id,
            noti_type="post_comment",
            title="새 댓글",
            message=f"{current_user.name}님이 게시글에 댓글을 남겼습니다.",
            link_url=_post_link(post.post_id, comment.comment_id),
        )
    logger.info("[comments] created %s on post %s (parent=%s)", comment.comment_id, post.post_id, comment.parent_id)
    db.refresh(comment)
    return comment


@service_boundary("comments")
def update_comment(db: Session, comment_id: int, content: str, current_user: User) -> Comment:
    content_service.validate_comment_body(content)
    comment = _get_comment(db, comment_id)
    ensure_can_modify(current_user, comment.author_id)
    content_service.ensure_mutable(comment)
    if content == comment.content:
        # 본문이 그대로면 게시글과 마찬가지로 스냅샷을 남기지 않는다.
        return comment

    comment, _ = version_service.apply_body_change(
        db, ContentRef.comment(comment.comment_id), comment, content, current_user.user_id
    )
    return comment


@service_boundary("comments")
def archive_comment(db: Session, comment_id: int, current_user: User) -> None:
    comment = _get_comment(db, comment_id)
    ensure_can_modify(current_user, comment.author_id)
    content_service.ensure_archivable(comment)

    # 답글은 함께 보관하지 않는다. 버전 이력도 그대로 남는다.
    CommentRepository(db).archive(comment.comment_id)
    post = PostRepository(db).find_by_id(comment.post_id)
    if post is not None and int(post.comment_count or 0) > 0:
        post.comment_count = int(post.comment_count) - 1
        db.commit()
    logger.info("[comments] archived %s", comment.comment_id)
