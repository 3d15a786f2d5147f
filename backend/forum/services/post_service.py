"""Post Service 도메인 서비스 레이어입니다. 게시글 작성/수정/게시/고정/해결/보관 흐름을 캡슐화합니다."""

import logging
from typing import List

from sqlalchemy.orm import Session

from forum.domain.content_ref import ContentRef
from forum.errors import ErrorCode, ServiceError, service_boundary
from forum.models.community import Community
from forum.models.post import Post
from forum.models.user import User
from forum.repositories.post_repository import PostRepository
from forum.services import content_service, version_service
from forum.utils.permissions import ensure_can_modify, ensure_can_publish, ensure_staff

logger = logging.getLogger(__name__)


def _get_post(db: Session, post_id: int) -> Post:
    post = PostRepository(db).find_by_id(post_id)
    if not post:
        raise ServiceError(ErrorCode.POST_NOT_FOUND)
    return post


@service_boundary("posts")
def get_post(db: Session, post_id: int, current_user: User | None = None) -> Post:
    post = _get_post(db, post_id)
    # 임시저장/보관 게시글은 작성자와 운영진에게만 보인다.
    content_service.ensure_visible(post, current_user)
    return post


@service_boundary("posts")
def list_posts(
    db: Session,
    community_id: int,
    current_user: User,
    skip: int = 0,
    limit: int = 20,
    include_drafts: bool = False,
) -> List[Post]:
    if not db.query(Community.community_id).filter(Community.community_id == int(community_id)).first():
        raise ServiceError(ErrorCode.COMMUNITY_NOT_FOUND)
    return PostRepository(db).find_by_community(
        community_id,
        include_drafts=include_drafts,
        author_id=current_user.user_id,
        skip=skip,
        limit=limit,
    )


@service_boundary("posts")
def create_post(db: Session, community_id: int, title: str, content: str, current_user: User) -> Post:
    content_service.validate_title(title)
    content_service.validate_post_body(content)
    if not db.query(Community.community_id).filter(Community.community_id == int(community_id)).first():
        raise ServiceError(ErrorCode.COMMUNITY_NOT_FOUND)

    # 새 게시글은 임시저장 상태로 시작하고, 본문 이력은 첫 편집부터 쌓인다.
    post = Post(
        community_id=int(community_id),
        author_id=current_user.user_id,
        title=title.strip(),
        content=content,
    )
    post = PostRepository(db).create(post)
    logger.info("[posts] created draft %s in community %s", post.post_id, community_id)
    return post


@service_boundary("posts")
def update_post(
    db: Session,
    post_id: int,
    current_user: User,
    title: str | None = None,
    content: str | None = None,
) -> Post:
    if title is None and content is None:
        raise ServiceError(ErrorCode.INVALID_INPUT, "제목 또는 본문 중 하나는 입력해야 합니다.")
    if title is not None:
        content_service.validate_title(title)
    if content is not None:
        # 최소 길이 규칙은 작성/게시 시점에만 적용하고, 편집은 빈 본문만 막는다.
        content_service.validate_body(content)

    post = _get_post(db, post_id)
    ensure_can_modify(current_user, post.author_id)
    content_service.ensure_mutable(post)

    if title is not None:
        post.title = title.strip()
    if content is None or content == post.content:
        # 본문이 바뀌지 않은 변경은 스냅샷을 남기지 않는다.
        return PostRepository(db).update(post)

    post, _ = version_service.apply_body_change(
        db, ContentRef.post(post.post_id), post, content, current_user.user_id
    )
    return post


def _transition(db: Session, post_id: int, current_user: User, check_permission, transition) -> Post:
    post = _get_post(db, post_id)
    check_permission(current_user, post)
    transition(post)
    return PostRepository(db).update(post)


@service_boundary("posts")
def publish_post(db: Session, post_id: int, current_user: User) -> Post:
    post = _transition(
        db, post_id, current_user,
        lambda user, p: ensure_can_publish(user, p.author_id),
        content_service.publish,
    )
    logger.info("[posts] published %s", post.post_id)
    return post


@service_boundary("posts")
def pin_post(db: Session, post_id: int, current_user: User) -> Post:
    return _transition(
        db, post_id, current_user,
        lambda user, p: ensure_staff(user, "운영진만 게시글을 고정할 수 있습니다."),
        content_service.pin,
    )


@service_boundary("posts")
def unpin_post(db: Session, post_id: int, current_user: User) -> Post:
    return _transition(
        db, post_id, current_user,
        lambda user, p: ensure_staff(user, "운영진만 게시글 고정을 해제할 수 있습니다."),
        content_service.unpin,
    )


@service_boundary("posts")
def mark_solved(db: Session, post_id: int, current_user: User) -> Post:
    return _transition(
        db, post_id, current_user,
        lambda user, p: ensure_can_modify(user, p.author_id),
        content_service.mark_solved,
    )


@service_boundary("posts")
def mark_unsolved(db: Session, post_id: int, current_user: User) -> Post:
    return _transition(
        db, post_id, current_user,
        lambda user, p: ensure_can_modify(user, p.author_id),
        content_service.mark_unsolved,
    )


@service_boundary("posts")
def archive_post(db: Session, post_id: int, current_user: User) -> None:
    post = _get_post(db, post_id)
    ensure_can_modify(current_user, post.author_id)
    content_service.ensure_archivable(post)
    PostRepository(db).archive(post.post_id)
    logger.info("[posts] archived %s", post.post_id)


def increment_view(db: Session, post_id: int):
    db.query(Post).filter(Post.post_id == int(post_id)).update(
        {"view_count": Post.view_count + 1},
        synchronize_session=False,
    )
    db.commit()
