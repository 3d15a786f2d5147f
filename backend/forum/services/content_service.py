"""게시글/댓글 본문 변경과 게시글 상태 전이의 허용 여부를 판단하는 규칙 모음입니다.

DB 접근 없이 엔티티 상태만 보고 판단합니다. 본문 저장과 스냅샷 기록 순서는
``version_service.apply_body_change`` 가 담당합니다.
"""

from forum.config import settings
from forum.errors import ErrorCode, ServiceError
from forum.models.comment import Comment
from forum.models.post import Post
from forum.models.user import User
from forum.utils.helpers import utcnow, visible_length
from forum.utils.permissions import can_modify


def validate_body(body: str | None, *, min_length: int = 1):
    if body is None or not body.strip():
        raise ServiceError(ErrorCode.CONTENT_TOO_SHORT)
    # 최소 길이가 1보다 클 때만 HTML 태그를 뺀 글자 수로 센다.
    if min_length > 1 and visible_length(body) < min_length:
        raise ServiceError(ErrorCode.CONTENT_TOO_SHORT)


def validate_post_body(body: str | None):
    validate_body(body, min_length=settings.POST_CONTENT_MIN_LENGTH)


def validate_comment_body(body: str | None):
    validate_body(body, min_length=settings.COMMENT_CONTENT_MIN_LENGTH)


def validate_title(title: str | None):
    length = len((title or "").strip())
    if length < settings.POST_TITLE_MIN_LENGTH or length > settings.POST_TITLE_MAX_LENGTH:
        raise ServiceError(
            ErrorCode.INVALID_TITLE,
            f"제목은 {settings.POST_TITLE_MIN_LENGTH}~{settings.POST_TITLE_MAX_LENGTH}자여야 합니다.",
        )


def ensure_mutable(entity: Post | Comment):
    if not entity.is_archived:
        return
    if isinstance(entity, Post):
        raise ServiceError(ErrorCode.CANNOT_MODIFY_ARCHIVED_POST)
    raise ServiceError(ErrorCode.CANNOT_MODIFY_ARCHIVED_COMMENT)


def is_hidden(entity: Post | Comment, post: Post | None = None) -> bool:
    """임시저장/보관 게시글, 보관된 댓글, 그런 게시글에 달린 댓글은 숨김 대상이다."""
    if isinstance(entity, Post):
        return entity.is_draft or entity.is_archived
    return entity.is_archived or post is None or is_hidden(post)


def ensure_visible(entity: Post | Comment, user: User | None, post: Post | None = None):
    # 숨김 대상은 작성자와 운영진 외에는 존재하지 않는 것처럼 보고한다.
    if not is_hidden(entity, post):
        return
    if user is not None and can_modify(user, entity.author_id):
        return
    code = ErrorCode.POST_NOT_FOUND if isinstance(entity, Post) else ErrorCode.COMMENT_NOT_FOUND
    raise ServiceError(code)


# 게시글 상태 전이: draft -> published (되돌릴 수 없음), 어느 상태든 -> archived (종료 상태)

def publish(post: Post):
    if post.is_archived:
        raise ServiceError(ErrorCode.CANNOT_PUBLISH_ARCHIVED_POST)
    if post.is_published:
        raise ServiceError(ErrorCode.POST_ALREADY_PUBLISHED)
    validate_title(post.title)
    validate_post_body(post.content)
    post.published_at = utcnow()


def pin(post: Post):
    if post.is_archived:
        raise ServiceError(ErrorCode.CANNOT_PIN_ARCHIVED_POST)
    if post.is_draft:
        raise ServiceError(ErrorCode.CANNOT_PIN_DRAFT_POST)
    if post.is_pinned:
        raise ServiceError(ErrorCode.POST_ALREADY_PINNED)
    post.is_pinned = True


def unpin(post: Post):
    if post.is_archived:
        raise ServiceError(ErrorCode.CANNOT_PIN_ARCHIVED_POST)
    if not post.is_pinned:
        raise ServiceError(ErrorCode.POST_NOT_PINNED)
    post.is_pinned = False


def mark_solved(post: Post):
    if post.is_archived:
        raise ServiceError(ErrorCode.CANNOT_SOLVE_ARCHIVED_POST)
    if post.is_draft:
        raise ServiceError(ErrorCode.CANNOT_SOLVE_DRAFT_POST)
    if post.is_solved:
        raise ServiceError(ErrorCode.POST_ALREADY_SOLVED)
    post.is_solved = True


def mark_unsolved(post: Post):
    if post.is_archived:
        raise ServiceError(ErrorCode.CANNOT_SOLVE_ARCHIVED_POST)
    if not post.is_solved:
        raise ServiceError(ErrorCode.POST_NOT_SOLVED)
    post.is_solved = False


def ensure_archivable(entity: Post | Comment):
    # 보관은 멱등 처리하지 않는다. 이미 보관된 대상은 충돌로 보고한다.
    if entity.is_archived:
        code = ErrorCode.POST_ALREADY_ARCHIVED if isinstance(entity, Post) else ErrorCode.COMMENT_ALREADY_ARCHIVED
        raise ServiceError(code)
