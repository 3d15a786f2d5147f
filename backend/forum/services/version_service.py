"""게시글/댓글 본문 버전 이력의 기록, 조회, 비교, 복원을 담당하는 도메인 서비스입니다.

버전 이력은 추가만 가능한 로그입니다. 복원도 하나의 변경이므로 최신 번호 + 1 로
새 스냅샷을 남기며, 번호를 되감거나 재사용하지 않습니다.
"""

import difflib
import logging
from dataclasses import dataclass
from typing import List, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from forum.config import settings
from forum.domain.content_ref import ContentRef, ContentType
from forum.errors import ErrorCode, ServiceError, service_boundary
from forum.models.comment import Comment
from forum.models.content_version import ContentVersion
from forum.models.post import Post
from forum.models.user import User
from forum.repositories.comment_repository import CommentRepository
from forum.repositories.content_version_repository import ContentVersionRepository
from forum.repositories.post_repository import PostRepository
from forum.services import content_service
from forum.utils.permissions import ensure_can_modify

logger = logging.getLogger(__name__)


@dataclass
class VersionComparison:
    content_ref: ContentRef
    old_version: ContentVersion
    new_version: ContentVersion


def _ensure_ref(ref: ContentRef):
    if not ref.is_valid:
        raise ServiceError(ErrorCode.INVALID_INPUT, "콘텐츠 식별자가 올바르지 않습니다.")


def _ensure_version_number(version_number: int):
    if version_number is None or int(version_number) < 1:
        raise ServiceError(ErrorCode.INVALID_INPUT, "버전 번호는 1 이상이어야 합니다.")


def _load_target(db: Session, ref: ContentRef) -> Post | Comment:
    if ref.content_type == ContentType.POST:
        post = PostRepository(db).find_by_id(ref.content_id)
        if not post:
            raise ServiceError(ErrorCode.POST_NOT_FOUND)
        return post
    comment = CommentRepository(db).find_by_id(ref.content_id)
    if not comment:
        raise ServiceError(ErrorCode.COMMENT_NOT_FOUND)
    return comment


def _ensure_readable(db: Session, ref: ContentRef, current_user: User | None):
    """조회자가 대상 본문을 볼 수 있는지 확인한다. current_user가 None이면 내부 호출로 본다."""
    if current_user is None:
        return
    entity = _load_target(db, ref)
    post = entity if isinstance(entity, Post) else PostRepository(db).find_by_id(entity.post_id)
    content_service.ensure_visible(entity, current_user, post)


@service_boundary("versions")
def get_history(db: Session, ref: ContentRef, current_user: User | None = None) -> List[ContentVersion]:
    _ensure_ref(ref)
    _ensure_readable(db, ref, current_user)
    # 아직 편집되지 않은 콘텐츠는 빈 목록을 돌려준다.
    return ContentVersionRepository(db).find_by_content(ref)


@service_boundary("versions")
def get_version(
    db: Session,
    ref: ContentRef,
    version_number: int,
    current_user: User | None = None,
) -> ContentVersion:
    _ensure_ref(ref)
    _ensure_version_number(version_number)
    _ensure_readable(db, ref, current_user)
    row = ContentVersionRepository(db).find_by_content_and_version(ref, version_number)
    if not row:
        raise ServiceError(ErrorCode.VERSION_NOT_FOUND)
    return row


@service_boundary("versions")
def compare_versions(
    db: Session,
    ref: ContentRef,
    old_version_number: int,
    new_version_number: int,
    current_user: User | None = None,
) -> VersionComparison:
    _ensure_ref(ref)
    _ensure_version_number(old_version_number)
    _ensure_version_number(new_version_number)
    if int(old_version_number) == int(new_version_number):
        raise ServiceError(ErrorCode.INVALID_INPUT, "서로 다른 두 버전을 지정해야 합니다.")
    _ensure_readable(db, ref, current_user)

    repo = ContentVersionRepository(db)
    old_version = repo.find_by_content_and_version(ref, old_version_number)
    new_version = repo.find_by_content_and_version(ref, new_version_number)
    if not old_version or not new_version:
        raise ServiceError(ErrorCode.VERSION_NOT_FOUND)
    return VersionComparison(content_ref=ref, old_version=old_version, new_version=new_version)


@service_boundary("versions")
def record_snapshot(db: Session, ref: ContentRef, content: str, created_by: int) -> ContentVersion:
    """최신 번호 + 1 (이력이 없으면 1) 로 스냅샷을 추가한다.

    번호는 매번 저장 직전에 다시 읽는다. 동시 변경으로 같은 번호가 이미 쓰였으면
    (유니크 제약 위반) 다시 읽고 ``VERSION_SNAPSHOT_MAX_ATTEMPTS`` 회까지 재시도한다.
    """
    repo = ContentVersionRepository(db)
    attempts = max(1, int(settings.VERSION_SNAPSHOT_MAX_ATTEMPTS))
    for attempt in range(1, attempts + 1):
        latest = repo.get_latest_version(ref)
        version_number = (latest.version_number if latest else 0) + 1
        row = ContentVersion(
            content_type=ref.content_type.value,
            content_id=ref.content_id,
            version_number=version_number,
            content=content,
            created_by=created_by,
        )
        try:
            created = repo.create(row)
        except IntegrityError:
            logger.warning(
                "[versions] %s v%s already taken (attempt %s/%s)",
                ref, version_number, attempt, attempts,
            )
            continue
        logger.info("[versions] recorded %s v%s", ref, created.version_number)
        return created

    logger.error("[versions] gave up recording snapshot for %s after %s attempts", ref, attempts)
    raise ServiceError(ErrorCode.INTERNAL_SERVER_ERROR)


def apply_body_change(
    db: Session,
    ref: ContentRef,
    entity: Post | Comment,
    new_body: str,
    actor_id: int,
) -> Tuple[Post | Comment, ContentVersion]:
    """본문 변경 1건을 저장하고 스냅샷 1건을 남긴다.

    순서는 항상 저장 후 버전 기록이다. 스냅샷 기록이 실패해도 실제 본문은
    의도한 변경을 반영하고 있으므로 ``reconcile_snapshot`` 으로 다시 만들 수 있다.
    """
    content_service.validate_body(new_body)
    content_service.ensure_mutable(entity)

    entity.content = new_body
    db.commit()
    db.refresh(entity)

    version = record_snapshot(db, ref, entity.content, actor_id)
    return entity, version


def _restore(db: Session, ref: ContentRef, version_number: int, current_user: User) -> Post | Comment:
    _ensure_ref(ref)
    _ensure_version_number(version_number)

    repo = ContentVersionRepository(db)
    target = repo.find_by_content_and_version(ref, version_number)
    if not target:
        raise ServiceError(ErrorCode.VERSION_NOT_FOUND)
    entity = _load_target(db, ref)
    ensure_can_modify(current_user, entity.author_id, "본인 작성글 또는 운영진만 복원할 수 있습니다.")

    content_service.ensure_mutable(entity)
    latest = repo.get_latest_version(ref)
    if latest and latest.version_number == int(version_number):
        raise ServiceError(ErrorCode.CANNOT_RESTORE_CURRENT_VERSION)

    entity, version = apply_body_change(db, ref, entity, target.content, current_user.user_id)
    logger.info("[versions] restored %s to v%s as v%s", ref, version_number, version.version_number)
    return entity


@service_boundary("versions")
def restore_post(db: Session, post_id: int, version_number: int, current_user: User) -> Post:
    return _restore(db, ContentRef.post(post_id), version_number, current_user)


@service_boundary("versions")
def restore_comment(db: Session, comment_id: int, version_number: int, current_user: User) -> Comment:
    return _restore(db, ContentRef.comment(comment_id), version_number, current_user)


@service_boundary("versions")
def reconcile_snapshot(db: Session, ref: ContentRef, created_by: int) -> ContentVersion | None:
    """저장은 됐지만 스냅샷이 누락된 변경을 실제 본문 기준으로 다시 기록한다.

    최신 스냅샷과 실제 본문이 같으면 아무것도 하지 않고 None을 돌려준다.
    이력이 없는 게시글은 아직 편집되지 않은 것으로 보고 건너뛴다.
    """
    _ensure_ref(ref)
    entity = _load_target(db, ref)
    latest = ContentVersionRepository(db).get_latest_version(ref)
    if latest is not None and latest.content == entity.content:
        return None
    if latest is None and ref.content_type == ContentType.POST:
        return None
    logger.warning("[versions] reconciling missing snapshot for %s", ref)
    return record_snapshot(db, ref, entity.content, created_by)


def diff_stats(old_text: str, new_text: str) -> dict:
    """비교 화면용 줄 단위 diff와 추가/삭제 줄 수를 계산한다."""
    old_lines = (old_text or "").splitlines()
    new_lines = (new_text or "").splitlines()
    diff = list(difflib.unified_diff(old_lines, new_lines, fromfile="old", tofile="new", lineterm=""))
    additions = sum(1 for line in diff if line.startswith("+") and not line.startswith("+++"))
    deletions = sum(1 for line in diff if line.startswith("-") and not line.startswith("---"))
    return {"diff": diff, "additions": additions, "deletions": deletions}
