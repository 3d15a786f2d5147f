"""Permissions 관련 공용 유틸리티 헬퍼입니다."""

from forum.errors import ErrorCode, ServiceError
from forum.models.user import User


ADMIN = "admin"
MODERATOR = "moderator"

STAFF_ROLES = (ADMIN, MODERATOR)


def is_admin(user: User) -> bool:
    return user.role == ADMIN


def is_staff(user: User) -> bool:
    return user.role in STAFF_ROLES


def is_author(user: User, author_id: int) -> bool:
    return int(user.user_id) == int(author_id)


def can_modify(user: User, author_id: int) -> bool:
    return is_author(user, author_id) or is_staff(user)


def ensure_can_modify(user: User, author_id: int, detail: str | None = None):
    if not can_modify(user, author_id):
        raise ServiceError(ErrorCode.FORBIDDEN, detail or "본인 작성글 또는 운영진만 변경할 수 있습니다.")


def ensure_can_publish(user: User, author_id: int):
    if not (is_author(user, author_id) or is_admin(user)):
        raise ServiceError(ErrorCode.FORBIDDEN, "본인 게시글 또는 관리자만 게시할 수 있습니다.")


def ensure_staff(user: User, detail: str | None = None):
    if not is_staff(user):
        raise ServiceError(ErrorCode.FORBIDDEN, detail or "운영진만 가능한 작업입니다.")
