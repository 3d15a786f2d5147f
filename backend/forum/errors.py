"""서비스 레이어 공용 오류 분류(Validation/NotFound/Conflict/Internal)와 경계 처리 유틸리티입니다."""

import functools
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class ErrorCode(str, Enum):
    # Validation
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_TITLE = "INVALID_TITLE"
    CONTENT_TOO_SHORT = "CONTENT_TOO_SHORT"

    # NotFound
    VERSION_NOT_FOUND = "VERSION_NOT_FOUND"
    POST_NOT_FOUND = "POST_NOT_FOUND"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"
    PARENT_COMMENT_NOT_FOUND = "PARENT_COMMENT_NOT_FOUND"
    COMMUNITY_NOT_FOUND = "COMMUNITY_NOT_FOUND"
    NOTIFICATION_NOT_FOUND = "NOTIFICATION_NOT_FOUND"

    # Forbidden
    FORBIDDEN = "FORBIDDEN"

    # Conflict
    CANNOT_RESTORE_CURRENT_VERSION = "CANNOT_RESTORE_CURRENT_VERSION"
    MAX_NESTING_DEPTH_EXCEEDED = "MAX_NESTING_DEPTH_EXCEEDED"
    CANNOT_COMMENT_ON_ARCHIVED_POST = "CANNOT_COMMENT_ON_ARCHIVED_POST"
    CANNOT_REPLY_TO_ARCHIVED_COMMENT = "CANNOT_REPLY_TO_ARCHIVED_COMMENT"
    CANNOT_MODIFY_ARCHIVED_COMMENT = "CANNOT_MODIFY_ARCHIVED_COMMENT"
    COMMENT_ALREADY_ARCHIVED = "COMMENT_ALREADY_ARCHIVED"
    CANNOT_MODIFY_ARCHIVED_POST = "CANNOT_MODIFY_ARCHIVED_POST"
    POST_ALREADY_ARCHIVED = "POST_ALREADY_ARCHIVED"
    POST_ALREADY_PUBLISHED = "POST_ALREADY_PUBLISHED"
    CANNOT_PUBLISH_ARCHIVED_POST = "CANNOT_PUBLISH_ARCHIVED_POST"
    CANNOT_PIN_ARCHIVED_POST = "CANNOT_PIN_ARCHIVED_POST"
    CANNOT_PIN_DRAFT_POST = "CANNOT_PIN_DRAFT_POST"
    POST_ALREADY_PINNED = "POST_ALREADY_PINNED"
    POST_NOT_PINNED = "POST_NOT_PINNED"
    CANNOT_SOLVE_ARCHIVED_POST = "CANNOT_SOLVE_ARCHIVED_POST"
    CANNOT_SOLVE_DRAFT_POST = "CANNOT_SOLVE_DRAFT_POST"
    POST_ALREADY_SOLVED = "POST_ALREADY_SOLVED"
    POST_NOT_SOLVED = "POST_NOT_SOLVED"
    CANNOT_LIKE_ARCHIVED_CONTENT = "CANNOT_LIKE_ARCHIVED_CONTENT"

    # Internal
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


_KIND_BY_CODE = {
    ErrorCode.INVALID_INPUT: ErrorKind.VALIDATION,
    ErrorCode.INVALID_TITLE: ErrorKind.VALIDATION,
    ErrorCode.CONTENT_TOO_SHORT: ErrorKind.VALIDATION,
    ErrorCode.VERSION_NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.POST_NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.COMMENT_NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.PARENT_COMMENT_NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.COMMUNITY_NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.NOTIFICATION_NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.FORBIDDEN: ErrorKind.FORBIDDEN,
    ErrorCode.INTERNAL_SERVER_ERROR: ErrorKind.INTERNAL,
}

DEFAULT_MESSAGES = {
    ErrorCode.INVALID_INPUT: "요청 값이 올바르지 않습니다.",
    ErrorCode.INVALID_TITLE: "제목 길이가 허용 범위를 벗어났습니다.",
    ErrorCode.CONTENT_TOO_SHORT: "본문이 비어 있거나 너무 짧습니다.",
    ErrorCode.VERSION_NOT_FOUND: "버전 이력을 찾을 수 없습니다.",
    ErrorCode.POST_NOT_FOUND: "게시글을 찾을 수 없습니다.",
    ErrorCode.COMMENT_NOT_FOUND: "댓글을 찾을 수 없습니다.",
    ErrorCode.PARENT_COMMENT_NOT_FOUND: "상위 댓글을 찾을 수 없습니다.",
    ErrorCode.COMMUNITY_NOT_FOUND: "커뮤니티를 찾을 수 없습니다.",
    ErrorCode.NOTIFICATION_NOT_FOUND: "알림을 찾을 수 없습니다.",
    ErrorCode.FORBIDDEN: "해당 작업 권한이 없습니다.",
    ErrorCode.CANNOT_RESTORE_CURRENT_VERSION: "현재 버전으로는 복원할 수 없습니다.",
    ErrorCode.MAX_NESTING_DEPTH_EXCEEDED: "답글에는 다시 답글을 달 수 없습니다.",
    ErrorCode.CANNOT_COMMENT_ON_ARCHIVED_POST: "보관된 게시글에는 댓글을 달 수 없습니다.",
    ErrorCode.CANNOT_REPLY_TO_ARCHIVED_COMMENT: "보관된 댓글에는 답글을 달 수 없습니다.",
    ErrorCode.CANNOT_MODIFY_ARCHIVED_COMMENT: "보관된 댓글은 수정할 수 없습니다.",
    ErrorCode.COMMENT_ALREADY_ARCHIVED: "이미 보관된 댓글입니다.",
    ErrorCode.CANNOT_MODIFY_ARCHIVED_POST: "보관된 게시글은 수정할 수 없습니다.",
    ErrorCode.POST_ALREADY_ARCHIVED: "이미 보관된 게시글입니다.",
    ErrorCode.POST_ALREADY_PUBLISHED: "이미 게시된 게시글입니다.",
    ErrorCode.CANNOT_PUBLISH_ARCHIVED_POST: "보관된 게시글은 게시할 수 없습니다.",
    ErrorCode.CANNOT_PIN_ARCHIVED_POST: "보관된 게시글은 고정할 수 없습니다.",
    ErrorCode.CANNOT_PIN_DRAFT_POST: "임시저장 게시글은 고정할 수 없습니다.",
    ErrorCode.POST_ALREADY_PINNED: "이미 고정된 게시글입니다.",
    ErrorCode.POST_NOT_PINNED: "고정되지 않은 게시글입니다.",
    ErrorCode.CANNOT_SOLVE_ARCHIVED_POST: "보관된 게시글은 해결 처리할 수 없습니다.",
    ErrorCode.CANNOT_SOLVE_DRAFT_POST: "임시저장 게시글은 해결 처리할 수 없습니다.",
    ErrorCode.POST_ALREADY_SOLVED: "이미 해결 처리된 게시글입니다.",
    ErrorCode.POST_NOT_SOLVED: "해결 처리되지 않은 게시글입니다.",
    ErrorCode.CANNOT_LIKE_ARCHIVED_CONTENT: "보관된 콘텐츠에는 좋아요를 누를 수 없습니다.",
    ErrorCode.INTERNAL_SERVER_ERROR: "요청을 처리하는 중 오류가 발생했습니다.",
}

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}


def kind_of(code: ErrorCode) -> ErrorKind:
    # 명시 매핑이 없는 코드는 상태 전이 충돌로 취급한다.
    return _KIND_BY_CODE.get(code, ErrorKind.CONFLICT)


class ServiceError(Exception):
    """서비스 연산이 실패했음을 알리는 단일 예외 타입입니다.

    ``code`` 로 실패 원인을, ``kind`` 로 응답 범주를 구분합니다.
    메시지 문자열 비교로 분기하지 않고 항상 ``code`` 를 비교합니다.
    """

    def __init__(self, code: ErrorCode, message: str | None = None):
        self.code = code
        self.kind = kind_of(code)
        self.message = message or DEFAULT_MESSAGES[code]
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    def __repr__(self) -> str:
        return f"ServiceError({self.code.value})"


def service_boundary(area: str):
    """서비스 연산 경계 데코레이터.

    ServiceError는 그대로 전파하고, 그 외 예외는 서버 로그에 남긴 뒤
    내부 세부사항을 숨긴 INTERNAL_SERVER_ERROR로 다시 발생시킨다.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except ServiceError:
                raise
            except Exception as exc:
                logger.exception("[%s] %s failed", area, func.__name__)
                raise ServiceError(ErrorCode.INTERNAL_SERVER_ERROR) from exc

        return wrapper

    return decorator
