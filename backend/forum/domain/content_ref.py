"""버전 이력의 대상(게시글 또는 댓글)을 가리키는 값 타입입니다."""

from dataclasses import dataclass
from enum import Enum

from forum.errors import ErrorCode, ServiceError


class ContentType(str, Enum):
    POST = "post"
    COMMENT = "comment"


@dataclass(frozen=True)
class ContentRef:
    content_type: ContentType
    content_id: int

    @classmethod
    def post(cls, post_id: int) -> "ContentRef":
        return cls(ContentType.POST, int(post_id))

    @classmethod
    def comment(cls, comment_id: int) -> "ContentRef":
        return cls(ContentType.COMMENT, int(comment_id))

    @classmethod
    def parse(cls, content_type: str, content_id: int) -> "ContentRef":
        try:
            kind = ContentType(str(content_type or "").strip().lower())
        except ValueError:
            raise ServiceError(ErrorCode.INVALID_INPUT, f"지원하지 않는 콘텐츠 유형입니다: {content_type}") from None
        return cls(kind, int(content_id))

    @property
    def is_valid(self) -> bool:
        return self.content_id >= 1

    def __str__(self) -> str:
        return f"{self.content_type.value}:{self.content_id}"
