"""본문 길이 계산/시각 계산 등 공용 유틸리티 헬퍼입니다."""

import re
from datetime import datetime, timezone

_TAG_RE = re.compile(r"<[^>]*>")


def utcnow() -> datetime:
    # DB의 CURRENT_TIMESTAMP와 동일하게 tz 정보 없는 UTC 시각을 사용한다.
    return datetime.now(timezone.utc).replace(tzinfo=None)


def visible_text(html: str | None) -> str:
    return _TAG_RE.sub("", html or "").strip()


def visible_length(html: str | None) -> int:
    return len(visible_text(html))
