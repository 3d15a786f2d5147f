"""서비스 레이어 패키지 초기화 모듈입니다."""

from forum.services import (
    auth_service,
    community_service,
    content_service,
    version_service,
    notification_service,
    post_service,
    comment_service,
    like_service,
    leaderboard_service,
)
