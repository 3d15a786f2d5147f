"""환경 변수 기반 애플리케이션 설정을 중앙에서 관리합니다."""

from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./forum.db"
    SECRET_KEY: str = "change-me-to-a-random-secret-key"
    DEBUG: bool = True
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]
    LOG_LEVEL: str = "INFO"

    # JWT
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    # 게시글/댓글 본문 규칙 (HTML 태그 제거 후 길이 기준)
    POST_TITLE_MIN_LENGTH: int = 3
    POST_TITLE_MAX_LENGTH: int = 200
    POST_CONTENT_MIN_LENGTH: int = 10
    COMMENT_CONTENT_MIN_LENGTH: int = 1

    # 버전 번호 충돌 시 스냅샷 재시도 횟수
    VERSION_SNAPSHOT_MAX_ATTEMPTS: int = 3

    # 리더보드 점수
    LEADERBOARD_POST_POINTS: int = 5
    LEADERBOARD_COMMENT_POINTS: int = 2
    LEADERBOARD_LIKE_POINTS: int = 1
    LEADERBOARD_DEFAULT_LIMIT: int = 5

    # 커뮤니티 통계: 최근 N분 내 요청한 사용자를 접속 중으로 본다.
    ONLINE_WINDOW_MINUTES: int = 15

    class Config:
        # 실행 cwd와 무관하게 backend/.env를 로드한다.
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()
