"""Auth Service 도메인 서비스 레이어입니다. 사번 기반 모의 로그인과 토큰 발급을 담당합니다."""

from datetime import datetime, timedelta, timezone

from fastapi import HTTPException, status
from jose import jwt
from sqlalchemy.orm import Session

from forum.config import settings
from forum.models.user import User
from forum.utils.helpers import utcnow

ALGORITHM = "HS256"


def create_access_token(user_id: int) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {"sub": str(user_id), "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def mock_login(db: Session, emp_id: str) -> User:
    user = db.query(User).filter(User.emp_id == emp_id, User.is_active == True).first()  # noqa: E712
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"사번 '{emp_id}'에 해당하는 활성 사용자를 찾을 수 없습니다.",
        )
    return user


def touch_last_seen(db: Session, user: User):
    # 접속 중 집계용. 1분 이내 재요청은 다시 쓰지 않는다.
    now = utcnow()
    if user.last_seen_at is None or now - user.last_seen_at >= timedelta(minutes=1):
        user.last_seen_at = now
        db.commit()
