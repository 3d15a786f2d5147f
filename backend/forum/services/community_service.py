"""Community Service 도메인 서비스 레이어입니다. 커뮤니티 생성/수정과 커뮤니티 현황 통계를 담당합니다."""

import logging
import re
from dataclasses import dataclass
from datetime import timedelta
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from forum.config import settings
from forum.errors import ErrorCode, ServiceError, service_boundary
from forum.models.comment import Comment
from forum.models.community import Community
from forum.models.post import Post
from forum.models.user import User
from forum.utils.helpers import utcnow
from forum.utils.permissions import ADMIN

logger = logging.getLogger(__name__)

_SLUG_RE = re.compile(r"^[a-z0-9][a-z0-9-]{1,99}$")


@dataclass
class CommunityStats:
    community_id: int
    total_members: int
    online_members: int
    total_admins: int
    total_posts: int
    total_comments: int


def _clean_name(name: str | None) -> str:
    name = (name or "").strip()
    if not name:
        raise ServiceError(ErrorCode.INVALID_INPUT, "커뮤니티 이름을 입력해 주세요.")
    return name


def _clean_slug(slug: str | None) -> str:
    slug = (slug or "").strip().lower()
    if not _SLUG_RE.match(slug):
        raise ServiceError(ErrorCode.INVALID_INPUT, "slug는 영문 소문자, 숫자, '-'만 사용할 수 있습니다.")
    return slug


def _ensure_slug_free(db: Session, slug: str, exclude_id: int | None = None):
    q = db.query(Community.community_id).filter(Community.slug == slug)
    if exclude_id is not None:
        q = q.filter(Community.community_id != int(exclude_id))
    if q.first():
        raise ServiceError(ErrorCode.INVALID_INPUT, f"이미 사용 중인 slug입니다: {slug}")


def _get_community(db: Session, community_id: int) -> Community:
    community = db.query(Community).filter(Community.community_id == int(community_id)).first()
    if not community:
        raise ServiceError(ErrorCode.COMMUNITY_NOT_FOUND)
    return community


@service_boundary("communities")
def get_communities(db: Session) -> List[Community]:
    return db.query(Community).order_by(Community.community_id).all()


@service_boundary("communities")
def get_community(db: Session, community_id: int) -> Community:
    return _get_community(db, community_id)


@service_boundary("communities")
def create_community(db: Session, name: str, slug: str, description: str | None = None) -> Community:
    name = _clean_name(name)
    slug = _clean_slug(slug)
    _ensure_slug_free(db, slug)

    community = Community(name=name, slug=slug, description=description)
    db.add(community)
    db.commit()
    db.refresh(community)
    logger.info("[communities] created %s (%s)", community.community_id, slug)
    return community


@service_boundary("communities")
def update_community(
    db: Session,
    community_id: int,
    name: str | None = None,
    slug: str | None = None,
    description: str | None = None,
) -> Community:
    if name is None and slug is None and description is None:
        raise ServiceError(ErrorCode.INVALID_INPUT, "변경할 항목을 하나 이상 입력해 주세요.")
    if name is not None:
        name = _clean_name(name)
    if slug is not None:
        slug = _clean_slug(slug)

    community = _get_community(db, community_id)
    if slug is not None:
        _ensure_slug_free(db, slug, exclude_id=community.community_id)
        community.slug = slug
    if name is not None:
        community.name = name
    if description is not None:
        community.description = description
    db.commit()
    db.refresh(community)
    logger.info("[communities] updated %s", community.community_id)
    return community


@service_boundary("communities")
def get_community_stats(db: Session, community_id: int) -> CommunityStats:
    """커뮤니티 위젯용 현황 통계.

    회원은 별도 가입 없이 모든 활성 사용자이며, 접속 중은 최근
    ``ONLINE_WINDOW_MINUTES`` 분 안에 인증된 요청을 보낸 사용자다.
    """
    community = _get_community(db, community_id)

    active_users = db.query(func.count(User.user_id)).filter(User.is_active == True)  # noqa: E712
    online_since = utcnow() - timedelta(minutes=settings.ONLINE_WINDOW_MINUTES)

    total_posts = (
        db.query(func.count(Post.post_id))
        .filter(
            Post.community_id == community.community_id,
            Post.published_at.isnot(None),
            Post.deleted_at.is_(None),
        )
        .scalar()
    )
    total_comments = (
        db.query(func.count(Comment.comment_id))
        .join(Post, Post.post_id == Comment.post_id)
        .filter(
            Post.community_id == community.community_id,
            Post.published_at.isnot(None),
            Post.deleted_at.is_(None),
            Comment.deleted_at.is_(None),
        )
        .scalar()
    )
    return CommunityStats(
        community_id=community.community_id,
        total_members=int(active_users.scalar() or 0),
        online_members=int(active_users.filter(User.last_seen_at >= online_since).scalar() or 0),
        total_admins=int(active_users.filter(User.role == ADMIN).scalar() or 0),
        total_posts=int(total_posts or 0),
        total_comments=int(total_comments or 0),
    )
