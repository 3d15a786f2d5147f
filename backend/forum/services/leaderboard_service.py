"""커뮤니티 기여도 리더보드 집계 서비스입니다.

점수 = 게시된 글 x 5 + 보관되지 않은 댓글 x 2 + 받은 좋아요 x 1 (설정으로 조정 가능).
기간(week/month)은 게시 시각, 댓글 작성 시각, 좋아요 시각 기준으로 자릅니다.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from forum.config import settings
from forum.errors import ErrorCode, ServiceError, service_boundary
from forum.models.comment import Comment
from forum.models.community import Community
from forum.models.like import ContentLike
from forum.models.post import Post
from forum.models.user import User
from forum.utils.helpers import utcnow

logger = logging.getLogger(__name__)

PERIOD_DAYS = {"week": 7, "month": 30, "all-time": None}
MAX_LIMIT = 100


@dataclass
class LeaderboardEntry:
    user_id: int
    user_name: str
    points: int
    post_count: int
    comment_count: int
    like_count: int
    rank: int = 0


@dataclass
class Leaderboard:
    community_id: int
    period: str
    entries: List[LeaderboardEntry] = field(default_factory=list)
    generated_at: datetime = field(default_factory=utcnow)


def _since(period: str) -> datetime | None:
    days = PERIOD_DAYS[period]
    return utcnow() - timedelta(days=days) if days else None


def _live_post_filters():
    # 임시저장/보관 게시글에서 생긴 활동은 점수에 넣지 않는다.
    return (Post.published_at.isnot(None), Post.deleted_at.is_(None))


def _post_counts(db: Session, community_id: int, since: datetime | None) -> Dict[int, int]:
    q = db.query(Post.author_id, func.count(Post.post_id)).filter(
        Post.community_id == community_id, *_live_post_filters()
    )
    if since is not None:
        q = q.filter(Post.published_at >= since)
    return {int(uid): int(cnt) for uid, cnt in q.group_by(Post.author_id).all()}


def _comment_counts(db: Session, community_id: int, since: datetime | None) -> Dict[int, int]:
    q = (
        db.query(Comment.author_id, func.count(Comment.comment_id))
        .join(Post, Post.post_id == Comment.post_id)
        .filter(Post.community_id == community_id, Comment.deleted_at.is_(None), *_live_post_filters())
    )
    if since is not None:
        q = q.filter(Comment.created_at >= since)
    return {int(uid): int(cnt) for uid, cnt in q.group_by(Comment.author_id).all()}


def _received_like_counts(db: Session, community_id: int, since: datetime | None) -> Dict[int, int]:
    result: Dict[int, int] = {}

    post_q = (
        db.query(Post.author_id, func.count(ContentLike.like_id))
        .join(ContentLike, ContentLike.post_id == Post.post_id)
        .filter(Post.community_id == community_id, *_live_post_filters())
    )
    comment_q = (
        db.query(Comment.author_id, func.count(ContentLike.like_id))
        .join(ContentLike, ContentLike.comment_id == Comment.comment_id)
        .join(Post, Post.post_id == Comment.post_id)
        .filter(Post.community_id == community_id, Comment.deleted_at.is_(None), *_live_post_filters())
    )
    if since is not None:
        post_q = post_q.filter(ContentLike.created_at >= since)
        comment_q = comment_q.filter(ContentLike.created_at >= since)

    for uid, cnt in post_q.group_by(Post.author_id).all():
        result[int(uid)] = result.get(int(uid), 0) + int(cnt)
    for uid, cnt in comment_q.group_by(Comment.author_id).all():
        result[int(uid)] = result.get(int(uid), 0) + int(cnt)
    return result


@service_boundary("leaderboard")
def get_leaderboard(
    db: Session,
    community_id: int,
    period: str = "all-time",
    limit: int | None = None,
) -> Leaderboard:
    if period not in PERIOD_DAYS:
        raise ServiceError(ErrorCode.INVALID_INPUT, "기간은 week, month, all-time 중 하나여야 합니다.")
    limit = settings.LEADERBOARD_DEFAULT_LIMIT if limit is None else int(limit)
    if limit < 1 or limit > MAX_LIMIT:
        raise ServiceError(ErrorCode.INVALID_INPUT, f"limit은 1~{MAX_LIMIT} 사이여야 합니다.")
    if not db.query(Community.community_id).filter(Community.community_id == int(community_id)).first():
        raise ServiceError(ErrorCode.COMMUNITY_NOT_FOUND)

    since = _since(period)
    posts = _post_counts(db, int(community_id), since)
    comments = _comment_counts(db, int(community_id), since)
    likes = _received_like_counts(db, int(community_id), since)

    user_ids = set(posts) | set(comments) | set(likes)
    names = {}
    if user_ids:
        rows = db.query(User.user_id, User.name).filter(User.user_id.in_(user_ids), User.is_active == True).all()  # noqa: E712
        names = {int(uid): name for uid, name in rows}

    entries = []
    for uid in names:
        post_count = posts.get(uid, 0)
        comment_count = comments.get(uid, 0)
        like_count = likes.get(uid, 0)
        entries.append(
            LeaderboardEntry(
                user_id=uid,
                user_name=names[uid],
                points=(
                    post_count * settings.LEADERBOARD_POST_POINTS
                    + comment_count * settings.LEADERBOARD_COMMENT_POINTS
                    + like_count * settings.LEADERBOARD_LIKE_POINTS
                ),
                post_count=post_count,
                comment_count=comment_count,
                like_count=like_count,
            )
        )

    entries.sort(key=lambda e: (-e.points, e.user_id))
    entries = entries[:limit]
    for rank, entry in enumerate(entries, start=1):
        entry.rank = rank

    logger.debug("[leaderboard] community %s period=%s entries=%s", community_id, period, len(entries))
    return Leaderboard(community_id=int(community_id), period=period, entries=entries)
