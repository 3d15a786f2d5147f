"""Communities 기능 API 라우터입니다. 커뮤니티, 커뮤니티별 게시글 목록/작성, 리더보드를 제공합니다."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List
from forum.database import get_db
from forum.schemas.community import (
    CommunityCreate,
    CommunityOut,
    CommunityStatsOut,
    CommunityUpdate,
    LeaderboardOut,
)
from forum.schemas.post import PostCreate, PostOut
from forum.services import community_service, leaderboard_service, post_service
from forum.middleware.auth_middleware import get_current_user, require_roles
from forum.models.user import User

router = APIRouter(prefix="/api/communities", tags=["communities"])


@router.get("", response_model=List[CommunityOut])
def list_communities(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return community_service.get_communities(db)


@router.post("", response_model=CommunityOut)
def create_community(
    data: CommunityCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("admin")),
):
    return community_service.create_community(db, data.name, data.slug, data.description)


@router.put("/{community_id}", response_model=CommunityOut)
def update_community(
    community_id: int,
    data: CommunityUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("admin")),
):
    return community_service.update_community(db, community_id, data.name, data.slug, data.description)


@router.get("/{community_id}/stats", response_model=CommunityStatsOut)
def get_community_stats(
    community_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return community_service.get_community_stats(db, community_id)


@router.get("/{community_id}/posts", response_model=List[PostOut])
def list_posts(
    community_id: int,
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    include_drafts: bool = False,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return post_service.list_posts(db, community_id, current_user, skip, limit, include_drafts=include_drafts)


@router.post("/{community_id}/posts", response_model=PostOut)
def create_post(
    community_id: int,
    data: PostCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return post_service.create_post(db, community_id, data.title, data.content, current_user)


@router.get("/{community_id}/leaderboard", response_model=LeaderboardOut)
def get_leaderboard(
    community_id: int,
    period: str = "all-time",
    limit: int | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return leaderboard_service.get_leaderboard(db, community_id, period, limit)
