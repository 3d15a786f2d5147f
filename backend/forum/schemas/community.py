"""Community 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class CommunityCreate(BaseModel):
    name: str
    slug: str
    description: Optional[str] = None


class CommunityUpdate(BaseModel):
    name: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None


class CommunityOut(BaseModel):
    community_id: int
    name: str
    slug: str
    description: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}


class CommunityStatsOut(BaseModel):
    community_id: int
    total_members: int
    online_members: int
    total_admins: int
    total_posts: int
    total_comments: int

    model_config = {"from_attributes": True}


class LeaderboardEntryOut(BaseModel):
    rank: int
    user_id: int
    user_name: str
    points: int
    post_count: int
    comment_count: int
    like_count: int

    model_config = {"from_attributes": True}


class LeaderboardOut(BaseModel):
    community_id: int
    period: str
    entries: List[LeaderboardEntryOut]
    generated_at: datetime

    model_config = {"from_attributes": True}
