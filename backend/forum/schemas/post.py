"""Post 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class PostCreate(BaseModel):
    title: str
    content: str


class PostUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None


class PostOut(BaseModel):
    post_id: int
    community_id: int
    author_id: int
    title: str
    content: str
    status: str
    is_pinned: bool
    is_solved: bool
    like_count: int
    helpful_count: int
    comment_count: int
    view_count: int
    created_at: datetime
    updated_at: Optional[datetime]
    published_at: Optional[datetime]
    deleted_at: Optional[datetime]

    model_config = {"from_attributes": True}


class LikeOut(BaseModel):
    is_liked: bool
    like_count: int

    model_config = {"from_attributes": True}
