"""Comment 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class CommentCreate(BaseModel):
    content: str
    parent_id: Optional[int] = None


class CommentUpdate(BaseModel):
    content: str


class CommentOut(BaseModel):
    comment_id: int
    post_id: int
    author_id: int
    parent_id: Optional[int]
    content: str
    like_count: int
    helpful_count: int
    created_at: datetime
    updated_at: Optional[datetime]
    deleted_at: Optional[datetime]

    model_config = {"from_attributes": True}


class CommentTreeOut(CommentOut):
    replies: List["CommentTreeOut"] = []


CommentTreeOut.model_rebuild()
