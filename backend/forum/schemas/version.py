"""콘텐츠 버전 이력 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from datetime import datetime
from typing import List

from pydantic import BaseModel


class ContentVersionOut(BaseModel):
    version_id: int
    content_type: str
    content_id: int
    version_number: int
    content: str
    created_by: int
    created_at: datetime

    model_config = {"from_attributes": True}


class VersionCompareOut(BaseModel):
    content_type: str
    content_id: int
    old_version: ContentVersionOut
    new_version: ContentVersionOut
    diff: List[str]
    additions: int
    deletions: int


class RestoreRequest(BaseModel):
    version_number: int
