"""Versions 기능 API 라우터입니다. 게시글/댓글 본문 이력 조회, 비교, 스냅샷 보정을 제공합니다."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from forum.database import get_db
from forum.domain.content_ref import ContentRef
from forum.schemas.version import ContentVersionOut, VersionCompareOut
from forum.services import version_service
from forum.middleware.auth_middleware import get_current_user, require_roles
from forum.models.user import User

router = APIRouter(prefix="/api/versions", tags=["versions"])


@router.get("/{content_type}/{content_id}", response_model=List[ContentVersionOut])
def get_history(
    content_type: str,
    content_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return version_service.get_history(db, ContentRef.parse(content_type, content_id), current_user)


# 고정 경로(compare)를 {version_number}보다 먼저 등록한다.
@router.get("/{content_type}/{content_id}/compare", response_model=VersionCompareOut)
def compare_versions(
    content_type: str,
    content_id: int,
    old: int = Query(...),
    new: int = Query(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ref = ContentRef.parse(content_type, content_id)
    result = version_service.compare_versions(db, ref, old, new, current_user)
    return VersionCompareOut(
        content_type=ref.content_type.value,
        content_id=ref.content_id,
        old_version=ContentVersionOut.model_validate(result.old_version),
        new_version=ContentVersionOut.model_validate(result.new_version),
        **version_service.diff_stats(result.old_version.content, result.new_version.content),
    )


@router.get("/{content_type}/{content_id}/{version_number}", response_model=ContentVersionOut)
def get_version(
    content_type: str,
    content_id: int,
    version_number: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return version_service.get_version(db, ContentRef.parse(content_type, content_id), version_number, current_user)


@router.post("/{content_type}/{content_id}/reconcile", response_model=Optional[ContentVersionOut])
def reconcile_snapshot(
    content_type: str,
    content_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("admin")),
):
    return version_service.reconcile_snapshot(db, ContentRef.parse(content_type, content_id), current_user.user_id)
