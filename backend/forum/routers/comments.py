"""Comments 기능 API 라우터입니다."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from forum.database import get_db
from forum.schemas.comment import CommentOut, CommentUpdate
from forum.schemas.post import LikeOut
from forum.schemas.version import RestoreRequest
from forum.services import comment_service, like_service, version_service
from forum.middleware.auth_middleware import get_current_user
from forum.models.user import User

router = APIRouter(prefix="/api/comments", tags=["comments"])


@router.get("/{comment_id}", response_model=CommentOut)
def get_comment(comment_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return comment_service.get_comment(db, comment_id, current_user)


@router.put("/{comment_id}", response_model=CommentOut)
def update_comment(
    comment_id: int,
    data: CommentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return comment_service.update_comment(db, comment_id, data.content, current_user)


@router.delete("/{comment_id}")
def archive_comment(comment_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    comment_service.archive_comment(db, comment_id, current_user)
    return {"message": "보관되었습니다."}


@router.post("/{comment_id}/like", response_model=LikeOut)
def toggle_like(comment_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return like_service.toggle_comment_like(db, comment_id, current_user)


@router.post("/{comment_id}/versions/restore", response_model=CommentOut)
def restore_comment_version(
    comment_id: int,
    data: RestoreRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return version_service.restore_comment(db, comment_id, data.version_number, current_user)
