"""Posts 기능 API 라우터입니다. 게시글 조회/수정/상태 전이, 댓글 트리, 좋아요, 버전 복원을 제공합니다."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from forum.database import get_db
from forum.domain.comment_tree import CommentNode
from forum.schemas.comment import CommentCreate, CommentOut, CommentTreeOut
from forum.schemas.post import LikeOut, PostOut, PostUpdate
from forum.schemas.version import RestoreRequest
from forum.services import comment_service, like_service, post_service, version_service
from forum.middleware.auth_middleware import get_current_user
from forum.models.user import User

router = APIRouter(prefix="/api/posts", tags=["posts"])


def _tree_out(node: CommentNode) -> CommentTreeOut:
    data = CommentOut.model_validate(node.comment).model_dump()
    return CommentTreeOut(**data, replies=[_tree_out(reply) for reply in node.replies])


@router.get("/{post_id}", response_model=PostOut)
def get_post(post_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    post_service.get_post(db, post_id, current_user)
    post_service.increment_view(db, post_id)
    return post_service.get_post(db, post_id, current_user)


@router.put("/{post_id}", response_model=PostOut)
def update_post(
    post_id: int,
    data: PostUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return post_service.update_post(db, post_id, current_user, title=data.title, content=data.content)


@router.delete("/{post_id}")
def archive_post(post_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    post_service.archive_post(db, post_id, current_user)
    return {"message": "보관되었습니다."}


@router.post("/{post_id}/publish", response_model=PostOut)
def publish_post(post_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return post_service.publish_post(db, post_id, current_user)


@router.post("/{post_id}/pin", response_model=PostOut)
def pin_post(post_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return post_service.pin_post(db, post_id, current_user)


@router.delete("/{post_id}/pin", response_model=PostOut)
def unpin_post(post_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return post_service.unpin_post(db, post_id, current_user)


@router.post("/{post_id}/solve", response_model=PostOut)
def mark_solved(post_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return post_service.mark_solved(db, post_id, current_user)


@router.delete("/{post_id}/solve", response_model=PostOut)
def mark_unsolved(post_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return post_service.mark_unsolved(db, post_id, current_user)


@router.post("/{post_id}/like", response_model=LikeOut)
def toggle_like(post_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return like_service.toggle_post_like(db, post_id, current_user)


@router.get("/{post_id}/comments", response_model=List[CommentTreeOut])
def list_comments(post_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return [_tree_out(node) for node in comment_service.list_comments(db, post_id, current_user)]


@router.post("/{post_id}/comments", response_model=CommentOut)
def create_comment(
    post_id: int,
    data: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return comment_service.create_comment(db, post_id, data.content, current_user, parent_id=data.parent_id)


@router.post("/{post_id}/versions/restore", response_model=PostOut)
def restore_post_version(
    post_id: int,
    data: RestoreRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return version_service.restore_post(db, post_id, data.version_number, current_user)
