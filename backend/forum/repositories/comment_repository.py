"""Comment 테이블 접근을 담당하는 저장소입니다."""

from typing import List

from sqlalchemy.orm import Session

from forum.models.comment import Comment
from forum.utils.helpers import utcnow


class CommentRepository:
    def __init__(self, db: Session) -> None:
        self._db = db

    def find_by_id(self, comment_id: int, *, include_archived: bool = True) -> Comment | None:
        query = self._db.query(Comment).filter(Comment.comment_id == int(comment_id))
        if not include_archived:
            query = query.filter(Comment.deleted_at.is_(None))
        return query.first()

    def find_by_post_id(self, post_id: int, *, include_archived: bool = False) -> List[Comment]:
        query = self._db.query(Comment).filter(Comment.post_id == int(post_id))
        if not include_archived:
            query = query.filter(Comment.deleted_at.is_(None))
        return query.order_by(Comment.created_at.asc(), Comment.comment_id.asc()).all()

    def create(self, comment: Comment) -> Comment:
        self._db.add(comment)
        self._db.commit()
        self._db.refresh(comment)
        return comment

    def update(self, comment: Comment) -> Comment:
        self._db.commit()
        self._db.refresh(comment)
        return comment

    def archive(self, comment_id: int) -> None:
        self._db.query(Comment).filter(
            Comment.comment_id == int(comment_id),
            Comment.deleted_at.is_(None),
        ).update({"deleted_at": utcnow()}, synchronize_session="fetch")
        self._db.commit()
