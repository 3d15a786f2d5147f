"""ContentLike 테이블 접근을 담당하는 저장소입니다."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from forum.models.like import ContentLike


class LikeRepository:
    def __init__(self, db: Session) -> None:
        self._db = db

    def find_by_user_and_post(self, user_id: int, post_id: int) -> ContentLike | None:
        return (
            self._db.query(ContentLike)
            .filter(ContentLike.user_id == int(user_id), ContentLike.post_id == int(post_id))
            .first()
        )

    def find_by_user_and_comment(self, user_id: int, comment_id: int) -> ContentLike | None:
        return (
            self._db.query(ContentLike)
            .filter(ContentLike.user_id == int(user_id), ContentLike.comment_id == int(comment_id))
            .first()
        )

    def create(self, like: ContentLike) -> ContentLike:
        self._db.add(like)
        self._db.flush()
        return like

    def delete(self, like: ContentLike) -> None:
        self._db.delete(like)
        self._db.flush()

    def count_by_post(self, post_id: int) -> int:
        return int(
            self._db.query(func.count(ContentLike.like_id))
            .filter(ContentLike.post_id == int(post_id))
            .scalar()
            or 0
        )

    def count_by_comment(self, comment_id: int) -> int:
        return int(
            self._db.query(func.count(ContentLike.like_id))
            .filter(ContentLike.comment_id == int(comment_id))
            .scalar()
            or 0
        )
