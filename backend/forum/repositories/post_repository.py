"""Post 테이블 접근을 담당하는 저장소입니다."""

from typing import List

from sqlalchemy import case
from sqlalchemy.orm import Session

from forum.models.post import Post
from forum.utils.helpers import utcnow


def _pinned_first_expr():
    return case((Post.is_pinned == True, 0), else_=1)  # noqa: E712


class PostRepository:
    def __init__(self, db: Session) -> None:
        self._db = db

    def find_by_id(self, post_id: int, *, include_archived: bool = True) -> Post | None:
        query = self._db.query(Post).filter(Post.post_id == int(post_id))
        if not include_archived:
            query = query.filter(Post.deleted_at.is_(None))
        return query.first()

    def find_by_community(
        self,
        community_id: int,
        *,
        include_drafts: bool = False,
        include_archived: bool = False,
        author_id: int | None = None,
        skip: int = 0,
        limit: int = 20,
    ) -> List[Post]:
        query = self._db.query(Post).filter(Post.community_id == int(community_id))
        if not include_archived:
            query = query.filter(Post.deleted_at.is_(None))
        if not include_drafts:
            query = query.filter(Post.published_at.isnot(None))
        elif author_id is not None:
            # 임시저장 글은 작성자 본인 것만 노출한다.
            query = query.filter((Post.published_at.isnot(None)) | (Post.author_id == int(author_id)))
        return (
            query.order_by(_pinned_first_expr(), Post.created_at.desc(), Post.post_id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def create(self, post: Post) -> Post:
        self._db.add(post)
        self._db.commit()
        self._db.refresh(post)
        return post

    def update(self, post: Post) -> Post:
        self._db.commit()
        self._db.refresh(post)
        return post

    def archive(self, post_id: int) -> None:
        self._db.query(Post).filter(
            Post.post_id == int(post_id),
            Post.deleted_at.is_(None),
        ).update({"deleted_at": utcnow()}, synchronize_session="fetch")
        self._db.commit()
