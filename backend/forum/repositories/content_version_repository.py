"""ContentVersion 테이블 접근(조회/추가)을 담당하는 저장소입니다. 수정/삭제 연산은 제공하지 않습니다."""

from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from forum.domain.content_ref import ContentRef
from forum.models.content_version import ContentVersion


class ContentVersionRepository:
    def __init__(self, db: Session) -> None:
        self._db = db

    def _by_ref(self, ref: ContentRef):
        return self._db.query(ContentVersion).filter(
            ContentVersion.content_type == ref.content_type.value,
            ContentVersion.content_id == ref.content_id,
        )

    def find_by_content(self, ref: ContentRef) -> List[ContentVersion]:
        return self._by_ref(ref).order_by(ContentVersion.version_number.asc()).all()

    def find_by_content_and_version(self, ref: ContentRef, version_number: int) -> ContentVersion | None:
        return self._by_ref(ref).filter(ContentVersion.version_number == int(version_number)).first()

    def get_latest_version(self, ref: ContentRef) -> ContentVersion | None:
        return self._by_ref(ref).order_by(ContentVersion.version_number.desc()).first()

    def create(self, version: ContentVersion) -> ContentVersion:
        """스냅샷을 추가한다. (content_type, content_id, version_number) 중복 시 IntegrityError."""
        self._db.add(version)
        try:
            self._db.commit()
        except IntegrityError:
            self._db.rollback()
            raise
        self._db.refresh(version)
        return version
