"""Notification Service 도메인 서비스 레이어입니다. 댓글/답글/좋아요 알림 생성과 조회를 담당합니다."""

from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from forum.errors import ErrorCode, ServiceError, service_boundary
from forum.models.notification import Notification


def create_notification(
    db: Session,
    *,
    user_id: int,
    noti_type: str,
    title: str,
    message: str | None = None,
    link_url: str | None = None,
) -> Notification:
    noti = Notification(
        user_id=user_id,
        noti_type=noti_type,
        title=title,
        message=message,
        link_url=link_url,
    )
    db.add(noti)
    db.commit()
    db.refresh(noti)
    return noti


def notify_unless_self(db: Session, *, recipient_id: int, actor_id: int, **kwargs) -> Notification | None:
    if int(recipient_id) == int(actor_id):
        return None
    return create_notification(db, user_id=int(recipient_id), **kwargs)


@service_boundary("notifications")
def get_notifications(db: Session, user_id: int, unread_only: bool = False) -> List[Notification]:
    q = db.query(Notification).filter(Notification.user_id == user_id)
    if unread_only:
        q = q.filter(Notification.is_read == False)  # noqa: E712
    return q.order_by(Notification.created_at.desc(), Notification.noti_id.desc()).limit(50).all()


@service_boundary("notifications")
def unread_count(db: Session, user_id: int) -> int:
    return int(
        db.query(func.count(Notification.noti_id))
        .filter(Notification.user_id == user_id, Notification.is_read == False)  # noqa: E712
        .scalar()
        or 0
    )


@service_boundary("notifications")
def mark_read(db: Session, noti_id: int, user_id: int) -> Notification:
    noti = db.query(Notification).filter(
        Notification.noti_id == noti_id,
        Notification.user_id == user_id,
    ).first()
    if not noti:
        raise ServiceError(ErrorCode.NOTIFICATION_NOT_FOUND)
    noti.is_read = True
    db.commit()
    db.refresh(noti)
    return noti


@service_boundary("notifications")
def mark_all_read(db: Session, user_id: int):
    db.query(Notification).filter(
        Notification.user_id == user_id,
        Notification.is_read == False,  # noqa: E712
    ).update({"is_read": True})
    db.commit()
