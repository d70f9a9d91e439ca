"""
CRUD operations for user notifications.

A user only sees and marks their own notifications; notifications of other
users are reported as not found.
"""

import logging
from typing import List, Optional

from sqlalchemy import desc, update
from sqlalchemy.orm import Session

from ..core.exceptions import NotFound
from ..models.notification import Notification
from ..models.user import User
from ..schemas.notification import NotificationCreate, NotificationUpdate
from .base import apply_updates, commit_or_rollback, plain

logger = logging.getLogger(__name__)

def get_notification(db: Session, notification_id: int) -> Optional[Notification]:
    return db.get(Notification, notification_id)

def get_notifications_for_user(db: Session, user_id: int) -> List[Notification]:
    """A user's inbox, newest first."""
    return db.query(Notification).\
            filter(Notification.user_id == user_id).\
            order_by(desc(Notification.created_at), desc(Notification.id)).all()

def get_all_notifications(db: Session, skip: int = 0, limit: int = 100) -> List[Notification]:
    return db.query(Notification).order_by(desc(Notification.id)).offset(skip).limit(limit).all()

def create_notification(db: Session, notification: NotificationCreate) -> Notification:
    if db.get(User, notification.user_id) is None:
        raise NotFound("User not found")
    data = {field: plain(value) for field, value in notification.model_dump().items()}
    db_notification = Notification(**data)
    db.add(db_notification)
    commit_or_rollback(db, f"notification for user {notification.user_id}")
    db.refresh(db_notification)
    logger.info(f"Notification {db_notification.id} ({db_notification.type}) sent to user {db_notification.user_id}.")
    return db_notification

def update_notification(db: Session, notification_id: int, changes: NotificationUpdate) -> Notification:
    db_notification = get_notification(db, notification_id)
    if not db_notification:
        raise NotFound("Notification not found")
    apply_updates(db_notification, changes.model_dump(exclude_unset=True))
    commit_or_rollback(db, f"update of notification {notification_id}")
    db.refresh(db_notification)
    return db_notification

def mark_notification_read(db: Session, notification_id: int, requesting_user_id: int) -> Notification:
    """
    Marks one of the user's notifications as read.

    Raises:
        NotFound: If it does not exist or belongs to someone else.
    """
    db_notification = get_notification(db, notification_id)
    if not db_notification or db_notification.user_id != requesting_user_id:
        raise NotFound("Notification not found")
    if not db_notification.is_read:
        db_notification.is_read = True
        commit_or_rollback(db, f"read state of notification {notification_id}")
        db.refresh(db_notification)
    return db_notification

def mark_all_notifications_read(db: Session, user_id: int) -> int:
    """Marks every unread notification of a user as read. Returns how many changed."""
    result = db.execute(
        update(Notification)
        .where(Notification.user_id == user_id, Notification.is_read == False)  # noqa: E712
        .values(is_read=True)
        .execution_options(synchronize_session=False)
    )
    commit_or_rollback(db, f"read-all for user {user_id}")
    return result.rowcount

def delete_notification(db: Session, notification_id: int) -> None:
    db_notification = get_notification(db, notification_id)
    if not db_notification:
        raise NotFound("Notification not found")
    db.delete(db_notification)
    commit_or_rollback(db, f"deletion of notification {notification_id}")
