from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...crud import get_notifications_for_user, mark_all_notifications_read, mark_notification_read
from ...db.session import get_db
from ...models.user import User
from ...schemas.notification import NotificationSchema
from ..deps import get_current_user

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=List[NotificationSchema])
def list_my_notifications(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_notifications_for_user(db, user.id)


@router.patch("/read-all")
def read_all_notifications(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    updated = mark_all_notifications_read(db, user.id)
    return {"message": "All notifications marked as read", "updated": updated}


@router.patch("/{notification_id}/read", response_model=NotificationSchema)
def read_notification(notification_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return mark_notification_read(db, notification_id, requesting_user_id=user.id)
