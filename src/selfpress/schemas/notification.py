import datetime
from typing import Optional

from pydantic import Field

from ..models.notification import NotificationType
from .base import CamelModel, ORMCamelModel

class NotificationCreate(CamelModel):
    user_id: int
    title: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    type: NotificationType = NotificationType.INFO
    is_read: bool = False

class NotificationUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1)
    message: Optional[str] = Field(None, min_length=1)
    type: Optional[NotificationType] = None
    is_read: Optional[bool] = None

class NotificationSchema(ORMCamelModel):
    id: int
    user_id: int
    title: str
    message: str
    type: str
    is_read: bool
    created_at: Optional[datetime.datetime] = None
