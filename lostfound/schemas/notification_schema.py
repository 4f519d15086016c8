from pydantic import BaseModel, Field, model_validator
from datetime import datetime
from typing import List, Optional


class NotificationResponse(BaseModel):
    id: int
    type: str
    title: str
    message: str
    link: Optional[str]
    is_read: bool
    created_at: datetime

    class Config:
        from_attributes = True


class NotificationListResponse(BaseModel):
    success: bool
    total: int
    unread_count: int
    limit: int
    offset: int
    notifications: List[NotificationResponse]


class NotificationDeleteRequest(BaseModel):
    notification_id: Optional[int] = Field(default=None, alias="notificationId")
    notification_ids: Optional[List[int]] = Field(default=None, alias="notificationIds")

    class Config:
        populate_by_name = True

    @model_validator(mode="after")
    def check_ids_given(self):
        if self.notification_id is None and not self.notification_ids:
            raise ValueError("notificationId or notificationIds is required")
        return self

    @property
    def ids(self) -> List[int]:
        if self.notification_ids:
            return list(self.notification_ids)
        return [self.notification_id]


class NotificationDeleteResponse(BaseModel):
    success: bool
    message: str
    count: int
