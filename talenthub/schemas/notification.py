"""
Pydantic schemas for notifications
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class NotificationResponse(BaseModel):
    id: str
    type: str
    title: str
    message: str
    read: bool
    readAt: Optional[datetime] = None
    createdAt: Optional[datetime] = None

    class Config:
        from_attributes = True


class NotificationListResponse(BaseModel):
    notifications: List[NotificationResponse]
    unreadCount: int


class MarkAsReadRequest(BaseModel):
    notificationId: str


class MarkAsReadResponse(BaseModel):
    notification: NotificationResponse


class CleanupResponse(BaseModel):
    deletedCount: int


class CleanupCountResponse(BaseModel):
    count: int
