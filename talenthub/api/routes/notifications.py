"""
Notification API Endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from talenthub.core.auth import AuthenticatedUser, get_current_user, require_cleanup_token
from talenthub.core.database import get_db
from talenthub.schemas.notification import (
    CleanupCountResponse, CleanupResponse, MarkAsReadRequest, MarkAsReadResponse,
    NotificationListResponse, NotificationResponse
)
from talenthub.services.notification_service import notification_service

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=NotificationListResponse)
def list_notifications(
    user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Most recent notifications, unread first"""
    notifications, unread_count = notification_service.list_for_user(db, user.id)
    return NotificationListResponse(
        notifications=[NotificationResponse.model_validate(n) for n in notifications],
        unreadCount=unread_count,
    )


@router.put("", response_model=MarkAsReadResponse)
def mark_notification_as_read(
    payload: MarkAsReadRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    notification = notification_service.mark_as_read(db, user.id, payload.notificationId)
    return MarkAsReadResponse(notification=NotificationResponse.model_validate(notification))


# ============== MAINTENANCE (cleanup job) ==============

@router.get("/cleanup", response_model=CleanupCountResponse, dependencies=[Depends(require_cleanup_token)])
def count_expired_notifications(db: Session = Depends(get_db)):
    """How many read notifications the next cleanup will remove"""
    return CleanupCountResponse(count=notification_service.count_old_notifications(db))


@router.post("/cleanup", response_model=CleanupResponse, dependencies=[Depends(require_cleanup_token)])
def cleanup_notifications(db: Session = Depends(get_db)):
    """Purge read notifications past the retention window"""
    return CleanupResponse(deletedCount=notification_service.cleanup_old_notifications(db))
