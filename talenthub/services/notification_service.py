"""
Notification Service
In-app messages for recruiters and candidates: new vacancies, new
applications and application decisions
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from talenthub.core.config import settings
from talenthub.core.errors import NotFoundError
from talenthub.models.notification import Notification
from talenthub.models.user import User
from talenthub.services.projection import APPLICANT_TYPES

logger = logging.getLogger(__name__)


class NotificationService:
    """Creates, lists and expires notifications"""

    def create(
        self,
        db: Session,
        user_id: str,
        title: str,
        message: str,
        type: str = "system",
    ) -> Notification:
        """Stage a notification on the session; the caller commits."""
        notification = Notification(userId=user_id, type=type, title=title, message=message)
        db.add(notification)
        return notification

    def notify_vacancy_published(self, db: Session, vacancy) -> int:
        """Let every student and manager know about a newly published vacancy"""
        recipients = db.query(User.id).filter(
            User.userType.in_(APPLICANT_TYPES),
            User.id != vacancy.recruiterId
        ).all()

        for (user_id,) in recipients:
            self.create(
                db,
                user_id,
                title="New vacancy published",
                message=f'A new vacancy is open: "{vacancy.title}".',
            )

        logger.info("vacancy %s published; notified %d users", vacancy.id, len(recipients))
        return len(recipients)

    def list_for_user(self, db: Session, user_id: str) -> Tuple[List[Notification], int]:
        """Unread first, then newest first"""
        notifications = db.query(Notification).filter(
            Notification.userId == user_id
        ).order_by(
            Notification.read.asc(),
            Notification.createdAt.desc()
        ).limit(settings.NOTIFICATION_LIST_LIMIT).all()

        unread_count = db.query(Notification).filter(
            Notification.userId == user_id,
            Notification.read == False  # noqa: E712
        ).count()

        return notifications, unread_count

    def mark_as_read(self, db: Session, user_id: str, notification_id: str) -> Notification:
        notification = db.query(Notification).filter(
            Notification.id == notification_id,
            Notification.userId == user_id,
            Notification.read == False  # noqa: E712
        ).first()

        if not notification:
            raise NotFoundError("Notification not found or already read")

        notification.read = True
        notification.readAt = datetime.utcnow()
        db.commit()
        db.refresh(notification)
        return notification

    def _expired_query(self, db: Session, now: Optional[datetime] = None):
        cutoff = (now or datetime.utcnow()) - timedelta(minutes=settings.NOTIFICATION_RETENTION_MINUTES)
        return db.query(Notification).filter(
            Notification.read == True,  # noqa: E712
            Notification.readAt < cutoff
        )

    def count_old_notifications(self, db: Session, now: Optional[datetime] = None) -> int:
        return self._expired_query(db, now).count()

    def cleanup_old_notifications(self, db: Session, now: Optional[datetime] = None) -> int:
        """Delete read notifications past the retention window"""
        deleted = self._expired_query(db, now).delete(synchronize_session=False)
        db.commit()
        logger.info("notification cleanup removed %d notifications", deleted)
        return deleted


notification_service = NotificationService()
