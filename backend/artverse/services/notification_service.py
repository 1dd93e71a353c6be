"""
Notification Service
Creates in-app notifications for the other modules

Notifications are side effects: callers commit their own work first and
then use the *_safely helpers, which log and swallow failures so a
notification never fails the parent request.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from artverse.models import NOTIFICATION_TYPES, Notification
from artverse.repositories import NotificationRepository, UserRepository

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, db: Session):
        self.db = db
        self.notifications = NotificationRepository(db)
        self.users = UserRepository(db)

    def notify(self, user_id: str, notification_type: str, message: str,
               metadata: Optional[dict] = None) -> Notification:
        """
        Create and commit one notification

        Raises:
            ValueError: unknown notification type
        """
        if notification_type not in NOTIFICATION_TYPES:
            raise ValueError(f"Unknown notification type: {notification_type}")
        notification = self.notifications.create(user_id, notification_type, message, metadata)
        self.db.commit()
        return notification

    def notify_admins(self, notification_type: str, message: str,
                      metadata: Optional[dict] = None) -> List[Notification]:
        if notification_type not in NOTIFICATION_TYPES:
            raise ValueError(f"Unknown notification type: {notification_type}")
        created = [
            self.notifications.create(admin.id, notification_type, message, metadata)
            for admin in self.users.find_admins()
        ]
        self.db.commit()
        return created

    def notify_safely(self, user_id: str, notification_type: str, message: str,
                      metadata: Optional[dict] = None) -> None:
        try:
            self.notify(user_id, notification_type, message, metadata)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create '{notification_type}' notification for user {user_id}: {e}")

    def notify_admins_safely(self, notification_type: str, message: str,
                             metadata: Optional[dict] = None) -> None:
        try:
            self.notify_admins(notification_type, message, metadata)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create '{notification_type}' notification for admins: {e}")
