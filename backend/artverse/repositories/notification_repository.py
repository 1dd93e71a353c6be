"""
Notification Repository - Data Access Layer for Notifications and contact messages
"""
from typing import List, Optional

from sqlalchemy.orm import Session

from artverse.models import ContactMessage, Notification


class NotificationRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, user_id: str, notification_type: str, message: str,
               metadata: Optional[dict] = None) -> Notification:
        notification = Notification(user_id=user_id, type=notification_type, message=message, meta=metadata or {})
        self.db.add(notification)
        self.db.flush()
        return notification

    def find_for_user(self, user_id: str, unread_only: bool = False) -> List[Notification]:
        query = self.db.query(Notification).filter(Notification.user_id == user_id)
        if unread_only:
            query = query.filter(Notification.read.is_(False))
        return query.order_by(Notification.created_at.desc()).all()

    def find_own(self, notification_id: str, user_id: str) -> Optional[Notification]:
        return (
            self.db.query(Notification)
            .filter(Notification.id == notification_id, Notification.user_id == user_id)
            .first()
        )

    def count_unread(self, user_id: str) -> int:
        return (
            self.db.query(Notification)
            .filter(Notification.user_id == user_id, Notification.read.is_(False))
            .count()
        )

    def mark_all_read(self, user_id: str) -> int:
        updated = (
            self.db.query(Notification)
            .filter(Notification.user_id == user_id, Notification.read.is_(False))
            .update({Notification.read: True}, synchronize_session=False)
        )
        return updated


class ContactRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, name: str, email: str, subject: str, message: str) -> ContactMessage:
        contact = ContactMessage(name=name, email=email, subject=subject, message=message)
        self.db.add(contact)
        self.db.flush()
        return contact
