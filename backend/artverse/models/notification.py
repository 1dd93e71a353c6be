"""
User notifications and contact-form messages
"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, JSON, String, Text

from artverse.core.database import Base, one_of, utcnow
from artverse.core.ids import new_id

NOTIFICATION_TYPES = (
    "payout",
    "approval",
    "purchase",
    "system",
    "new_commission",
    "commission_update",
    "commission_message",
    "artwork_approved",
    "artwork_rejected",
    "artwork_sold",
    "course_approval",
    "course_approved",
    "course_rejected",
    "new_enrollment",
    "course_enrollment",
    "order_update",
)


class Notification(Base):
    __tablename__ = "notifications"
    __table_args__ = (
        one_of("type", NOTIFICATION_TYPES, "ck_notifications_type"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(50), nullable=False)
    message = Column(Text, nullable=False)
    read = Column(Boolean, nullable=False, default=False, index=True)
    # "metadata" is reserved on declarative classes
    meta = Column("metadata", JSON)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)


class ContactMessage(Base):
    __tablename__ = "contact_messages"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
