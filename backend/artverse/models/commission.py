"""
Commission requests from buyers to artists, with their message thread
"""
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import relationship

from artverse.core.database import Base, one_of, utcnow
from artverse.core.ids import new_id

COMMISSION_STATUSES = ("pending", "accepted", "rejected", "in_progress", "completed", "cancelled")
PAYMENT_STATUSES = ("pending", "paid", "refunded")
MESSAGE_SENDERS = ("buyer", "artist")


class Commission(Base):
    __tablename__ = "commissions"
    __table_args__ = (
        CheckConstraint("budget >= 0", name="ck_commissions_budget"),
        one_of("status", COMMISSION_STATUSES, "ck_commissions_status"),
        one_of("payment_status", PAYMENT_STATUSES, "ck_commissions_payment_status"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    buyer_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    artist_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    budget = Column(Numeric(12, 2), nullable=False)
    deadline = Column(DateTime(timezone=True))
    size_requirements = Column(Text)
    style_preferences = Column(Text)

    status = Column(String(20), nullable=False, default="pending", index=True)
    payment_status = Column(String(20), nullable=False, default="pending")

    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    buyer = relationship("User", foreign_keys=[buyer_id])
    artist = relationship("User", foreign_keys=[artist_id])
    messages = relationship(
        "CommissionMessage",
        back_populates="commission",
        order_by="CommissionMessage.sent_at",
        cascade="all, delete-orphan",
    )

    def is_party(self, user_id: str) -> bool:
        return user_id in (self.buyer_id, self.artist_id)


class CommissionMessage(Base):
    __tablename__ = "commission_messages"
    __table_args__ = (
        one_of("sender", MESSAGE_SENDERS, "ck_commission_messages_sender"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    commission_id = Column(String(36), ForeignKey("commissions.id", ondelete="CASCADE"), nullable=False, index=True)
    sender = Column(String(10), nullable=False)
    content = Column(Text, nullable=False)
    sent_at = Column(DateTime(timezone=True), default=utcnow)

    commission = relationship("Commission", back_populates="messages")
