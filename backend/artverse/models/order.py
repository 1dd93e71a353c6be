"""
Orders and their line items
"""
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, JSON, Numeric, String
from sqlalchemy.orm import relationship

from artverse.core.database import Base, one_of, utcnow
from artverse.core.ids import new_id

ORDER_STATUSES = ("pending", "completed", "shipped", "delivered", "cancelled", "refunded")
PAYOUT_STATUSES = ("pending", "processed", "failed")
ITEM_TYPES = ("artwork", "course")


class Order(Base):
    """
    Purchase of one or more artworks/courses

    payment_reference is the opaque id handed back by the payment provider.
    """
    __tablename__ = "orders"
    __table_args__ = (
        CheckConstraint("total >= 0", name="ck_orders_total"),
        one_of("status", ORDER_STATUSES, "ck_orders_status"),
        one_of("payout_status", PAYOUT_STATUSES, "ck_orders_payout_status"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    buyer_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    total = Column(Numeric(12, 2), nullable=False)
    payment_reference = Column(String(255), nullable=False, unique=True)
    shipping_address = Column(JSON)

    status = Column(String(20), nullable=False, default="pending", index=True)
    payout_status = Column(String(20), nullable=False, default="pending")

    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    buyer = relationship("User")
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")


class OrderItem(Base):
    """Line item; title and price are copied at purchase time"""
    __tablename__ = "order_items"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_order_items_price"),
        CheckConstraint("quantity >= 1", name="ck_order_items_quantity"),
        one_of("item_type", ITEM_TYPES, "ck_order_items_item_type"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)

    item_type = Column(String(20), nullable=False)
    item_id = Column(String(36), nullable=False, index=True)
    artist_id = Column(String(36), ForeignKey("users.id"), index=True)
    title = Column(String(255), nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)

    order = relationship("Order", back_populates="items")

    @property
    def line_total(self):
        return self.price * self.quantity
