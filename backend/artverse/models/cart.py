"""
Shopping carts and wishlists (one of each per user)
"""
from sqlalchemy import (
    CheckConstraint, Column, DateTime, ForeignKey, Integer, JSON, Numeric, String, UniqueConstraint,
)
from sqlalchemy.orm import relationship

from artverse.core.database import Base, one_of, utcnow
from artverse.core.ids import new_id
from artverse.models.order import ITEM_TYPES


class Cart(Base):
    __tablename__ = "carts"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    items = relationship(
        "CartItem",
        back_populates="cart",
        order_by="CartItem.added_at",
        cascade="all, delete-orphan",
    )

    @property
    def total(self):
        return sum((item.price * item.quantity for item in self.items), 0)

    @property
    def quantity_count(self) -> int:
        return sum(item.quantity for item in self.items)


class CartItem(Base):
    """Cart line. title/price/images are a snapshot taken when the line is added."""
    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("cart_id", "item_id", name="uq_cart_items_item"),
        CheckConstraint("quantity >= 1", name="ck_cart_items_quantity"),
        CheckConstraint("price >= 0", name="ck_cart_items_price"),
        one_of("item_type", ITEM_TYPES, "ck_cart_items_item_type"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    cart_id = Column(String(36), ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True)

    item_type = Column(String(20), nullable=False)
    item_id = Column(String(36), nullable=False)
    artist_id = Column(String(36))
    title = Column(String(255), nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    images = Column(JSON, nullable=False, default=list)
    thumbnail = Column(String(500))
    added_at = Column(DateTime(timezone=True), default=utcnow)

    cart = relationship("Cart", back_populates="items")


class Wishlist(Base):
    __tablename__ = "wishlists"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    items = relationship(
        "WishlistItem",
        back_populates="wishlist",
        order_by="WishlistItem.added_at",
        cascade="all, delete-orphan",
    )


class WishlistItem(Base):
    __tablename__ = "wishlist_items"
    __table_args__ = (
        UniqueConstraint("wishlist_id", "item_id", name="uq_wishlist_items_item"),
        one_of("item_type", ITEM_TYPES, "ck_wishlist_items_item_type"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    wishlist_id = Column(String(36), ForeignKey("wishlists.id", ondelete="CASCADE"), nullable=False, index=True)

    item_type = Column(String(20), nullable=False)
    item_id = Column(String(36), nullable=False)
    artist_id = Column(String(36))
    title = Column(String(255), nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    images = Column(JSON, nullable=False, default=list)
    thumbnail = Column(String(500))
    added_at = Column(DateTime(timezone=True), default=utcnow)

    wishlist = relationship("Wishlist", back_populates="items")
