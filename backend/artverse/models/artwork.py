"""
Artwork listings
"""
from sqlalchemy import (
    CheckConstraint, Column, DateTime, ForeignKey, Integer, JSON, Numeric, String, Text,
)
from sqlalchemy.orm import relationship

from artverse.core.database import Base, one_of, utcnow
from artverse.core.ids import new_id

ARTWORK_CATEGORIES = ("Painting", "Sketch", "Digital", "Sculpture", "Photography")
ARTWORK_STATUSES = ("pending", "approved", "rejected", "sold")
REJECTION_REASONS = ("low_quality", "copyright_issues", "inappropriate_content", "other")


class Artwork(Base):
    """
    Artwork listed by an artist. Only approved artworks are public and purchasable.

    images: list of {url, public_id, width, height}
    """
    __tablename__ = "artworks"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_artworks_price"),
        CheckConstraint("stock >= 0", name="ck_artworks_stock"),
        one_of("status", ARTWORK_STATUSES, "ck_artworks_status"),
        one_of("category", ARTWORK_CATEGORIES, "ck_artworks_category"),
        one_of("rejection_reason", REJECTION_REASONS, "ck_artworks_rejection_reason"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    artist_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, index=True)
    price = Column(Numeric(12, 2), nullable=False, index=True)
    stock = Column(Integer, nullable=False, default=0)
    images = Column(JSON, nullable=False, default=list)
    tags = Column(JSON, nullable=False, default=list)

    # Moderation
    status = Column(String(20), nullable=False, default="pending", index=True)
    approved_at = Column(DateTime(timezone=True))
    rejection_reason = Column(String(50))

    # Stats
    views = Column(Integer, nullable=False, default=0)
    likes = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    artist = relationship("User")

    @property
    def public_ids(self):
        return [img.get("public_id") for img in (self.images or []) if img.get("public_id")]
