"""
Cart and Wishlist Domain Models
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from artverse.domain.common import DomainModel, ImageData


class AddItemRequest(BaseModel):
    item_id: str
    # Range checked by the service so the error carries a readable message
    quantity: int = 1


class QuantityUpdate(BaseModel):
    quantity: int = Field(..., ge=1)


class WishlistAddRequest(BaseModel):
    item_id: str


class CartItemView(DomainModel):
    id: str
    item_type: str
    item_id: str
    artist_id: Optional[str] = None
    title: str
    price: float
    quantity: int
    images: List[ImageData] = Field(default_factory=list)
    thumbnail: Optional[str] = None
    added_at: Optional[datetime] = None


class WishlistItemView(DomainModel):
    id: str
    item_type: str
    item_id: str
    artist_id: Optional[str] = None
    title: str
    price: float
    images: List[ImageData] = Field(default_factory=list)
    thumbnail: Optional[str] = None
    added_at: Optional[datetime] = None
