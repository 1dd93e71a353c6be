"""
Order Domain Models

Represents purchases of artworks and courses. Titles and prices on order
items are copied at purchase time, so later edits to the listing do not
change past orders.
"""
from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from artverse.domain.common import BuyerSummary, DomainModel
from artverse.domain.user import ShippingAddress

ItemType = Literal["artwork", "course"]
OrderStatus = Literal["pending", "completed", "shipped", "delivered", "cancelled", "refunded"]
PayoutStatus = Literal["pending", "processed", "failed"]


class OrderItemRequest(BaseModel):
    item_type: ItemType
    item_id: str = Field(..., min_length=1)
    quantity: int = Field(1, ge=1)


class OrderCreate(BaseModel):
    """
    Checkout request

    Fields:
        items: Items being purchased (at least one)
        payment_reference: Opaque id returned by the payment provider
        shipping_address: Required in practice only for physical artworks
    """

    items: List[OrderItemRequest] = Field(..., min_length=1)
    payment_reference: str = Field(..., min_length=1, max_length=255)
    shipping_address: Optional[ShippingAddress] = None


class OrderStatusUpdate(BaseModel):
    status: Optional[OrderStatus] = None
    payout_status: Optional[PayoutStatus] = None


class OrderItemView(DomainModel):
    id: str
    item_type: str
    item_id: str
    artist_id: Optional[str] = None
    title: str
    price: float
    quantity: int
    line_total: float


class OrderView(DomainModel):
    id: str
    buyer_id: str
    buyer: Optional[BuyerSummary] = None
    items: List[OrderItemView] = Field(default_factory=list)
    total: float
    payment_reference: str
    shipping_address: Optional[Dict] = None
    status: str
    payout_status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
