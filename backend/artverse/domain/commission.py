"""
Commission Domain Models
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from artverse.domain.common import DomainModel, UserSummary


class CommissionCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    budget: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    deadline: Optional[datetime] = None
    size_requirements: Optional[str] = None
    style_preferences: Optional[str] = None

    @field_validator("title", "description")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()


class MessageCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)

    @field_validator("content")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()


class StatusUpdate(BaseModel):
    status: str


class MessageView(DomainModel):
    id: str
    sender: str
    content: str
    sent_at: Optional[datetime] = None


class CommissionView(DomainModel):
    id: str
    title: str
    description: str
    budget: float
    deadline: Optional[datetime] = None
    size_requirements: Optional[str] = None
    style_preferences: Optional[str] = None
    status: str
    payment_status: str
    buyer_id: str
    artist_id: str
    buyer: Optional[UserSummary] = None
    artist: Optional[UserSummary] = None
    messages: List[MessageView] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
