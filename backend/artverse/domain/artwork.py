"""
Artwork Domain Models

Request bodies for creating and editing artworks, and the view returned
by the API with the artist's name and avatar embedded.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from artverse.domain.common import DomainModel, ImageData, UserSummary

ArtworkCategory = Literal["Painting", "Sketch", "Digital", "Sculpture", "Photography"]

ARTWORK_SORTS = ("newest", "oldest", "price-high", "price-low", "popular", "likes", "title-asc", "title-desc")


def _split_tags(value):
    """Tags arrive either as a list or as a comma-separated string"""
    if value is None:
        return value
    if isinstance(value, str):
        return [tag.strip() for tag in value.split(",") if tag.strip()]
    if isinstance(value, list):
        return [str(tag).strip() for tag in value if str(tag).strip()]
    return value


class ArtworkCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    category: ArtworkCategory
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    stock: int = Field(..., ge=0)
    images: List[ImageData] = Field(..., min_length=1)
    tags: List[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def parse_tags(cls, value):
        return _split_tags(value) or []

    @field_validator("title", "description")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()


class ArtworkUpdate(BaseModel):
    """Partial update; only provided fields change"""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    category: Optional[ArtworkCategory] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    stock: Optional[int] = Field(None, ge=0)
    images: Optional[List[ImageData]] = Field(None, min_length=1)
    tags: Optional[List[str]] = None

    @field_validator("tags", mode="before")
    @classmethod
    def parse_tags(cls, value):
        return _split_tags(value)


class RejectArtworkRequest(BaseModel):
    reason: Optional[str] = None


class ArtworkView(DomainModel):
    id: str
    title: str
    description: str
    category: str
    price: float
    stock: int
    images: List[ImageData] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    status: str
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    views: int = 0
    likes: int = 0
    artist_id: str
    artist: Optional[UserSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
