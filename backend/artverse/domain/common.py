"""
Shared domain building blocks: base model, images, pagination, user summaries
"""
import math
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DomainModel(BaseModel):
    """Base for views built from ORM rows"""

    model_config = ConfigDict(from_attributes=True)

    def to_dict(self) -> dict:
        """JSON-ready dict (money as float, datetimes as ISO strings)"""
        return self.model_dump(mode="json")


class ImageData(DomainModel):
    """Image hosted on the storage provider"""

    url: str = Field(..., min_length=1, description="Public URL")
    public_id: str = Field(..., min_length=1, description="Storage object id, used for deletion")
    width: Optional[int] = Field(None, ge=1)
    height: Optional[int] = Field(None, ge=1)

    @field_validator("url", "public_id")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()


class UserSummary(DomainModel):
    """Name and avatar embedded next to artworks, courses and commissions"""

    id: str
    name: str = ""
    avatar: Optional[str] = None


class BuyerSummary(UserSummary):
    email: Optional[str] = None


class Pagination(BaseModel):
    total: int
    page: int
    pages: int
    limit: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "Pagination":
        return cls(total=total, page=page, pages=math.ceil(total / limit) if limit else 0, limit=limit)


def offset_for(page: int, limit: int) -> int:
    return (page - 1) * limit
