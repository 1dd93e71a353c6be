"""
User Domain Models

Request bodies for registration, login and profile edits, plus the
private and public user views.
"""
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from artverse.domain.common import DomainModel

DEFAULT_AVATAR = "/default-avatar.png"

# Profile keys each role may edit
COMMON_PROFILE_FIELDS = ("name", "bio", "avatar")
ARTIST_PROFILE_FIELDS = ("skills", "portfolio", "commission_rates", "social_media")
BUYER_PROFILE_FIELDS = ("shipping_address",)


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=1, max_length=120)
    role: Optional[str] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class SocialLink(BaseModel):
    platform: str
    url: str


class CommissionRate(BaseModel):
    kind: str
    price: float = Field(..., ge=0)
    description: Optional[str] = None


class ShippingAddress(BaseModel):
    street: str
    city: str
    state: str
    country: str
    postal_code: str


class ProfileUpdate(BaseModel):
    """Partial profile; absent or empty fields are left untouched"""

    name: Optional[str] = Field(None, max_length=120)
    bio: Optional[str] = None
    avatar: Optional[str] = None
    skills: Optional[List[str]] = None
    portfolio: Optional[List[str]] = None
    social_media: Optional[List[SocialLink]] = None
    commission_rates: Optional[List[CommissionRate]] = None
    shipping_address: Optional[ShippingAddress] = None

    def changes_for_role(self, role: str) -> Dict:
        """Provided fields the given role is allowed to change, JSON-ready"""
        allowed = list(COMMON_PROFILE_FIELDS)
        if role == "artist":
            allowed += ARTIST_PROFILE_FIELDS
        elif role == "buyer":
            allowed += BUYER_PROFILE_FIELDS

        data = self.model_dump(mode="json", exclude_none=True)
        return {key: value for key, value in data.items() if key in allowed and value not in ("", [])}


class ProfileUpdateRequest(BaseModel):
    profile: Optional[ProfileUpdate] = None


class AvatarUpdateRequest(BaseModel):
    avatar: Optional[str] = None


class UserView(DomainModel):
    """Private view of the authenticated user (never includes the password hash)"""

    id: str
    email: str
    role: str
    profile: Dict = Field(default_factory=dict)
    payment_account_id: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None


def public_profile(user) -> Dict:
    """Public profile shown to other users"""
    profile = user.profile or {}
    data = {
        "id": user.id,
        "role": user.role,
        "profile": {
            "name": profile.get("name", ""),
            "bio": profile.get("bio"),
            "avatar": profile.get("avatar"),
        },
    }
    if user.role == "artist":
        data["profile"].update(artist_public_fields(profile))
    return data


def artist_public_fields(profile: Dict) -> Dict:
    return {
        "skills": profile.get("skills") or [],
        "portfolio": profile.get("portfolio") or [],
        "social_media": profile.get("social_media") or [],
        "commission_rates": profile.get("commission_rates") or [],
    }


def artist_card(user) -> Dict:
    """Artist listing entry"""
    profile = user.profile or {}
    return {
        "id": user.id,
        "profile": {
            "name": profile.get("name", ""),
            "bio": profile.get("bio") or "",
            "avatar": profile.get("avatar") or DEFAULT_AVATAR,
        },
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }
