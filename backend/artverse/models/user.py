"""
User accounts (artists, buyers, admins)
"""
from sqlalchemy import Boolean, Column, DateTime, JSON, String

from artverse.core.database import Base, one_of, utcnow
from artverse.core.ids import new_id

USER_ROLES = ("artist", "buyer", "admin")


class User(Base):
    """
    Account with a role and a free-form profile document

    profile keys: name, bio, avatar, skills, portfolio, social_media,
    commission_rates, shipping_address
    """
    __tablename__ = "users"
    __table_args__ = (
        one_of("role", USER_ROLES, "ck_users_role"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="buyer", index=True)
    profile = Column(JSON, nullable=False, default=dict)
    payment_account_id = Column(String(255))
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    @property
    def name(self) -> str:
        return (self.profile or {}).get("name", "")

    @property
    def avatar(self):
        return (self.profile or {}).get("avatar")
