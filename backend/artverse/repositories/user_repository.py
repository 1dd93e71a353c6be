"""
User Repository - Data Access Layer for Users

All queries for user accounts are centralized here. Methods flush but
never commit; the caller owns the transaction.
"""
from typing import List, Optional

from sqlalchemy.orm import Session

from artverse.models import User


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, user_id: str) -> Optional[User]:
        return self.db.get(User, user_id)

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def find_active_by_id(self, user_id: str) -> Optional[User]:
        return (
            self.db.query(User)
            .filter(User.id == user_id, User.is_active.is_(True))
            .first()
        )

    def find_active_artist(self, user_id: str) -> Optional[User]:
        return (
            self.db.query(User)
            .filter(User.id == user_id, User.role == "artist", User.is_active.is_(True))
            .first()
        )

    def find_active_artists(self) -> List[User]:
        return (
            self.db.query(User)
            .filter(User.role == "artist", User.is_active.is_(True))
            .order_by(User.created_at.desc())
            .all()
        )

    def find_admins(self) -> List[User]:
        return (
            self.db.query(User)
            .filter(User.role == "admin", User.is_active.is_(True))
            .all()
        )

    def create(self, email: str, password_hash: str, role: str, profile: dict) -> User:
        user = User(
            email=email.strip().lower(),
            password_hash=password_hash,
            role=role,
            profile=profile,
        )
        self.db.add(user)
        self.db.flush()
        return user

    def update_profile(self, user: User, changes: dict) -> User:
        """Merge changes into the profile document (reassigned so the JSON column is flagged dirty)"""
        profile = dict(user.profile or {})
        profile.update(changes)
        user.profile = profile
        self.db.flush()
        return user

    def deactivate(self, user: User) -> User:
        user.is_active = False
        self.db.flush()
        return user
