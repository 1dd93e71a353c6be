"""
Users API Endpoints
- Own profile (view, edit, avatar, deactivate)
- Public artist directory and public profiles
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from artverse.api.responses import success
from artverse.core.auth import TokenUser, get_current_user
from artverse.core.database import get_db
from artverse.core.ids import ensure_valid_id
from artverse.domain.user import (
    AvatarUpdateRequest,
    ProfileUpdateRequest,
    UserView,
    artist_card,
    artist_public_fields,
    public_profile,
)
from artverse.repositories import CommissionRepository, UserRepository

logger = logging.getLogger(__name__)

router = APIRouter()


def _commission_stats(db: Session, user_id: str, role: str) -> dict:
    counts = CommissionRepository(db).count_by_status(user_id, role)
    stats = {
        "total": sum(counts.values()),
        "completed": counts.get("completed", 0),
    }
    if role == "artist":
        stats["in_progress"] = counts.get("accepted", 0) + counts.get("in_progress", 0)
    return stats


def _require_account(db: Session, user_id: str):
    account = UserRepository(db).find_active_by_id(user_id)
    if not account:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return account


@router.get("/profile")
def get_profile(user: TokenUser = Depends(get_current_user), db: Session = Depends(get_db)):
    account = _require_account(db, user.id)
    data = UserView.model_validate(account).to_dict()
    data["commission_stats"] = _commission_stats(db, account.id, account.role)
    return success(data=data)


@router.put("/profile")
def update_profile(
    body: Optional[ProfileUpdateRequest] = None,
    user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Update own profile

    Common fields: name, bio, avatar. Artists may also set skills, portfolio,
    commission_rates and social_media; buyers may set shipping_address.
    Fields belonging to the other role are ignored.
    """
    if body is None or body.profile is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Profile data is required")

    account = _require_account(db, user.id)
    changes = body.profile.changes_for_role(account.role)
    UserRepository(db).update_profile(account, changes)
    db.commit()
    logger.info(f"Profile of user {account.id} updated: {sorted(changes)}")

    return success(data=UserView.model_validate(account).to_dict(), message="Profile updated successfully")


@router.delete("/profile")
def deactivate_profile(user: TokenUser = Depends(get_current_user), db: Session = Depends(get_db)):
    account = _require_account(db, user.id)
    UserRepository(db).deactivate(account)
    db.commit()
    logger.info(f"User {account.id} deactivated their account")
    return success(message="User account deactivated successfully")


@router.put("/profile/picture")
def update_avatar(
    body: AvatarUpdateRequest,
    user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not body.avatar or not body.avatar.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Avatar URL is required")

    account = _require_account(db, user.id)
    UserRepository(db).update_profile(account, {"avatar": body.avatar.strip()})
    db.commit()
    return success(data={"avatar": account.avatar}, message="Profile picture updated successfully")


@router.get("/artists")
def list_artists(db: Session = Depends(get_db)):
    artists = UserRepository(db).find_active_artists()
    return success(data=[artist_card(artist) for artist in artists], count=len(artists))


@router.get("/artists/{artist_id}")
def get_artist(artist_id: str, db: Session = Depends(get_db)):
    artist = UserRepository(db).find_active_artist(ensure_valid_id(artist_id, "artist"))
    if not artist:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Artist not found")

    data = artist_card(artist)
    data["profile"].update(artist_public_fields(artist.profile or {}))
    return success(data=data)


@router.get("/{user_id}")
def get_public_profile(user_id: str, db: Session = Depends(get_db)):
    account = _require_account(db, ensure_valid_id(user_id, "user"))
    return success(data=public_profile(account))
