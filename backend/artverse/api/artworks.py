"""
Artworks API Endpoints
Handles artwork submission, browsing and admin moderation
"""
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from artverse.api.responses import success
from artverse.core.auth import TokenUser, get_current_user_optional, require_admin, require_artist, require_roles
from artverse.core.database import get_db
from artverse.domain.artwork import ARTWORK_SORTS, ArtworkCreate, ArtworkUpdate, ArtworkView, RejectArtworkRequest
from artverse.domain.common import Pagination, offset_for
from artverse.services.artwork_service import ArtworkService

router = APIRouter()

SORT_PATTERN = f"^({'|'.join(ARTWORK_SORTS)})$"


@router.post("", status_code=status.HTTP_201_CREATED)
def create_artwork(
    body: ArtworkCreate,
    user: TokenUser = Depends(require_artist),
    db: Session = Depends(get_db),
):
    artwork = ArtworkService(db).create(user.id, body)
    return success(
        data=ArtworkView.model_validate(artwork).to_dict(),
        message="Artwork created successfully, pending admin approval",
    )


@router.get("")
def list_artworks(
    status_filter: Optional[str] = Query(None, alias="status", description="approved (default), pending, rejected, sold or all"),
    artist_id: Optional[str] = Query(None, description="Only this artist's artworks"),
    category: Optional[str] = Query(None),
    min_price: Optional[Decimal] = Query(None, ge=0),
    max_price: Optional[Decimal] = Query(None, ge=0),
    search: Optional[str] = Query(None, description="Search in title or description"),
    sort: str = Query("newest", pattern=SORT_PATTERN),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    viewer: Optional[TokenUser] = Depends(get_current_user_optional),
    db: Session = Depends(get_db),
):
    """
    Browse artworks

    Only approved artworks are listed unless the caller is an admin, or an
    artist filtering on their own artist_id.
    """
    artworks, total = ArtworkService(db).list_artworks(
        viewer=viewer,
        status=status_filter,
        artist_id=artist_id,
        category=category,
        min_price=min_price,
        max_price=max_price,
        search=search,
        sort=sort,
        limit=limit,
        offset=offset_for(page, limit),
    )
    return success(
        data=[ArtworkView.model_validate(artwork).to_dict() for artwork in artworks],
        pagination=Pagination.build(total, page, limit).model_dump(),
    )


@router.get("/{artwork_id}")
def get_artwork(
    artwork_id: str,
    viewer: Optional[TokenUser] = Depends(get_current_user_optional),
    db: Session = Depends(get_db),
):
    artwork = ArtworkService(db).get_visible(artwork_id, viewer)
    return success(data=ArtworkView.model_validate(artwork).to_dict())


@router.put("/{artwork_id}")
def update_artwork(
    artwork_id: str,
    body: ArtworkUpdate,
    user: TokenUser = Depends(require_artist),
    db: Session = Depends(get_db),
):
    artwork = ArtworkService(db).update(artwork_id, user.id, body)
    return success(
        data=ArtworkView.model_validate(artwork).to_dict(),
        message="Artwork updated successfully, pending admin approval",
    )


@router.delete("/{artwork_id}")
def delete_artwork(
    artwork_id: str,
    user: TokenUser = Depends(require_roles("artist", "admin")),
    db: Session = Depends(get_db),
):
    ArtworkService(db).delete(artwork_id, user)
    return success(message="Artwork deleted successfully")


@router.patch("/{artwork_id}/approve")
def approve_artwork(
    artwork_id: str,
    user: TokenUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    artwork = ArtworkService(db).approve(artwork_id)
    return success(data=ArtworkView.model_validate(artwork).to_dict(), message="Artwork approved successfully")


@router.patch("/{artwork_id}/reject")
def reject_artwork(
    artwork_id: str,
    body: Optional[RejectArtworkRequest] = None,
    user: TokenUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    reason = body.reason if body else None
    artwork = ArtworkService(db).reject(artwork_id, reason)
    return success(data=ArtworkView.model_validate(artwork).to_dict(), message="Artwork rejected successfully")
