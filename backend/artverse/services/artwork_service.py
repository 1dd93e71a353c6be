"""
Artwork Service
Artwork submission, visibility rules, edits and admin moderation
"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from artverse.core.auth import TokenUser
from artverse.core.database import utcnow
from artverse.core.errors import BadRequestError, ForbiddenError, NotFoundError
from artverse.core.ids import ensure_valid_id
from artverse.domain.artwork import ArtworkCreate, ArtworkUpdate
from artverse.models import REJECTION_REASONS, Artwork
from artverse.repositories import ArtworkRepository
from artverse.services import storage_service
from artverse.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


def listing_status(requested: Optional[str], artist_id: Optional[str], viewer: Optional[TokenUser]) -> Optional[str]:
    """
    Status filter actually applied to a listing

    Non-approved statuses are honoured only for admins, or for an artist
    listing their own artworks. "all" lifts the status filter for them.
    """
    requested = requested or "approved"
    if requested == "approved":
        return requested

    privileged = viewer is not None and (
        viewer.role == "admin" or (viewer.role == "artist" and artist_id == viewer.id)
    )
    if not privileged:
        return "approved"
    return None if requested == "all" else requested


class ArtworkService:
    def __init__(self, db: Session):
        self.db = db
        self.artworks = ArtworkRepository(db)
        self.notifications = NotificationService(db)

    def create(self, artist_id: str, request: ArtworkCreate) -> Artwork:
        artwork = self.artworks.create(artist_id, **request.model_dump(mode="json", exclude={"price"}),
                                       price=request.price)
        self.db.commit()
        logger.info(f"Artwork {artwork.id} submitted by artist {artist_id}")

        self.notifications.notify_admins_safely(
            "approval",
            f"New artwork \"{artwork.title}\" submitted for approval",
            {"artwork_id": artwork.id},
        )
        return artwork

    def list_artworks(self, viewer: Optional[TokenUser] = None, status: Optional[str] = None,
                      artist_id: Optional[str] = None, **filters) -> Tuple[List[Artwork], int]:
        applied = listing_status(status, artist_id, viewer)
        return self.artworks.find_all(status=applied, artist_id=artist_id, **filters)

    def get_visible(self, artwork_id, viewer: Optional[TokenUser] = None) -> Artwork:
        """
        Fetch one artwork and count the view

        Raises:
            BadRequestError: malformed id
            NotFoundError: no such artwork
            ForbiddenError: not approved, and the viewer is neither the owner nor an admin
        """
        artwork = self._require(artwork_id)
        is_privileged = viewer is not None and (viewer.role == "admin" or viewer.id == artwork.artist_id)
        if artwork.status != "approved" and not is_privileged:
            raise ForbiddenError("This artwork is not publicly available")

        self.artworks.increment_views(artwork)
        self.db.commit()
        return artwork

    def update(self, artwork_id, artist_id: str, request: ArtworkUpdate) -> Artwork:
        """Partial update by the owner; the artwork goes back to moderation"""
        artwork = self._require(artwork_id)
        if artwork.artist_id != artist_id:
            raise ForbiddenError("Unauthorized to update this artwork")

        changes = request.model_dump(mode="json", exclude_unset=True, exclude_none=True, exclude={"price"})
        if request.price is not None:
            changes["price"] = request.price

        replaced_ids = []
        if "images" in changes:
            new_ids = {image["public_id"] for image in changes["images"]}
            replaced_ids = [public_id for public_id in artwork.public_ids if public_id not in new_ids]

        for key, value in changes.items():
            setattr(artwork, key, value)
        artwork.status = "pending"
        artwork.approved_at = None
        artwork.rejection_reason = None
        self.db.commit()
        logger.info(f"Artwork {artwork.id} updated by artist {artist_id}, back to pending")

        storage_service.delete_images(replaced_ids)
        return artwork

    def delete(self, artwork_id, user: TokenUser) -> None:
        artwork = self._require(artwork_id)
        if user.role != "admin" and artwork.artist_id != user.id:
            raise ForbiddenError("Unauthorized to delete this artwork")

        storage_service.delete_images(artwork.public_ids)
        self.artworks.delete(artwork)
        self.db.commit()
        logger.info(f"Artwork {artwork_id} deleted by {user.role} {user.id}")

    def approve(self, artwork_id) -> Artwork:
        artwork = self._require(artwork_id)
        artwork.status = "approved"
        artwork.approved_at = utcnow()
        artwork.rejection_reason = None
        self.db.commit()
        logger.info(f"Artwork {artwork.id} approved")

        self.notifications.notify_safely(
            artwork.artist_id, "artwork_approved",
            f"Your artwork \"{artwork.title}\" has been approved",
            {"artwork_id": artwork.id},
        )
        return artwork

    def reject(self, artwork_id, reason: Optional[str] = None) -> Artwork:
        if reason and reason not in REJECTION_REASONS:
            raise BadRequestError("Invalid rejection reason")

        artwork = self._require(artwork_id)
        artwork.status = "rejected"
        artwork.rejection_reason = reason or None
        artwork.approved_at = None
        self.db.commit()
        logger.info(f"Artwork {artwork.id} rejected ({reason or 'no reason'})")

        suffix = f": {reason}" if reason else ""
        self.notifications.notify_safely(
            artwork.artist_id, "artwork_rejected",
            f"Your artwork \"{artwork.title}\" was rejected{suffix}",
            {"artwork_id": artwork.id, "reason": reason},
        )
        return artwork

    def _require(self, artwork_id) -> Artwork:
        artwork = self.artworks.find_by_id(ensure_valid_id(artwork_id, "artwork"))
        if not artwork:
            raise NotFoundError("Artwork not found")
        return artwork
