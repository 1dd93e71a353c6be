"""
Commission Service
Commission requests, their message thread and status workflow

Status workflow (artist side):
    pending     -> accepted | rejected
    accepted    -> in_progress
    in_progress -> completed
Buyer side:
    pending     -> cancelled
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from artverse.core.errors import BadRequestError, NotFoundError
from artverse.domain.commission import CommissionCreate
from artverse.models import COMMISSION_STATUSES, Commission, CommissionMessage
from artverse.repositories import CommissionRepository, UserRepository
from artverse.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

ARTIST_TRANSITIONS = {
    "pending": ("accepted", "rejected"),
    "accepted": ("in_progress",),
    "in_progress": ("completed",),
}
ARTIST_TARGET_STATUSES = ("accepted", "rejected", "in_progress", "completed")


def can_transition(current: str, target: str) -> bool:
    return target in ARTIST_TRANSITIONS.get(current, ())


class CommissionService:
    def __init__(self, db: Session):
        self.db = db
        self.commissions = CommissionRepository(db)
        self.users = UserRepository(db)
        self.notifications = NotificationService(db)

    def create(self, buyer_id: str, artist_id: str, request: CommissionCreate) -> Commission:
        """
        Raises:
            NotFoundError: no active user with role artist has this id
        """
        artist = self.users.find_active_artist(artist_id)
        if not artist:
            raise NotFoundError("Artist not found")

        commission = self.commissions.create(buyer_id, artist.id, **request.model_dump())
        self.db.commit()
        logger.info(f"Commission {commission.id} requested by buyer {buyer_id} from artist {artist.id}")

        self.notifications.notify_safely(
            artist.id, "new_commission",
            f"New commission request: {commission.title}",
            {"commission_id": commission.id},
        )
        return commission

    def list_for_user(self, user_id: str, role: str, status: Optional[str] = None) -> List[Commission]:
        if status and status not in COMMISSION_STATUSES:
            raise BadRequestError("Invalid status value")
        return self.commissions.find_for_user(user_id, role, status)

    def get_for_party(self, commission_id: str, user_id: str) -> Commission:
        commission = self.commissions.find_for_party(commission_id, user_id)
        if not commission:
            raise NotFoundError("Commission not found or not authorized")
        return commission

    def add_message(self, commission_id: str, user_id: str, role: str, content: str) -> CommissionMessage:
        commission = self.get_for_party(commission_id, user_id)
        sender = "artist" if role == "artist" else "buyer"
        message = self.commissions.add_message(commission, sender, content)
        self.db.commit()

        recipient = commission.buyer_id if sender == "artist" else commission.artist_id
        self.notifications.notify_safely(
            recipient, "commission_message",
            f"New message on commission: {commission.title}",
            {"commission_id": commission.id},
        )
        return message

    def update_status(self, commission_id: str, artist_id: str, target: str) -> Commission:
        """
        Move an artist's commission along the workflow

        Raises:
            BadRequestError: unknown target status or illegal transition
            NotFoundError: commission missing or owned by another artist
        """
        if target not in ARTIST_TARGET_STATUSES:
            raise BadRequestError("Invalid status value")

        commission = self.commissions.find_by_id(commission_id)
        if not commission or commission.artist_id != artist_id:
            raise NotFoundError("Commission not found or not authorized")

        if not can_transition(commission.status, target):
            raise BadRequestError(f"Cannot change status from {commission.status} to {target}")

        commission.status = target
        self.db.commit()
        logger.info(f"Commission {commission_id} moved to {target}")

        self.notifications.notify_safely(
            commission.buyer_id, "commission_update",
            f"Your commission \"{commission.title}\" status updated to {target.replace('_', ' ')}",
            {"commission_id": commission.id, "status": target},
        )
        return commission

    def cancel(self, commission_id: str, buyer_id: str) -> Commission:
        commission = self.commissions.find_by_id(commission_id)
        if not commission or commission.buyer_id != buyer_id:
            raise NotFoundError("Commission not found or not authorized")

        if commission.status != "pending":
            raise BadRequestError(f"Cannot change status from {commission.status} to cancelled")

        commission.status = "cancelled"
        self.db.commit()
        logger.info(f"Commission {commission_id} cancelled by buyer {buyer_id}")

        self.notifications.notify_safely(
            commission.artist_id, "commission_update",
            f"Commission \"{commission.title}\" was cancelled by the buyer",
            {"commission_id": commission.id, "status": "cancelled"},
        )
        return commission
