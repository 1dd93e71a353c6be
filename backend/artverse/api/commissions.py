"""
Commissions API Endpoints
Custom work requests between buyers and artists
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from artverse.api.responses import success
from artverse.core.auth import TokenUser, require_artist, require_buyer, require_roles
from artverse.core.database import get_db
from artverse.core.ids import ensure_valid_id
from artverse.domain.commission import CommissionCreate, CommissionView, MessageCreate, MessageView, StatusUpdate
from artverse.services.commission_service import CommissionService

router = APIRouter()

require_party_role = require_roles("buyer", "artist")


def _view(commission) -> dict:
    return CommissionView.model_validate(commission).to_dict()


@router.post("/{artist_id}", status_code=status.HTTP_201_CREATED)
def request_commission(
    artist_id: str,
    body: CommissionCreate,
    user: TokenUser = Depends(require_buyer),
    db: Session = Depends(get_db),
):
    commission = CommissionService(db).create(user.id, ensure_valid_id(artist_id, "artist"), body)
    return success(data=_view(commission), message="Commission request sent successfully")


@router.get("")
def list_commissions(
    status_filter: Optional[str] = Query(None, alias="status"),
    user: TokenUser = Depends(require_party_role),
    db: Session = Depends(get_db),
):
    commissions = CommissionService(db).list_for_user(user.id, user.role, status_filter)
    return success(data=[_view(c) for c in commissions], count=len(commissions))


@router.get("/{commission_id}")
def get_commission(commission_id: str, user: TokenUser = Depends(require_party_role), db: Session = Depends(get_db)):
    commission = CommissionService(db).get_for_party(ensure_valid_id(commission_id, "commission"), user.id)
    return success(data=_view(commission))


@router.post("/{commission_id}/messages", status_code=status.HTTP_201_CREATED)
def add_message(
    commission_id: str,
    body: MessageCreate,
    user: TokenUser = Depends(require_party_role),
    db: Session = Depends(get_db),
):
    message = CommissionService(db).add_message(
        ensure_valid_id(commission_id, "commission"), user.id, user.role, body.content,
    )
    return success(data=MessageView.model_validate(message).to_dict(), message="Message added successfully")


@router.patch("/{commission_id}/status")
def update_status(
    commission_id: str,
    body: StatusUpdate,
    user: TokenUser = Depends(require_artist),
    db: Session = Depends(get_db),
):
    """
    Artist moves a commission along its workflow:
    pending -> accepted | rejected, accepted -> in_progress, in_progress -> completed
    """
    commission = CommissionService(db).update_status(
        ensure_valid_id(commission_id, "commission"), user.id, body.status,
    )
    return success(data=_view(commission), message="Commission status updated")


@router.patch("/{commission_id}/cancel")
def cancel_commission(commission_id: str, user: TokenUser = Depends(require_buyer), db: Session = Depends(get_db)):
    commission = CommissionService(db).cancel(ensure_valid_id(commission_id, "commission"), user.id)
    return success(data=_view(commission), message="Commission cancelled")
