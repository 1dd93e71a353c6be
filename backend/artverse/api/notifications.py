"""
Notifications API Endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from artverse.api.responses import success
from artverse.core.auth import TokenUser, get_current_user
from artverse.core.database import get_db
from artverse.core.ids import ensure_valid_id
from artverse.domain.notification import NotificationView
from artverse.repositories import NotificationRepository

router = APIRouter()


@router.get("")
def list_notifications(
    unread_only: bool = Query(False),
    user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    repo = NotificationRepository(db)
    notifications = repo.find_for_user(user.id, unread_only=unread_only)
    return success(
        data=[NotificationView.model_validate(n).to_dict() for n in notifications],
        unread=repo.count_unread(user.id),
    )


@router.patch("/read-all")
def mark_all_read(user: TokenUser = Depends(get_current_user), db: Session = Depends(get_db)):
    updated = NotificationRepository(db).mark_all_read(user.id)
    db.commit()
    return success(data={"updated": updated}, message="All notifications marked as read")


@router.patch("/{notification_id}/read")
def mark_read(notification_id: str, user: TokenUser = Depends(get_current_user), db: Session = Depends(get_db)):
    notification = NotificationRepository(db).find_own(ensure_valid_id(notification_id, "notification"), user.id)
    if not notification:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")

    notification.read = True
    db.commit()
    return success(data=NotificationView.model_validate(notification).to_dict())
