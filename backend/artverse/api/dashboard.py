"""
Artist Dashboard API Endpoint
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from artverse.api.responses import success
from artverse.core.auth import TokenUser, require_artist
from artverse.core.database import get_db
from artverse.services.dashboard_service import DashboardService

router = APIRouter()


@router.get("")
def get_dashboard(
    year: Optional[int] = Query(None, ge=2000, le=2100, description="Calendar year for earnings (default: current)"),
    user: TokenUser = Depends(require_artist),
    db: Session = Depends(get_db),
):
    """
    Artist dashboard

    Returns:
    - Sales for the year (total and per month, own order lines only)
    - Artworks by status and the most ordered ones
    - Commissions by status
    - Recent orders containing the artist's items
    - Courses with lesson and student counts
    - Notifications
    """
    return success(data=DashboardService(db).get_dashboard(user.id, year))
