"""
Artist Dashboard Service
Aggregates an artist's sales, artworks, commissions, orders, courses and notifications

All aggregation is done in memory over the rows fetched for one artist.
"""
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from artverse.domain.artwork import ArtworkView
from artverse.domain.commission import CommissionView
from artverse.domain.course import CourseView
from artverse.domain.notification import NotificationView
from artverse.domain.order import OrderView
from artverse.repositories import (
    ArtworkRepository, CommissionRepository, CourseRepository, NotificationRepository, OrderRepository,
)

logger = logging.getLogger(__name__)

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
ARTWORK_STATUS_ORDER = ("approved", "pending", "rejected", "sold")
COMMISSION_STATUS_ORDER = ("pending", "accepted", "in_progress", "completed", "cancelled")
POPULAR_LIMIT = 5
RECENT_ORDERS_LIMIT = 10


def monthly_earnings(lines, year: int) -> List[Dict]:
    """
    Sum order lines into the 12 months of a year

    Args:
        lines: Iterable of (order_item, order_created_at)
        year: Calendar year; lines from other years are ignored

    Returns:
        [{"month": "Jan", "amount": 0.0}, ...] for Jan..Dec
    """
    amounts = [Decimal("0")] * 12
    for item, created_at in lines:
        if created_at is None or created_at.year != year:
            continue
        amounts[created_at.month - 1] += item.price * item.quantity
    return [{"month": month, "amount": float(amount)} for month, amount in zip(MONTHS, amounts)]


def count_statuses(rows, statuses) -> List[Dict]:
    counts = {status: 0 for status in statuses}
    for row in rows:
        if row.status in counts:
            counts[row.status] += 1
    return [{"status": status, "count": count} for status, count in counts.items()]


class DashboardService:
    def __init__(self, db: Session):
        self.db = db
        self.artworks = ArtworkRepository(db)
        self.courses = CourseRepository(db)
        self.commissions = CommissionRepository(db)
        self.orders = OrderRepository(db)
        self.notifications = NotificationRepository(db)

    def get_dashboard(self, artist_id: str, year: Optional[int] = None) -> Dict:
        year = year or datetime.now(timezone.utc).year

        artworks = self.artworks.find_by_artist(artist_id)
        courses = self.courses.find_by_artist(artist_id)
        commissions = self.commissions.find_for_user(artist_id, "artist")
        recent_orders = self.orders.find_containing_artist(artist_id, limit=RECENT_ORDERS_LIMIT)
        notifications = self.notifications.find_for_user(artist_id)

        earnings = monthly_earnings(self.orders.find_artist_lines(artist_id), year)

        order_counts = self.orders.order_counts_by_item([artwork.id for artwork in artworks])
        popular = sorted(
            ({"id": a.id, "title": a.title, "sales": order_counts.get(a.id, 0)} for a in artworks),
            key=lambda entry: entry["sales"],
            reverse=True,
        )[:POPULAR_LIMIT]

        logger.debug(f"Dashboard built for artist {artist_id} ({year})")

        return {
            "sales": {
                "total_sales": round(sum(entry["amount"] for entry in earnings), 2),
                "monthly_earnings": earnings,
            },
            "artworks": {
                "total": len(artworks),
                "by_status": count_statuses(artworks, ARTWORK_STATUS_ORDER),
                "popular": popular,
                "all": [ArtworkView.model_validate(a).to_dict() for a in artworks],
            },
            "commissions": {
                "total": len(commissions),
                "by_status": count_statuses(commissions, COMMISSION_STATUS_ORDER),
                "all": [CommissionView.model_validate(c).to_dict() for c in commissions],
            },
            "orders": {
                "total": self.orders.count_containing_artist(artist_id),
                "recent": [OrderView.model_validate(o).to_dict() for o in recent_orders],
            },
            "courses": {
                "total": len(courses),
                "all": [CourseView.model_validate(c).to_dict() for c in courses],
            },
            "notifications": {
                "unread": sum(1 for n in notifications if not n.read),
                "all": [NotificationView.model_validate(n).to_dict() for n in notifications],
            },
        }
