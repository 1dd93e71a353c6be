"""
Order Repository - Data Access Layer for Orders

Handles all database queries for orders and their items.
"""
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload, selectinload

from artverse.models import Order, OrderItem


class OrderRepository:
    """
    Repository for Order data access

    All queries for orders are centralized here.
    Returns Order rows with buyer and items loaded.
    """

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Order).options(joinedload(Order.buyer), selectinload(Order.items))

    def find_by_id(self, order_id: str) -> Optional[Order]:
        return self._query().filter(Order.id == order_id).first()

    def find_by_payment_reference(self, payment_reference: str) -> Optional[Order]:
        return self.db.query(Order).filter(Order.payment_reference == payment_reference).first()

    def find_by_buyer(self, buyer_id: str) -> List[Order]:
        return self._query().filter(Order.buyer_id == buyer_id).order_by(Order.created_at.desc()).all()

    def find_all(
        self,
        status: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Order], int]:
        """
        Find orders with filters

        Args:
            status: Filter by order status
            start_date: Orders created at or after this moment
            end_date: Orders created at or before this moment
            limit: Maximum results to return
            offset: Number of results to skip

        Returns:
            Tuple of (list of orders, total count)
        """
        query = self.db.query(Order)
        if status:
            query = query.filter(Order.status == status)
        if start_date:
            query = query.filter(Order.created_at >= start_date)
        if end_date:
            query = query.filter(Order.created_at <= end_date)

        total = query.count()
        rows = (
            query.options(joinedload(Order.buyer), selectinload(Order.items))
            .order_by(Order.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return rows, total

    def find_containing_artist(self, artist_id: str, limit: Optional[int] = None) -> List[Order]:
        """Orders with at least one item sold by the artist, newest first"""
        order_ids = (
            self.db.query(OrderItem.order_id)
            .filter(OrderItem.artist_id == artist_id)
            .distinct()
        )
        query = self._query().filter(Order.id.in_(order_ids)).order_by(Order.created_at.desc())
        if limit:
            query = query.limit(limit)
        return query.all()

    def count_containing_artist(self, artist_id: str) -> int:
        return (
            self.db.query(func.count(func.distinct(OrderItem.order_id)))
            .filter(OrderItem.artist_id == artist_id)
            .scalar()
        ) or 0

    def find_artist_lines(self, artist_id: str) -> List[Tuple[OrderItem, datetime]]:
        """The artist's own order lines with the order creation time"""
        return (
            self.db.query(OrderItem, Order.created_at)
            .join(Order, Order.id == OrderItem.order_id)
            .filter(OrderItem.artist_id == artist_id)
            .all()
        )

    def order_counts_by_item(self, item_ids: List[str]) -> dict:
        """{item_id: number of distinct orders containing it}"""
        if not item_ids:
            return {}
        rows = (
            self.db.query(OrderItem.item_id, func.count(func.distinct(OrderItem.order_id)))
            .filter(OrderItem.item_id.in_(item_ids))
            .group_by(OrderItem.item_id)
            .all()
        )
        return {item_id: count for item_id, count in rows}

    def create(self, buyer_id: str, items: List[OrderItem], total, payment_reference: str,
               shipping_address: Optional[dict] = None) -> Order:
        order = Order(
            buyer_id=buyer_id,
            total=total,
            payment_reference=payment_reference,
            shipping_address=shipping_address,
            status="completed",
            payout_status="pending",
        )
        order.items = items
        self.db.add(order)
        self.db.flush()
        return order
