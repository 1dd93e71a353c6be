"""
Orders API Endpoints
Checkout, order history and admin order management
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from artverse.api.responses import success
from artverse.core.auth import TokenUser, get_current_user, require_admin
from artverse.core.database import get_db
from artverse.domain.common import Pagination, offset_for
from artverse.domain.order import OrderCreate, OrderStatusUpdate, OrderView
from artverse.repositories import OrderRepository
from artverse.services.order_service import OrderService

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_order(body: OrderCreate, user: TokenUser = Depends(get_current_user), db: Session = Depends(get_db)):
    """
    Place an order

    Stock updates, enrolments, notifications and cart cleanup happen after
    the order is stored and never fail the request.
    """
    order = OrderService(db).create_order(user.id, body)
    return success(
        data={
            "id": order.id,
            "total": float(order.total),
            "item_count": len(order.items),
            "status": order.status,
        },
        message="Order created successfully",
    )


@router.get("/history")
def order_history(user: TokenUser = Depends(get_current_user), db: Session = Depends(get_db)):
    orders = OrderRepository(db).find_by_buyer(user.id)
    return success(data=[OrderView.model_validate(order).to_dict() for order in orders])


@router.get("")
def list_orders(
    status_filter: Optional[str] = Query(None, alias="status"),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    user: TokenUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    orders, total = OrderRepository(db).find_all(
        status=status_filter,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
        offset=offset_for(page, limit),
    )
    return success(
        data=[OrderView.model_validate(order).to_dict() for order in orders],
        pagination=Pagination.build(total, page, limit).model_dump(),
    )


@router.patch("/{order_id}/status")
def update_order_status(
    order_id: str,
    body: OrderStatusUpdate,
    user: TokenUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    order = OrderService(db).update_status(order_id, body.status, body.payout_status)
    return success(data=OrderView.model_validate(order).to_dict(), message="Order updated successfully")
