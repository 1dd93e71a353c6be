"""
Order Service
Handles checkout: item validation, order storage and post-order actions

Post-order actions run after the order is committed. Each one is
isolated: a failure is logged and the next action still runs, and the
checkout request succeeds regardless.
"""
import logging
from collections import defaultdict
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from artverse.core.errors import BadRequestError, NotFoundError
from artverse.core.ids import ensure_valid_id
from artverse.domain.order import OrderCreate
from artverse.models import Artwork, Course, Order, OrderItem, User
from artverse.repositories import OrderRepository
from artverse.services.cart_service import CartService
from artverse.services.catalog_service import CatalogService
from artverse.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


def _money(value) -> str:
    return f"${Decimal(value):.2f}"


class OrderService:
    """
    Service for buyer orders

    Handles:
    - Resolving each requested item against the declared type
    - Stock checks for artworks
    - Duplicate payment reference detection
    - Post-order actions (stock, enrolment, notifications, cart cleanup)
    """

    def __init__(self, db: Session):
        self.db = db
        self.orders = OrderRepository(db)
        self.catalog = CatalogService(db)
        self.notifications = NotificationService(db)

    def create_order(self, buyer_id: str, request: OrderCreate) -> Order:
        """
        Validate and store an order, then run post-order actions

        Raises:
            BadRequestError: unavailable item, insufficient stock, reused payment reference
        """
        if self.orders.find_by_payment_reference(request.payment_reference):
            raise BadRequestError("Payment reference already used")

        lines: List[OrderItem] = []
        requested_stock = defaultdict(int)
        for requested in request.items:
            item = self.catalog.resolve_typed_item(requested.item_type, requested.item_id)

            if item.stock is not None:
                requested_stock[item.item_id] += requested.quantity
                if item.stock < requested_stock[item.item_id]:
                    raise BadRequestError(f"Only {item.stock} available in stock for \"{item.title}\"")

            lines.append(OrderItem(
                item_type=item.item_type,
                item_id=item.item_id,
                artist_id=item.artist_id,
                title=item.title,
                price=item.price,
                quantity=requested.quantity,
            ))

        total = sum((line.price * line.quantity for line in lines), Decimal("0"))
        shipping = request.shipping_address.model_dump() if request.shipping_address else None

        try:
            order = self.orders.create(buyer_id, lines, total, request.payment_reference, shipping)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise BadRequestError("Payment reference already used")

        logger.info(f"Order {order.id} created for buyer {buyer_id}: {len(lines)} items, total {total}")

        self.run_post_order_actions(order)
        return order

    def run_post_order_actions(self, order: Order) -> None:
        order_id = order.id
        buyer_id = order.buyer_id
        items = [(i.item_type, i.item_id, i.title, i.price, i.quantity) for i in order.items]

        self.notifications.notify_safely(
            buyer_id, "purchase",
            f"Your order #{order_id} has been confirmed",
            {"order_id": order_id},
        )

        for item_type, item_id, title, price, quantity in items:
            try:
                if item_type == "artwork":
                    self._fulfil_artwork(order_id, item_id, price, quantity)
                else:
                    self._fulfil_course(buyer_id, item_id, price)
            except Exception as e:
                self.db.rollback()
                logger.error(f"Post-order action failed for {item_type} {item_id} in order {order_id}: {e}")

        try:
            CartService(self.db).remove_purchased(buyer_id, [item[1] for item in items])
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to remove purchased items from cart of user {buyer_id}: {e}")

    def _fulfil_artwork(self, order_id: str, artwork_id: str, price, quantity: int) -> None:
        artwork = self.db.get(Artwork, artwork_id)
        if not artwork:
            logger.warning(f"Artwork {artwork_id} from order {order_id} no longer exists")
            return

        artwork.stock = max((artwork.stock or 0) - quantity, 0)
        if artwork.stock == 0:
            artwork.status = "sold"
        self.db.commit()

        self.notifications.notify_safely(
            artwork.artist_id, "artwork_sold",
            f"Your artwork \"{artwork.title}\" was purchased for {_money(price)}",
            {"artwork_id": artwork_id, "order_id": order_id},
        )

    def _fulfil_course(self, buyer_id: str, course_id: str, price) -> None:
        course = self.db.get(Course, course_id)
        buyer = self.db.get(User, buyer_id)
        if not course or not buyer:
            logger.warning(f"Course {course_id} or buyer {buyer_id} missing for enrolment")
            return

        if not course.is_enrolled(buyer_id):
            course.students.append(buyer)
            self.db.commit()

        self.notifications.notify_safely(
            course.artist_id, "course_enrollment",
            f"New student enrolled in your course \"{course.title}\" for {_money(price)}",
            {"course_id": course_id, "student_id": buyer_id},
        )

    def update_status(self, order_id: str, status: Optional[str] = None,
                      payout_status: Optional[str] = None) -> Order:
        if not status and not payout_status:
            raise BadRequestError("Either status or payout_status must be provided")

        order = self.orders.find_by_id(ensure_valid_id(order_id, "order"))
        if not order:
            raise NotFoundError("Order not found")

        previous_status = order.status
        if status:
            order.status = status
        if payout_status:
            order.payout_status = payout_status
        self.db.commit()
        logger.info(f"Order {order.id} updated: status={order.status} payout_status={order.payout_status}")

        if status and status != previous_status:
            self.notifications.notify_safely(
                order.buyer_id, "order_update",
                f"Your order #{order.id} status changed to {status}",
                {"order_id": order.id},
            )
        return order
