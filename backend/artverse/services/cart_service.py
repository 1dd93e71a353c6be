"""
Cart Service
Adds, updates and removes cart lines with availability and stock checks
"""
import logging
from typing import List, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from artverse.core.errors import BadRequestError, NotFoundError
from artverse.core.ids import ensure_valid_id
from artverse.domain.cart import CartItemView
from artverse.models import Artwork, Cart, CartItem
from artverse.repositories import CartRepository
from artverse.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)


def cart_totals(cart: Cart) -> dict:
    """Counters returned after every cart mutation"""
    return {
        "item_count": cart.quantity_count,
        "unique_items": len(cart.items),
        "total": float(cart.total),
    }


class CartService:
    """
    Service for the buyer's shopping cart

    Handles:
    - Item resolution (approved artwork, then published and approved course)
    - Stock checks for artworks, counting what is already in the cart
    - Find-or-create of the single cart per user
    """

    def __init__(self, db: Session):
        self.db = db
        self.carts = CartRepository(db)
        self.catalog = CatalogService(db)

    def get_cart_view(self, user_id: str) -> dict:
        """
        Cart with each line refreshed from its current artwork or course

        Lines whose item was deleted are left out.
        """
        cart = self.carts.find_by_user(user_id)
        if not cart:
            return {"items": [], "total": 0.0, "item_count": 0}

        items = []
        for line in cart.items:
            current = self.catalog.current_snapshot(line.item_type, line.item_id)
            if current is None:
                continue
            view = CartItemView.model_validate(line).to_dict()
            view.update(
                title=current.title,
                price=float(current.price),
                images=current.images,
                thumbnail=current.thumbnail,
            )
            items.append(view)

        total = sum(item["price"] * item["quantity"] for item in items)
        return {"items": items, "total": round(total, 2), "item_count": len(items)}

    def add_item(self, user_id: str, item_id, quantity: int = 1) -> Tuple[Cart, CartItem]:
        """
        Add an item or increase its quantity

        Raises:
            BadRequestError: bad id or quantity, unavailable item, not enough stock
            NotFoundError: no such item
        """
        item_id = ensure_valid_id(item_id, "item")
        if quantity is None or quantity < 1:
            raise BadRequestError("Quantity must be at least 1")

        item = self.catalog.resolve_available_item(item_id)
        cart = self.carts.get_or_create(user_id)

        try:
            line = self._add_or_increment(cart, item, quantity)
            self.db.commit()
        except IntegrityError:
            # Same item added by a concurrent request; retry against the winner's line
            self.db.rollback()
            logger.info(f"Concurrent add of item {item_id} to cart {cart.id}, retrying")
            cart = self.carts.find_by_user(user_id)
            line = self._add_or_increment(cart, item, quantity)
            self.db.commit()

        logger.info(f"User {user_id} added {quantity} x {item.item_type} {item.item_id} to cart")
        return cart, line

    def _add_or_increment(self, cart: Cart, item, quantity: int) -> CartItem:
        line = self.carts.find_line_by_item(cart, item.item_id)
        in_cart = line.quantity if line else 0

        if item.stock is not None and item.stock < in_cart + quantity:
            raise BadRequestError(f"Only {item.stock} available in stock")

        if line:
            line.quantity = in_cart + quantity
            self.db.flush()
            return line
        return self.carts.add_line(cart, quantity=quantity, **item.snapshot())

    def update_quantity(self, user_id: str, line_id, quantity: int) -> Tuple[Cart, CartItem]:
        line_id = ensure_valid_id(line_id, "cart item")
        if quantity is None or quantity < 1:
            raise BadRequestError("Valid quantity required")

        cart = self._require_cart(user_id)
        line = self.carts.find_line(cart, line_id)
        if not line:
            raise NotFoundError("Cart item not found")

        if line.item_type == "artwork":
            artwork = self.db.get(Artwork, line.item_id)
            if artwork and artwork.stock < quantity:
                raise BadRequestError(f"Only {artwork.stock} available in stock")

        line.quantity = quantity
        self.db.commit()
        return cart, line

    def remove_line(self, user_id: str, line_id) -> Cart:
        """Remove one line; an unknown line id leaves the cart unchanged"""
        line_id = ensure_valid_id(line_id, "cart item")
        cart = self._require_cart(user_id)
        line = self.carts.find_line(cart, line_id)
        if line:
            self.carts.remove_line(cart, line)
            self.db.commit()
        return cart

    def clear(self, user_id: str) -> Cart:
        cart = self._require_cart(user_id)
        self.carts.clear(cart)
        self.db.commit()
        return cart

    def remove_purchased(self, user_id: str, item_ids: List[str]) -> int:
        removed = self.carts.remove_items(user_id, item_ids)
        self.db.commit()
        return removed

    def _require_cart(self, user_id: str) -> Cart:
        cart = self.carts.find_by_user(user_id)
        if not cart:
            raise NotFoundError("Cart not found")
        return cart
