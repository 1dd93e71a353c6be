"""
Cart and Wishlist Repositories

One cart and one wishlist per user. get_or_create relies on the unique
user_id constraint: when two requests race to create the same cart, the
loser rolls back and re-reads the winner's row.
"""
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from artverse.models import Cart, CartItem, Wishlist, WishlistItem

logger = logging.getLogger(__name__)


class CartRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_user(self, user_id: str) -> Optional[Cart]:
        return (
            self.db.query(Cart)
            .options(selectinload(Cart.items))
            .filter(Cart.user_id == user_id)
            .first()
        )

    def get_or_create(self, user_id: str) -> Cart:
        cart = self.find_by_user(user_id)
        if cart:
            return cart

        cart = Cart(user_id=user_id)
        self.db.add(cart)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.info(f"Cart for user {user_id} created concurrently, re-reading")
            return self.find_by_user(user_id)
        return cart

    def find_line(self, cart: Cart, line_id: str) -> Optional[CartItem]:
        return next((line for line in cart.items if line.id == line_id), None)

    def find_line_by_item(self, cart: Cart, item_id: str) -> Optional[CartItem]:
        return next((line for line in cart.items if line.item_id == item_id), None)

    def add_line(self, cart: Cart, **fields) -> CartItem:
        line = CartItem(**fields)
        cart.items.append(line)
        self.db.flush()
        return line

    def remove_line(self, cart: Cart, line: CartItem) -> None:
        cart.items.remove(line)
        self.db.flush()

    def remove_items(self, user_id: str, item_ids: List[str]) -> int:
        """Delete the user's cart lines for the given item ids, returns lines removed"""
        cart = self.find_by_user(user_id)
        if not cart or not item_ids:
            return 0
        lines = [line for line in cart.items if line.item_id in item_ids]
        for line in lines:
            cart.items.remove(line)
        self.db.flush()
        return len(lines)

    def clear(self, cart: Cart) -> None:
        cart.items.clear()
        self.db.flush()


class WishlistRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_user(self, user_id: str) -> Optional[Wishlist]:
        return (
            self.db.query(Wishlist)
            .options(selectinload(Wishlist.items))
            .filter(Wishlist.user_id == user_id)
            .first()
        )

    def get_or_create(self, user_id: str) -> Wishlist:
        wishlist = self.find_by_user(user_id)
        if wishlist:
            return wishlist

        wishlist = Wishlist(user_id=user_id)
        self.db.add(wishlist)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.info(f"Wishlist for user {user_id} created concurrently, re-reading")
            return self.find_by_user(user_id)
        return wishlist

    def find_line(self, wishlist: Wishlist, line_or_item_id: str) -> Optional[WishlistItem]:
        """Match either the line id or the referenced item id"""
        return next(
            (line for line in wishlist.items if line_or_item_id in (line.id, line.item_id)),
            None,
        )

    def add_line(self, wishlist: Wishlist, **fields) -> WishlistItem:
        line = WishlistItem(**fields)
        wishlist.items.append(line)
        self.db.flush()
        return line

    def remove_line(self, wishlist: Wishlist, line: WishlistItem) -> None:
        wishlist.items.remove(line)
        self.db.flush()

    def clear(self, wishlist: Wishlist) -> None:
        wishlist.items.clear()
        self.db.flush()
