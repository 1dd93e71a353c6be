"""
Wishlist Service
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from artverse.core.errors import BadRequestError, NotFoundError
from artverse.core.ids import ensure_valid_id
from artverse.domain.cart import WishlistItemView
from artverse.models import Wishlist, WishlistItem
from artverse.repositories import WishlistRepository
from artverse.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)


class WishlistService:
    def __init__(self, db: Session):
        self.db = db
        self.wishlists = WishlistRepository(db)
        self.catalog = CatalogService(db)

    def get_wishlist_view(self, user_id: str) -> dict:
        wishlist = self.wishlists.find_by_user(user_id)
        if not wishlist:
            return {"items": [], "item_count": 0}
        items = [WishlistItemView.model_validate(line).to_dict() for line in wishlist.items]
        return {"items": items, "item_count": len(items)}

    def add_item(self, user_id: str, item_id) -> WishlistItem:
        """
        Raises:
            BadRequestError: bad id, unavailable item, or item already in the wishlist
            NotFoundError: no such item
        """
        item = self.catalog.resolve_available_item(item_id)
        wishlist = self.wishlists.get_or_create(user_id)

        if self.wishlists.find_line(wishlist, item.item_id):
            raise BadRequestError("Item already in wishlist")

        try:
            line = self.wishlists.add_line(wishlist, **item.snapshot())
            self.db.commit()
        except IntegrityError:
            # Unique (wishlist, item) lost a race with a concurrent add
            self.db.rollback()
            raise BadRequestError("Item already in wishlist")

        logger.info(f"User {user_id} added {item.item_type} {item.item_id} to wishlist")
        return line

    def remove_item(self, user_id: str, line_or_item_id) -> Wishlist:
        """Remove by line id or by item id"""
        line_or_item_id = ensure_valid_id(line_or_item_id, "wishlist item")
        wishlist = self._require_wishlist(user_id)
        line = self.wishlists.find_line(wishlist, line_or_item_id)
        if not line:
            raise NotFoundError("Item not found in wishlist")
        self.wishlists.remove_line(wishlist, line)
        self.db.commit()
        return wishlist

    def clear(self, user_id: str) -> Wishlist:
        wishlist = self._require_wishlist(user_id)
        self.wishlists.clear(wishlist)
        self.db.commit()
        return wishlist

    def _require_wishlist(self, user_id: str) -> Wishlist:
        wishlist = self.wishlists.find_by_user(user_id)
        if not wishlist:
            raise NotFoundError("Wishlist not found")
        return wishlist
