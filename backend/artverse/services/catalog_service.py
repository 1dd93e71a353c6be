"""
Catalog Service
Resolves an item id to a purchasable artwork or course

Cart, wishlist and order lines reference items by id only. Ids are unique
across both tables, so an id is looked up as an approved artwork first and
then as a published, approved course.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from artverse.core.errors import BadRequestError, NotFoundError
from artverse.core.ids import ensure_valid_id, normalize_id
from artverse.models import Artwork, Course


@dataclass
class ResolvedItem:
    """Snapshot of a purchasable item"""
    item_type: str
    item_id: str
    artist_id: str
    title: str
    price: Decimal
    images: List[dict] = field(default_factory=list)
    thumbnail: Optional[str] = None
    # None for courses (unlimited)
    stock: Optional[int] = None

    @classmethod
    def from_artwork(cls, artwork: Artwork) -> "ResolvedItem":
        images = list(artwork.images or [])
        return cls(
            item_type="artwork",
            item_id=artwork.id,
            artist_id=artwork.artist_id,
            title=artwork.title,
            price=artwork.price,
            images=images,
            thumbnail=images[0].get("url") if images else None,
            stock=artwork.stock,
        )

    @classmethod
    def from_course(cls, course: Course) -> "ResolvedItem":
        thumbnail = (course.thumbnail or {}).get("url")
        return cls(
            item_type="course",
            item_id=course.id,
            artist_id=course.artist_id,
            title=course.title,
            price=course.price,
            thumbnail=thumbnail,
        )

    def snapshot(self) -> dict:
        """Fields copied onto cart and wishlist lines"""
        return {
            "item_type": self.item_type,
            "item_id": self.item_id,
            "artist_id": self.artist_id,
            "title": self.title,
            "price": self.price,
            "images": self.images,
            "thumbnail": self.thumbnail,
        }


class CatalogService:
    def __init__(self, db: Session):
        self.db = db

    def resolve_available_item(self, item_id) -> ResolvedItem:
        """
        Resolve an id of either type

        Raises:
            BadRequestError: malformed id, or the item exists but is not available
            NotFoundError: no artwork or course has this id
        """
        item_id = ensure_valid_id(item_id, "item")

        artwork = self.db.get(Artwork, item_id)
        if artwork and artwork.status == "approved":
            return ResolvedItem.from_artwork(artwork)

        course = self.db.get(Course, item_id)
        if course and course.is_public:
            return ResolvedItem.from_course(course)

        if artwork:
            raise BadRequestError("Artwork is not available (not approved)")
        if course:
            raise BadRequestError("Course is not available (not published or approved)")
        raise NotFoundError("Item not found")

    def resolve_typed_item(self, item_type: str, item_id: str) -> ResolvedItem:
        """
        Resolve an order line whose type is declared by the client

        Raises:
            BadRequestError: naming the item when it is missing or unavailable
        """
        unavailable = BadRequestError(f"{item_type} not found or not available: {item_id}")
        normalized = normalize_id(item_id)
        if normalized is None:
            raise unavailable
        item_id = normalized

        if item_type == "artwork":
            artwork = self.db.get(Artwork, item_id)
            if artwork and artwork.status == "approved":
                return ResolvedItem.from_artwork(artwork)
        elif item_type == "course":
            course = self.db.get(Course, item_id)
            if course and course.is_public:
                return ResolvedItem.from_course(course)
        raise unavailable

    def current_snapshot(self, item_type: str, item_id: str) -> Optional[ResolvedItem]:
        """Current title/price/images of an item regardless of status, None when deleted"""
        if item_type == "artwork":
            artwork = self.db.get(Artwork, item_id)
            return ResolvedItem.from_artwork(artwork) if artwork else None
        course = self.db.get(Course, item_id)
        return ResolvedItem.from_course(course) if course else None
