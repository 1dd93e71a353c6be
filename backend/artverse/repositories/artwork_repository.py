"""
Artwork Repository - Data Access Layer for Artworks

Handles listing filters, sorting and pagination for the artwork catalog.
"""
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from artverse.models import Artwork

SORT_ORDERS = {
    "newest": (Artwork.created_at.desc(),),
    "oldest": (Artwork.created_at.asc(),),
    "price-high": (Artwork.price.desc(),),
    "price-low": (Artwork.price.asc(),),
    "popular": (Artwork.views.desc(), Artwork.created_at.desc()),
    "likes": (Artwork.likes.desc(), Artwork.created_at.desc()),
    "title-asc": (Artwork.title.asc(),),
    "title-desc": (Artwork.title.desc(),),
}


class ArtworkRepository:
    """
    Repository for Artwork data access

    Returns ORM rows with the artist relationship loaded.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, artwork_id: str) -> Optional[Artwork]:
        return (
            self.db.query(Artwork)
            .options(joinedload(Artwork.artist))
            .filter(Artwork.id == artwork_id)
            .first()
        )

    def find_all(
        self,
        status: Optional[str] = "approved",
        artist_id: Optional[str] = None,
        category: Optional[str] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        search: Optional[str] = None,
        sort: str = "newest",
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[Artwork], int]:
        """
        Find artworks with filters

        Args:
            status: Moderation status, None for any
            artist_id: Only this artist's artworks
            category: Exact category
            min_price / max_price: Inclusive price range
            search: Case-insensitive match on title or description
            sort: One of SORT_ORDERS (unknown values fall back to newest)
            limit: Maximum results to return
            offset: Number of results to skip

        Returns:
            Tuple of (list of artworks, total count)
        """
        query = self.db.query(Artwork)

        if status:
            query = query.filter(Artwork.status == status)
        if artist_id:
            query = query.filter(Artwork.artist_id == artist_id)
        if category:
            query = query.filter(Artwork.category == category)
        if min_price is not None:
            query = query.filter(Artwork.price >= min_price)
        if max_price is not None:
            query = query.filter(Artwork.price <= max_price)
        if search:
            term = f"%{search.strip()}%"
            query = query.filter(or_(Artwork.title.ilike(term), Artwork.description.ilike(term)))

        total = query.order_by(None).count()

        rows = (
            query.options(joinedload(Artwork.artist))
            .order_by(*SORT_ORDERS.get(sort, SORT_ORDERS["newest"]))
            .offset(offset)
            .limit(limit)
            .all()
        )
        return rows, total

    def find_by_artist(self, artist_id: str) -> List[Artwork]:
        return (
            self.db.query(Artwork)
            .filter(Artwork.artist_id == artist_id)
            .order_by(Artwork.created_at.desc())
            .all()
        )

    def create(self, artist_id: str, **fields) -> Artwork:
        artwork = Artwork(artist_id=artist_id, status="pending", **fields)
        self.db.add(artwork)
        self.db.flush()
        return artwork

    def increment_views(self, artwork: Artwork) -> None:
        artwork.views = (artwork.views or 0) + 1
        self.db.flush()

    def delete(self, artwork: Artwork) -> None:
        self.db.delete(artwork)
        self.db.flush()
