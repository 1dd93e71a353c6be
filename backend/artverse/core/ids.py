"""
Record identifiers

All records use UUID4 strings so an id is unique across tables. Cart,
wishlist and order lines rely on that to resolve an item id against both
artworks and courses.
"""
import uuid
from typing import Optional

from artverse.core.errors import BadRequestError


def new_id() -> str:
    return str(uuid.uuid4())


def normalize_id(value) -> Optional[str]:
    """Canonical lower-case form of an id, None when it is not a UUID"""
    if not isinstance(value, str):
        return None
    try:
        return str(uuid.UUID(value))
    except ValueError:
        return None


def ensure_valid_id(value, label: str = "item") -> str:
    """Return the normalized id or raise a 400 naming the kind of id."""
    normalized = normalize_id(value)
    if normalized is None:
        raise BadRequestError(f"Invalid {label} ID")
    return normalized
