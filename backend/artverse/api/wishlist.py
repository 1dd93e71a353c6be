"""
Wishlist API Endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from artverse.api.responses import success
from artverse.core.auth import TokenUser, get_current_user
from artverse.core.database import get_db
from artverse.domain.cart import WishlistAddRequest, WishlistItemView
from artverse.services.wishlist_service import WishlistService

router = APIRouter()


@router.get("")
def get_wishlist(user: TokenUser = Depends(get_current_user), db: Session = Depends(get_db)):
    view = WishlistService(db).get_wishlist_view(user.id)
    return success(data={"items": view["items"]}, item_count=view["item_count"])


@router.post("", status_code=status.HTTP_201_CREATED)
def add_to_wishlist(body: WishlistAddRequest, user: TokenUser = Depends(get_current_user),
                    db: Session = Depends(get_db)):
    line = WishlistService(db).add_item(user.id, body.item_id)
    return success(data=WishlistItemView.model_validate(line).to_dict(), message="Item added to wishlist successfully")


@router.delete("/{wishlist_item_id}")
def remove_from_wishlist(wishlist_item_id: str, user: TokenUser = Depends(get_current_user),
                         db: Session = Depends(get_db)):
    wishlist = WishlistService(db).remove_item(user.id, wishlist_item_id)
    return success(
        data={"item_count": len(wishlist.items), "removed_item_id": wishlist_item_id},
        message="Item removed from wishlist successfully",
    )


@router.delete("")
def clear_wishlist(user: TokenUser = Depends(get_current_user), db: Session = Depends(get_db)):
    WishlistService(db).clear(user.id)
    return success(data={"item_count": 0}, message="Wishlist cleared successfully")
