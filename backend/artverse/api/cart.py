"""
Cart API Endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from artverse.api.responses import success
from artverse.core.auth import TokenUser, get_current_user
from artverse.core.database import get_db
from artverse.domain.cart import AddItemRequest, QuantityUpdate
from artverse.services.cart_service import CartService, cart_totals

router = APIRouter()


@router.get("")
def get_cart(user: TokenUser = Depends(get_current_user), db: Session = Depends(get_db)):
    view = CartService(db).get_cart_view(user.id)
    return success(data={"items": view["items"], "total": view["total"]}, item_count=view["item_count"])


@router.post("", status_code=status.HTTP_201_CREATED)
def add_to_cart(body: AddItemRequest, user: TokenUser = Depends(get_current_user), db: Session = Depends(get_db)):
    cart, line = CartService(db).add_item(user.id, body.item_id, body.quantity)
    data = cart_totals(cart)
    data["item"] = {
        "id": line.item_id,
        "line_id": line.id,
        "title": line.title,
        "type": line.item_type,
        "price": float(line.price),
        "quantity": line.quantity,
    }
    return success(data=data, message="Item added to cart successfully")


@router.put("/{cart_item_id}")
def update_quantity(
    cart_item_id: str,
    body: QuantityUpdate,
    user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    cart, line = CartService(db).update_quantity(user.id, cart_item_id, body.quantity)
    data = cart_totals(cart)
    data["updated_item"] = {"id": line.id, "quantity": line.quantity, "price": float(line.price)}
    return success(data=data, message="Quantity updated successfully")


@router.delete("/{cart_item_id}")
def remove_from_cart(cart_item_id: str, user: TokenUser = Depends(get_current_user), db: Session = Depends(get_db)):
    cart = CartService(db).remove_line(user.id, cart_item_id)
    data = cart_totals(cart)
    data["removed_item_id"] = cart_item_id
    return success(data=data, message="Item removed successfully")


@router.delete("")
def clear_cart(user: TokenUser = Depends(get_current_user), db: Session = Depends(get_db)):
    CartService(db).clear(user.id)
    return success(data={"item_count": 0, "unique_items": 0, "total": 0}, message="Cart cleared successfully")
