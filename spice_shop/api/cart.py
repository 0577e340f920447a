from fastapi import APIRouter, Depends, HTTPException
import logging

from spice_shop.api.dependencies import get_cart_store
from spice_shop.schemas.cart import CartItemAdd, CartQuantityChange, CartItemResponse, CartResponse
from spice_shop.services.cart import CartStore
from spice_shop.services.catalog import get_product
from spice_shop.services.pricing import format_price

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/cart", tags=["cart"])


def build_cart_response(store: CartStore) -> CartResponse:
    """Cart lines plus derived totals. Used by web routes too."""
    totals = store.totals()
    items = [
        CartItemResponse(
            id=line.id,
            name=line.name,
            price=line.price,
            weight=line.weight,
            quantity=line.quantity,
            subtotal=line.subtotal
        )
        for line in store.lines
    ]
    return CartResponse(
        items=items,
        item_count=totals.item_count,
        total=totals.amount,
        total_display=format_price(totals.amount),
        just_added_id=store.just_added_id
    )


@router.get("", response_model=CartResponse)
async def get_cart(store: CartStore = Depends(get_cart_store)):
    """Get current shopping cart."""
    return build_cart_response(store)


@router.post("/add", response_model=CartResponse)
async def add_to_cart(item: CartItemAdd, store: CartStore = Depends(get_cart_store)):
    """Add one unit of a catalog product to the cart."""
    product = get_product(item.product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    store.add_item(product)
    return build_cart_response(store)


@router.post("/{product_id}/quantity", response_model=CartResponse)
async def change_quantity(
    product_id: int,
    change: CartQuantityChange,
    store: CartStore = Depends(get_cart_store)
):
    """Increment or decrement a line. Quantity never drops below 1."""
    store.change_quantity(product_id, change.delta)
    return build_cart_response(store)


@router.delete("/{product_id}", response_model=CartResponse)
async def remove_from_cart(product_id: int, store: CartStore = Depends(get_cart_store)):
    """Remove item from cart."""
    store.remove_item(product_id)
    return build_cart_response(store)
