"""Storefront cart router: anonymous session carts and WhatsApp checkout.

Handlers that only touch the cart are plain ``def`` so the blocking Redis
client runs in the threadpool.
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from libs.db.session import get_async_db
from services.storefront_service.cart import (
    CartItem,
    CartProduct,
    CartStore,
    CheckoutUnavailableError,
    build_order_message,
    build_whatsapp_url,
)
from services.storefront_service.catalog.sizes import Size, parse_sizes
from services.storefront_service.models import AnalyticsEventType
from services.storefront_service.routers._helpers import get_cart, get_product_or_404
from services.storefront_service.schemas import (
    CartItemCreate,
    CartItemUpdate,
    CartResponse,
    CheckoutResponse,
)
from services.storefront_service.services.analytics import track_event
from services.storefront_service.services.store_settings import get_store_settings
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

router = APIRouter(tags=["storefront"])


def _cart_response(cart: CartStore) -> CartResponse:
    return CartResponse(
        items=cart.items,
        total_items=cart.get_total_items(),
        total_price=cart.get_total_price(),
    )


# ============================================================================
# CART
# ============================================================================


@router.get("/cart", response_model=CartResponse)
def get_cart_contents(cart: CartStore = Depends(get_cart)):
    return _cart_response(cart)


@router.post(
    "/cart/items", response_model=CartResponse, status_code=status.HTTP_201_CREATED
)
async def add_cart_item(
    item_in: CartItemCreate,
    session_id: str = Query(..., min_length=1, max_length=64),
    cart: CartStore = Depends(get_cart),
    db: AsyncSession = Depends(get_async_db),
):
    """Add a product line; the same product, size and color add up."""
    product = await get_product_or_404(db, item_in.product_id)
    if not product.is_visible:
        raise HTTPException(status_code=404, detail="Product not found")

    size = Size.parse(item_in.size)
    if product.sizes and size not in parse_sizes(product.sizes):
        raise HTTPException(status_code=400, detail="Size not available for this product")
    if product.colors and item_in.color not in product.colors:
        raise HTTPException(
            status_code=400, detail="Color not available for this product"
        )

    stock = product.stock or 0
    if stock <= 0:
        raise HTTPException(status_code=400, detail="Product is out of stock")
    if cart.quantity_of(product.id) + item_in.quantity > stock:
        raise HTTPException(
            status_code=400, detail=f"Only {stock} units available for this product"
        )

    item = CartItem(
        product=CartProduct(
            id=product.id,
            name=product.name,
            price=product.price,
            sku=product.sku,
            image_url=(product.images or [None])[0],
        ),
        selected_size=size,
        selected_color=item_in.color,
        quantity=item_in.quantity,
    )
    await run_in_threadpool(cart.add_item, item)

    await track_event(
        db, AnalyticsEventType.ADD_TO_CART_CLICK, session_id, product_id=product.id
    )
    return _cart_response(cart)


@router.patch("/cart/items", response_model=CartResponse)
def update_cart_item(item_in: CartItemUpdate, cart: CartStore = Depends(get_cart)):
    cart.update_quantity(
        item_in.product_id, Size.parse(item_in.size), item_in.color, item_in.quantity
    )
    return _cart_response(cart)


@router.delete("/cart/items", response_model=CartResponse)
def remove_cart_item(
    product_id: uuid.UUID,
    size: str = Query(..., min_length=1),
    color: str = Query(..., min_length=1),
    cart: CartStore = Depends(get_cart),
):
    cart.remove_item(product_id, Size.parse(size), color)
    return _cart_response(cart)


@router.delete("/cart", response_model=CartResponse)
def clear_cart(cart: CartStore = Depends(get_cart)):
    cart.clear_cart()
    return _cart_response(cart)


# ============================================================================
# CHECKOUT
# ============================================================================


@router.get("/cart/checkout", response_model=CheckoutResponse)
async def checkout(
    cart: CartStore = Depends(get_cart),
    db: AsyncSession = Depends(get_async_db),
):
    """WhatsApp link carrying the order message for the shop's number."""
    settings = await get_store_settings(db)
    phone = settings.contact_whatsapp if settings else None
    try:
        url = build_whatsapp_url(phone, cart)
    except CheckoutUnavailableError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return CheckoutResponse(
        url=url, message=build_order_message(cart.items, cart.get_total_price())
    )
