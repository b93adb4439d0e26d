"""FastAPI routes for carts, orders and catalogue reads."""

import json

from fastapi import APIRouter, Depends, HTTPException
from protean.utils.globals import current_domain

from ordering.api.identity import optional_customer_id, required_customer_id
from ordering.api.schemas import (
    CartItemsRequest,
    CartResponse,
    CheckoutRequest,
    GuestInfoSchema,
    OrderItemResponse,
    OrderListResponse,
    OrderResponse,
    ProductResponse,
    ShippingAddressSchema,
    StatusResponse,
    UpdateOrderStatusRequest,
    UpdatePaymentStatusRequest,
)
from ordering.cart.management import ClearCart, SaveCart, SyncCart
from ordering.cart.store import CartStore
from ordering.catalog.product_catalogue import ProductCatalogue
from ordering.checkout.orchestrator import checkout
from ordering.order.order import Order
from ordering.order.status import UpdateOrderStatus, UpdatePaymentStatus


def _order_response(order: Order) -> OrderResponse:
    guest = order.guest_info
    address = order.shipping_address
    return OrderResponse(
        order_id=str(order.id),
        customer_id=str(order.customer_id) if order.customer_id else None,
        guest_info=GuestInfoSchema(name=guest.name, email=guest.email, phone=guest.phone) if guest else None,
        shipping_address=ShippingAddressSchema(
            home_address=address.home_address,
            city=address.city,
            region_or_state=address.region_or_state,
            country=address.country,
            zip_code=address.zip_code,
        ),
        total_amount=order.total_amount,
        status=order.status,
        payment_status=order.payment_status,
        items=[
            OrderItemResponse(
                item_id=str(item.id),
                product_id=str(item.product_id),
                product_name=item.product_name,
                size=item.size,
                quantity=item.quantity,
                unit_price=item.unit_price,
            )
            for item in order.items
        ],
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(customer_id: str = Depends(required_customer_id)) -> CartResponse:
    return CartResponse(cart_items=CartStore().get(customer_id))


@cart_router.post("/sync", response_model=CartResponse)
async def sync_cart(body: CartItemsRequest, customer_id: str = Depends(required_customer_id)) -> CartResponse:
    """Merge a client-held cart (e.g. a guest cart after login) into the stored cart."""
    command = SyncCart(
        owner_id=customer_id,
        cart_items=json.dumps(body.cart_items),
    )
    cart_items = current_domain.process(command, asynchronous=False)
    return CartResponse(cart_items=cart_items)


@cart_router.post("/save", response_model=StatusResponse)
async def save_cart(body: CartItemsRequest, customer_id: str = Depends(required_customer_id)) -> StatusResponse:
    """Overwrite the stored cart with the client's current cart."""
    command = SaveCart(
        owner_id=customer_id,
        cart_items=json.dumps(body.cart_items),
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="saved")


@cart_router.delete("", response_model=StatusResponse)
async def clear_cart(customer_id: str = Depends(required_customer_id)) -> StatusResponse:
    current_domain.process(ClearCart(owner_id=customer_id), asynchronous=False)
    return StatusResponse(status="cleared")


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def create_order(
    body: CheckoutRequest,
    customer_id: str | None = Depends(optional_customer_id),
) -> OrderResponse:
    """Checkout for a signed-in customer, or a guest identified by guest_info."""
    order = checkout(
        cart_items=body.cart_items,
        shipping_address=body.shipping_address.model_dump() if body.shipping_address else None,
        customer_id=customer_id,
        guest_info=body.guest_info.model_dump() if body.guest_info else None,
    )
    return _order_response(order)


@order_router.get("", response_model=OrderListResponse)
async def list_orders(customer_id: str = Depends(required_customer_id)) -> OrderListResponse:
    orders = current_domain.repository_for(Order).for_customer(customer_id)
    return OrderListResponse(count=len(orders), orders=[_order_response(order) for order in orders])


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, customer_id: str = Depends(required_customer_id)) -> OrderResponse:
    order = current_domain.repository_for(Order).get(order_id)
    if str(order.customer_id) != customer_id:
        raise HTTPException(status_code=404, detail="Order not found")
    return _order_response(order)


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderResponse:
    command = UpdateOrderStatus(order_id=order_id, status=body.status)
    current_domain.process(command, asynchronous=False)
    return _order_response(current_domain.repository_for(Order).get(order_id))


@order_router.put("/{order_id}/payment", response_model=OrderResponse)
async def update_payment_status(order_id: str, body: UpdatePaymentStatusRequest) -> OrderResponse:
    """Payment gateway callback target."""
    command = UpdatePaymentStatus(order_id=order_id, payment_status=body.payment_status)
    current_domain.process(command, asynchronous=False)
    return _order_response(current_domain.repository_for(Order).get(order_id))


# ---------------------------------------------------------------------------
# Product Router (read-only)
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


def _product_response(record: ProductCatalogue) -> ProductResponse:
    return ProductResponse(
        product_id=str(record.product_id),
        name=record.name,
        unit_price=record.unit_price,
        in_stock=bool(record.in_stock),
        category=record.category,
        sizes=json.loads(record.sizes) if record.sizes else [],
    )


@product_router.get("", response_model=list[ProductResponse])
async def list_products() -> list[ProductResponse]:
    records = current_domain.repository_for(ProductCatalogue)._dao.query.order_by("name").limit(None).all().items
    return [_product_response(record) for record in records]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    record = current_domain.repository_for(ProductCatalogue).get(product_id)
    return _product_response(record)
