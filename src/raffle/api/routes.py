"""FastAPI routes for the storefront — events, carts, checkout and orders."""

from fastapi import APIRouter, Depends, HTTPException
from protean.utils.globals import current_domain

from raffle.api.schemas import (
    AddToCartRequest,
    CartIdResponse,
    CartLineResponse,
    CartResponse,
    CheckoutRequest,
    CreateCartRequest,
    EventSettingsResponse,
    OrderLineResponse,
    OrderReceiptResponse,
    OrderResponse,
    RaffleEventResponse,
    RaffleItemResponse,
    UpdateCartQuantityRequest,
)
from raffle.api.dependencies import get_backend
from raffle.cart.cart import Cart
from raffle.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from raffle.cart.management import CreateCart
from raffle.catalogue.event import RaffleEvent
from raffle.checkout.backend import RaffleBackend
from raffle.checkout.service import checkout_cart


# ---------------------------------------------------------------------------
# Response mapping
# ---------------------------------------------------------------------------
def event_response(event) -> RaffleEventResponse:
    return RaffleEventResponse(
        id=str(event.id),
        name=event.name,
        description=event.description,
        start_date=event.start_date,
        end_date=event.end_date,
        status=event.status,
    )


def item_response(item) -> RaffleItemResponse:
    return RaffleItemResponse(
        id=str(item.id),
        event_id=str(item.event_id),
        item_number=item.item_number,
        name=item.name,
        description=item.description,
        price=item.price,
        image_urls=item.image_urls,
        category=item.category,
        sponsor=item.sponsor,
        item_value=item.item_value,
        is_over_21=bool(item.is_over_21),
        is_local_pickup_only=bool(item.is_local_pickup_only),
        draw_count=item.draw_count,
        is_available=bool(item.is_available),
    )


def settings_response(settings) -> EventSettingsResponse:
    return EventSettingsResponse(
        event_id=str(settings.event_id),
        header_image_url=settings.header_image_url,
        allow_international_orders=bool(settings.allow_international_orders),
        require_age_confirmation=bool(settings.require_age_confirmation),
    )


def cart_response(cart) -> CartResponse:
    totals = cart.totals()
    return CartResponse(
        cart_id=str(cart.id),
        event_id=str(cart.event_id),
        lines=[
            CartLineResponse(
                item_id=str(line.item_id),
                item_number=line.item_number,
                name=line.name,
                description=line.description,
                unit_price=line.unit_price,
                image_url=line.image_url,
                item_value=line.item_value,
                is_over_21=bool(line.is_over_21),
                is_local_pickup_only=bool(line.is_local_pickup_only),
                quantity=line.quantity,
                line_total=round(line.unit_price * line.quantity, 2),
            )
            for line in sorted(cart.lines, key=lambda line: line.added_at)
        ],
        total_tickets=totals.total_tickets,
        total_price=totals.total_price,
        has_age_restricted_selection=cart.has_age_restricted_selection(),
        has_pickup_only_selection=cart.has_pickup_only_selection(),
    )


def order_response(order, lines) -> OrderResponse:
    return OrderResponse(
        id=str(order.id),
        order_number=order.order_number,
        event_id=str(order.event_id) if order.event_id else None,
        customer_name=order.customer_name,
        customer_email=order.customer_email,
        customer_phone=order.customer_phone,
        customer_address=order.customer_address,
        customer_city=order.customer_city,
        customer_state=order.customer_state,
        customer_zip=order.customer_zip,
        customer_country=order.customer_country,
        is_international=bool(order.is_international),
        age_confirmed=bool(order.age_confirmed),
        total_amount=order.total_amount,
        total_tickets=order.total_tickets,
        status=order.status,
        created_at=order.created_at,
        lines=[
            OrderLineResponse(
                item_id=str(line.item_id),
                item_number=line.item_number,
                name=line.name,
                quantity=line.quantity,
                price=line.price,
            )
            for line in lines
        ],
    )


def _current_event_or_404():
    event = current_domain.repository_for(RaffleEvent).current()
    if event is None:
        raise HTTPException(status_code=404, detail="There is no raffle running right now")
    return event


# ---------------------------------------------------------------------------
# Storefront Router
# ---------------------------------------------------------------------------
event_router = APIRouter(prefix="/events", tags=["storefront"])


@event_router.get("/current", response_model=RaffleEventResponse)
async def get_current_event() -> RaffleEventResponse:
    return event_response(_current_event_or_404())


@event_router.get("/{event_id}/items", response_model=list[RaffleItemResponse])
async def list_available_items(
    event_id: str, backend: RaffleBackend = Depends(get_backend)
) -> list[RaffleItemResponse]:
    current_domain.repository_for(RaffleEvent).get(event_id)
    return [item_response(item) for item in backend.fetch_available_items(event_id)]


@event_router.get("/{event_id}/settings", response_model=EventSettingsResponse)
async def get_event_settings(event_id: str, backend: RaffleBackend = Depends(get_backend)) -> EventSettingsResponse:
    current_domain.repository_for(RaffleEvent).get(event_id)
    return settings_response(backend.fetch_event_settings(event_id))


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.post("", status_code=201, response_model=CartIdResponse)
async def create_cart(body: CreateCartRequest) -> CartIdResponse:
    event_id = body.event_id or str(_current_event_or_404().id)
    command = CreateCart(
        event_id=event_id,
        session_id=body.session_id,
    )
    result = current_domain.process(command, asynchronous=False)
    return CartIdResponse(cart_id=result)


@cart_router.get("/{cart_id}", response_model=CartResponse)
async def get_cart(cart_id: str) -> CartResponse:
    return cart_response(current_domain.repository_for(Cart).get(cart_id))


@cart_router.post("/{cart_id}/items", response_model=CartResponse)
async def add_cart_item(cart_id: str, body: AddToCartRequest) -> CartResponse:
    command = AddToCart(
        cart_id=cart_id,
        item_id=body.item_id,
    )
    current_domain.process(command, asynchronous=False)
    return cart_response(current_domain.repository_for(Cart).get(cart_id))


@cart_router.put("/{cart_id}/items/{item_id}", response_model=CartResponse)
async def update_cart_item_quantity(cart_id: str, item_id: str, body: UpdateCartQuantityRequest) -> CartResponse:
    command = UpdateCartQuantity(
        cart_id=cart_id,
        item_id=item_id,
        delta=body.delta,
    )
    current_domain.process(command, asynchronous=False)
    return cart_response(current_domain.repository_for(Cart).get(cart_id))


@cart_router.delete("/{cart_id}/items/{item_id}", response_model=CartResponse)
async def remove_cart_item(cart_id: str, item_id: str) -> CartResponse:
    command = RemoveFromCart(
        cart_id=cart_id,
        item_id=item_id,
    )
    current_domain.process(command, asynchronous=False)
    return cart_response(current_domain.repository_for(Cart).get(cart_id))


@cart_router.post("/{cart_id}/checkout", status_code=201, response_model=OrderReceiptResponse)
async def checkout(
    cart_id: str, body: CheckoutRequest, backend: RaffleBackend = Depends(get_backend)
) -> OrderReceiptResponse:
    """Validate the buyer's details and submit the cart as an order.

    422 carries every field error; 409 means the cart is stale or already
    being submitted; 503 means the order could not be written and the buyer
    should try again.
    """
    receipt = checkout_cart(backend, cart_id, **body.model_dump(exclude_none=True))
    return OrderReceiptResponse(
        order_id=receipt.order_id,
        order_number=receipt.order_number,
        total_amount=receipt.total_amount,
        total_tickets=receipt.total_tickets,
    )


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("/{order_number}", response_model=OrderResponse)
async def get_order_confirmation(order_number: str, backend: RaffleBackend = Depends(get_backend)) -> OrderResponse:
    order = backend.fetch_order_by_number(order_number)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return order_response(order, backend.fetch_order_lines(order.id))
