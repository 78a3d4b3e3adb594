"""Pydantic request/response schemas for the raffle API.

These are external contracts, kept separate from the Protean commands and
aggregates behind them.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field


class StatusResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    type: str
    message: str
    errors: dict[str, list[str]] | None = None


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class RaffleEventResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    start_date: date
    end_date: date
    status: str


class RaffleItemResponse(BaseModel):
    id: str
    event_id: str
    item_number: str
    name: str
    description: str | None = None
    price: float
    image_urls: list[str] = []
    category: str | None = None
    sponsor: str | None = None
    item_value: float | None = None
    is_over_21: bool = False
    is_local_pickup_only: bool = False
    draw_count: int = 1
    is_available: bool = True


class EventSettingsResponse(BaseModel):
    event_id: str
    header_image_url: str | None = None
    allow_international_orders: bool = False
    require_age_confirmation: bool = False


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class CreateCartRequest(BaseModel):
    event_id: str | None = None  # Defaults to the current event
    session_id: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "event_id": None,
                    "session_id": "sess-3f9a",
                }
            ]
        }
    }


class CartIdResponse(BaseModel):
    cart_id: str


class AddToCartRequest(BaseModel):
    item_id: str


class UpdateCartQuantityRequest(BaseModel):
    delta: int = Field(examples=[1, -1])


class CartLineResponse(BaseModel):
    item_id: str
    item_number: str | None = None
    name: str
    description: str | None = None
    unit_price: float
    image_url: str | None = None
    item_value: float | None = None
    is_over_21: bool = False
    is_local_pickup_only: bool = False
    quantity: int
    line_total: float


class CartResponse(BaseModel):
    cart_id: str
    event_id: str
    lines: list[CartLineResponse]
    total_tickets: int
    total_price: float
    has_age_restricted_selection: bool
    has_pickup_only_selection: bool


# ---------------------------------------------------------------------------
# Checkout & orders
# ---------------------------------------------------------------------------
class CheckoutRequest(BaseModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    confirm_email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str | None = None  # Defaults to the home country
    age_confirmed: bool = False

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "first_name": "Jane",
                    "last_name": "Doe",
                    "email": "jane@example.com",
                    "confirm_email": "jane@example.com",
                    "phone": "555-0100",
                    "address": "123 Main St",
                    "city": "Springfield",
                    "state": "IL",
                    "zip_code": "62701",
                    "country": "US",
                    "age_confirmed": False,
                }
            ]
        }
    }


class OrderReceiptResponse(BaseModel):
    order_id: str
    order_number: str
    total_amount: float
    total_tickets: int


class OrderLineResponse(BaseModel):
    item_id: str
    item_number: str | None = None
    name: str | None = None
    quantity: int
    price: float


class OrderResponse(BaseModel):
    id: str
    order_number: str
    event_id: str | None = None
    customer_name: str
    customer_email: str
    customer_phone: str
    customer_address: str
    customer_city: str
    customer_state: str | None = None
    customer_zip: str
    customer_country: str
    is_international: bool
    age_confirmed: bool
    total_amount: float
    total_tickets: int
    status: str
    created_at: datetime | None = None
    lines: list[OrderLineResponse] = []


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------
class CreateRaffleEventRequest(BaseModel):
    name: str
    description: str | None = None
    start_date: date
    end_date: date
    status: str | None = None


class UpdateRaffleEventRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None


class ChangeStatusRequest(BaseModel):
    status: str


class EventIdResponse(BaseModel):
    event_id: str


class CreateRaffleItemRequest(BaseModel):
    event_id: str
    item_number: str
    name: str
    description: str | None = None
    price: float = Field(gt=0)
    category: str | None = None
    sponsor: str | None = None
    item_value: float | None = None
    is_over_21: bool = False
    is_local_pickup_only: bool = False
    draw_count: int = Field(ge=0, default=1)
    is_available: bool = True
    image_urls: list[str] = []


class UpdateRaffleItemRequest(BaseModel):
    item_number: str | None = None
    name: str | None = None
    description: str | None = None
    price: float | None = Field(gt=0, default=None)
    category: str | None = None
    sponsor: str | None = None
    item_value: float | None = None
    is_over_21: bool | None = None
    is_local_pickup_only: bool | None = None
    draw_count: int | None = Field(ge=0, default=None)


class SetAvailabilityRequest(BaseModel):
    is_available: bool


class AddImageRequest(BaseModel):
    url: str


class ItemIdResponse(BaseModel):
    item_id: str


class UploadResponse(BaseModel):
    url: str


class SaveEventSettingsRequest(BaseModel):
    allow_international_orders: bool | None = None
    require_age_confirmation: bool | None = None
    header_image_url: str | None = None
