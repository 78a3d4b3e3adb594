"""FastAPI routes for the admin console.

Every route requires a bearer token whose user profile has the admin role.
"""

import json

from fastapi import APIRouter, Depends, File, UploadFile
from protean.utils.globals import current_domain

from raffle.api.dependencies import get_backend, require_admin
from raffle.api.routes import event_response, item_response, order_response, settings_response
from raffle.api.schemas import (
    AddImageRequest,
    ChangeStatusRequest,
    CreateRaffleEventRequest,
    CreateRaffleItemRequest,
    EventIdResponse,
    EventSettingsResponse,
    ItemIdResponse,
    OrderResponse,
    RaffleEventResponse,
    RaffleItemResponse,
    SaveEventSettingsRequest,
    SetAvailabilityRequest,
    StatusResponse,
    UpdateRaffleEventRequest,
    UpdateRaffleItemRequest,
    UploadResponse,
)
from raffle.catalogue.event import RaffleEvent
from raffle.catalogue.event_management import ChangeRaffleEventStatus, CreateRaffleEvent, UpdateRaffleEvent
from raffle.catalogue.item import RaffleItem
from raffle.catalogue.item_management import (
    AddRaffleItemImage,
    CreateRaffleItem,
    RemoveRaffleItem,
    SetItemAvailability,
    UpdateRaffleItem,
)
from raffle.catalogue.settings_management import SaveEventSettings
from raffle.checkout.backend import RaffleBackend
from raffle.order.management import ChangeOrderStatus
from raffle.order.order import Order
from raffle.storage import get_storage
from raffle.storage.uploads import upload_header_image, upload_item_image

admin_router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _iso(value):
    return value.isoformat() if value else None


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------
@admin_router.get("/events", response_model=list[RaffleEventResponse])
async def list_events() -> list[RaffleEventResponse]:
    return [event_response(e) for e in current_domain.repository_for(RaffleEvent).list_all()]


@admin_router.post("/events", status_code=201, response_model=EventIdResponse)
async def create_event(body: CreateRaffleEventRequest) -> EventIdResponse:
    command = CreateRaffleEvent(
        name=body.name,
        description=body.description,
        start_date=body.start_date.isoformat(),
        end_date=body.end_date.isoformat(),
        status=body.status,
    )
    result = current_domain.process(command, asynchronous=False)
    return EventIdResponse(event_id=result)


@admin_router.put("/events/{event_id}", response_model=StatusResponse)
async def update_event(event_id: str, body: UpdateRaffleEventRequest) -> StatusResponse:
    command = UpdateRaffleEvent(
        event_id=event_id,
        name=body.name,
        description=body.description,
        start_date=_iso(body.start_date),
        end_date=_iso(body.end_date),
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_router.put("/events/{event_id}/status", response_model=StatusResponse)
async def change_event_status(event_id: str, body: ChangeStatusRequest) -> StatusResponse:
    command = ChangeRaffleEventStatus(event_id=event_id, status=body.status)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_router.get("/events/{event_id}/items", response_model=list[RaffleItemResponse])
async def list_event_items(event_id: str) -> list[RaffleItemResponse]:
    current_domain.repository_for(RaffleEvent).get(event_id)
    return [item_response(item) for item in current_domain.repository_for(RaffleItem).for_event(event_id)]


@admin_router.get("/events/{event_id}/orders", response_model=list[OrderResponse])
async def list_event_orders(event_id: str, backend: RaffleBackend = Depends(get_backend)) -> list[OrderResponse]:
    current_domain.repository_for(RaffleEvent).get(event_id)
    orders = current_domain.repository_for(Order).for_event(event_id)
    return [order_response(order, backend.fetch_order_lines(order.id)) for order in orders]


# ---------------------------------------------------------------------------
# Event settings
# ---------------------------------------------------------------------------
@admin_router.get("/events/{event_id}/settings", response_model=EventSettingsResponse)
async def get_settings(event_id: str, backend: RaffleBackend = Depends(get_backend)) -> EventSettingsResponse:
    current_domain.repository_for(RaffleEvent).get(event_id)
    return settings_response(backend.fetch_event_settings(event_id))


@admin_router.put("/events/{event_id}/settings", response_model=EventSettingsResponse)
async def save_settings(
    event_id: str, body: SaveEventSettingsRequest, backend: RaffleBackend = Depends(get_backend)
) -> EventSettingsResponse:
    command = SaveEventSettings(
        event_id=event_id,
        allow_international_orders=body.allow_international_orders,
        require_age_confirmation=body.require_age_confirmation,
        header_image_url=body.header_image_url,
    )
    current_domain.process(command, asynchronous=False)
    return settings_response(backend.fetch_event_settings(event_id))


@admin_router.post("/events/{event_id}/settings/header-image", response_model=UploadResponse)
async def upload_event_header(event_id: str, file: UploadFile = File(...)) -> UploadResponse:
    current_domain.repository_for(RaffleEvent).get(event_id)

    content = await file.read()
    stored = upload_header_image(get_storage(), event_id, file.filename, content, file.content_type)

    current_domain.process(
        SaveEventSettings(event_id=event_id, header_image_url=stored.public_url),
        asynchronous=False,
    )
    return UploadResponse(url=stored.public_url)


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------
@admin_router.post("/items", status_code=201, response_model=ItemIdResponse)
async def create_item(body: CreateRaffleItemRequest) -> ItemIdResponse:
    command = CreateRaffleItem(
        event_id=body.event_id,
        item_number=body.item_number,
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category,
        sponsor=body.sponsor,
        item_value=body.item_value,
        is_over_21=body.is_over_21,
        is_local_pickup_only=body.is_local_pickup_only,
        draw_count=body.draw_count,
        is_available=body.is_available,
        image_urls=json.dumps(body.image_urls),
    )
    result = current_domain.process(command, asynchronous=False)
    return ItemIdResponse(item_id=result)


@admin_router.put("/items/{item_id}", response_model=StatusResponse)
async def update_item(item_id: str, body: UpdateRaffleItemRequest) -> StatusResponse:
    command = UpdateRaffleItem(item_id=item_id, **body.model_dump(exclude_none=True))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_router.put("/items/{item_id}/availability", response_model=StatusResponse)
async def set_item_availability(item_id: str, body: SetAvailabilityRequest) -> StatusResponse:
    command = SetItemAvailability(item_id=item_id, is_available=body.is_available)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_router.post("/items/{item_id}/images", response_model=StatusResponse)
async def add_item_image(item_id: str, body: AddImageRequest) -> StatusResponse:
    command = AddRaffleItemImage(item_id=item_id, url=body.url)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_router.post("/items/images/upload", response_model=UploadResponse)
async def upload_image(file: UploadFile = File(...)) -> UploadResponse:
    """Store an image before the item it belongs to exists."""
    content = await file.read()
    stored = upload_item_image(get_storage(), file.filename, content, file.content_type)
    return UploadResponse(url=stored.public_url)


@admin_router.post("/items/{item_id}/images/upload", response_model=UploadResponse)
async def upload_item_image_for_item(item_id: str, file: UploadFile = File(...)) -> UploadResponse:
    current_domain.repository_for(RaffleItem).get(item_id)

    content = await file.read()
    stored = upload_item_image(get_storage(), file.filename, content, file.content_type)

    current_domain.process(AddRaffleItemImage(item_id=item_id, url=stored.public_url), asynchronous=False)
    return UploadResponse(url=stored.public_url)


@admin_router.delete("/items/{item_id}", response_model=StatusResponse)
async def remove_item(item_id: str) -> StatusResponse:
    current_domain.process(RemoveRaffleItem(item_id=item_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@admin_router.put("/orders/{order_id}/status", response_model=StatusResponse)
async def change_order_status(order_id: str, body: ChangeStatusRequest) -> StatusResponse:
    command = ChangeOrderStatus(order_id=order_id, status=body.status)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()
