"""RaffleItem aggregate — a prize buyers purchase draws for.

This is the one canonical item shape: the storefront catalogue, the cart and
the order submission all read items through this aggregate. Optional fields
(sponsor, estimated value) are explicit and may be empty.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text

from raffle.catalogue.events import (
    RaffleItemAvailabilityChanged,
    RaffleItemCreated,
    RaffleItemImageAdded,
    RaffleItemUpdated,
)
from raffle.domain import raffle


@raffle.entity(part_of="RaffleItem")
class ItemImage:
    url = String(required=True, max_length=500)
    display_order = Integer(default=0)


@raffle.aggregate
class RaffleItem:
    event_id = Identifier(required=True)
    item_number = String(required=True, max_length=20)
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.01)
    images = HasMany(ItemImage)
    category = String(max_length=100)
    sponsor = String(max_length=255)
    item_value = Float(min_value=0.0)
    is_over_21 = Boolean(default=False)
    is_local_pickup_only = Boolean(default=False)
    draw_count = Integer(default=1, min_value=0)
    is_available = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @property
    def image_urls(self) -> list[str]:
        return [img.url for img in sorted(self.images, key=lambda i: i.display_order)]

    @property
    def primary_image_url(self) -> str | None:
        urls = self.image_urls
        return urls[0] if urls else None

    @classmethod
    def create(
        cls,
        event_id,
        item_number,
        name,
        price,
        description=None,
        category=None,
        sponsor=None,
        item_value=None,
        is_over_21=False,
        is_local_pickup_only=False,
        draw_count=1,
        is_available=True,
        image_urls=None,
    ):
        now = datetime.now(UTC)
        item = cls(
            event_id=event_id,
            item_number=item_number,
            name=name,
            description=description,
            price=price,
            category=category,
            sponsor=sponsor,
            item_value=item_value,
            is_over_21=is_over_21,
            is_local_pickup_only=is_local_pickup_only,
            draw_count=draw_count,
            is_available=is_available,
            created_at=now,
            updated_at=now,
        )
        for url in image_urls or []:
            item.add_images(ItemImage(url=url, display_order=len(item.images)))

        item.raise_(
            RaffleItemCreated(
                item_id=str(item.id),
                event_id=str(event_id),
                item_number=item_number,
                name=name,
                price=price,
                created_at=now,
            )
        )
        return item

    def update_details(self, **changes):
        """Apply the given field changes. ``None`` values are ignored."""
        editable = {
            "item_number",
            "name",
            "description",
            "price",
            "category",
            "sponsor",
            "item_value",
            "is_over_21",
            "is_local_pickup_only",
            "draw_count",
        }
        unknown = set(changes) - editable
        if unknown:
            raise ValidationError({field: ["Field cannot be edited"] for field in sorted(unknown)})

        for field, value in changes.items():
            if value is not None:
                setattr(self, field, value)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            RaffleItemUpdated(
                item_id=str(self.id),
                name=self.name,
                price=self.price,
            )
        )

    def set_availability(self, is_available):
        if self.is_available == is_available:
            return
        self.is_available = is_available
        self.updated_at = datetime.now(UTC)
        self.raise_(
            RaffleItemAvailabilityChanged(
                item_id=str(self.id),
                is_available=is_available,
            )
        )

    def add_image(self, url):
        image = ItemImage(url=url, display_order=len(self.images))
        self.add_images(image)
        self.updated_at = datetime.now(UTC)
        self.raise_(
            RaffleItemImageAdded(
                item_id=str(self.id),
                image_id=str(image.id),
                url=url,
            )
        )
        return image


@raffle.repository(part_of=RaffleItem)
class RaffleItemRepository:
    def available_for_event(self, event_id) -> list[RaffleItem]:
        """Storefront catalogue: available items of one event by item number."""
        return (
            self._dao.query.filter(event_id=str(event_id), is_available=True)
            .order_by("item_number")
            .all()
            .items
        )

    def for_event(self, event_id) -> list[RaffleItem]:
        """Admin listing: every item of one event, newest first."""
        return self._dao.query.filter(event_id=str(event_id)).order_by("-created_at").all().items
