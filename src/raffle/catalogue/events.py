"""Domain events for raffle events, raffle items and event settings."""

from protean.fields import Boolean, DateTime, Float, Identifier, String

from raffle.domain import raffle


@raffle.event(part_of="RaffleEvent")
class RaffleEventCreated:
    """A new raffle campaign was set up."""

    __version__ = 1

    event_id = Identifier(required=True)
    name = String(required=True)
    start_date = String(required=True)
    end_date = String(required=True)
    status = String(required=True)
    created_at = DateTime()


@raffle.event(part_of="RaffleEvent")
class RaffleEventUpdated:
    __version__ = 1

    event_id = Identifier(required=True)
    name = String(required=True)
    start_date = String(required=True)
    end_date = String(required=True)


@raffle.event(part_of="RaffleEvent")
class RaffleEventStatusChanged:
    __version__ = 1

    event_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)


@raffle.event(part_of="RaffleItem")
class RaffleItemCreated:
    """A prize was added to an event's catalogue."""

    __version__ = 1

    item_id = Identifier(required=True)
    event_id = Identifier(required=True)
    item_number = String(required=True)
    name = String(required=True)
    price = Float(required=True)
    created_at = DateTime()


@raffle.event(part_of="RaffleItem")
class RaffleItemUpdated:
    __version__ = 1

    item_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)


@raffle.event(part_of="RaffleItem")
class RaffleItemAvailabilityChanged:
    __version__ = 1

    item_id = Identifier(required=True)
    is_available = Boolean(required=True)


@raffle.event(part_of="RaffleItem")
class RaffleItemImageAdded:
    __version__ = 1

    item_id = Identifier(required=True)
    image_id = Identifier(required=True)
    url = String(required=True)


@raffle.event(part_of="EventSettings")
class EventSettingsSaved:
    """Display and ordering rules of an event were saved."""

    __version__ = 1

    settings_id = Identifier(required=True)
    event_id = Identifier(required=True)
    header_image_url = String()
    allow_international_orders = Boolean(required=True)
    require_age_confirmation = Boolean(required=True)
