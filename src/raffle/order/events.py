"""Domain events for orders."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from raffle.domain import raffle


@raffle.event(part_of="Order")
class OrderPlaced:
    """A checkout completed: the order and all of its lines were written."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    event_id = Identifier()
    email = String(required=True)
    total_amount = Float(required=True)
    total_tickets = Integer(required=True)
    placed_at = DateTime(required=True)


@raffle.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)
