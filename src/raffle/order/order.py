"""Order and OrderLine aggregates.

An order is written in two steps: the ``Order`` row first (status
``pending``), then one ``OrderLine`` per cart line referencing it. Lines are
their own aggregate so that the two writes, and the compensating delete of the
order when the second write fails, stay visible to the caller.

Status is one of pending, paid, cancelled or refunded. Admins may set any
of them at any time.
"""

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from raffle.domain import raffle
from raffle.order.events import OrderPlaced, OrderStatusChanged


class OrderStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


def generate_order_number(now: datetime | None = None) -> str:
    """A short, human-readable order number such as ``20261018-3FA9C1``."""
    now = now or datetime.now(UTC)
    return f"{now:%Y%m%d}-{uuid4().hex[:6].upper()}"


@raffle.aggregate
class Order:
    event_id = Identifier()
    order_number = String(required=True, max_length=50)
    customer_name = String(required=True, max_length=255)
    customer_email = String(required=True, max_length=255)
    customer_phone = String(required=True, max_length=50)
    customer_address = String(required=True, max_length=255)
    customer_city = String(required=True, max_length=100)
    customer_state = String(max_length=100)
    customer_zip = String(required=True, max_length=20)
    customer_country = String(required=True, max_length=100)
    is_international = Boolean(default=False)
    age_confirmed = Boolean(default=False)
    total_amount = Float(required=True, min_value=0.0)
    total_tickets = Integer(required=True, min_value=0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, event_id, buyer, total_amount, total_tickets):
        """Build a pending order from a validated buyer snapshot."""
        now = datetime.now(UTC)
        return cls(
            event_id=event_id,
            order_number=generate_order_number(now),
            customer_name=buyer.customer_name,
            customer_email=buyer.email,
            customer_phone=buyer.phone,
            customer_address=buyer.address,
            customer_city=buyer.city,
            customer_state=buyer.state,
            customer_zip=buyer.zip_code,
            customer_country=buyer.country,
            is_international=buyer.is_international,
            age_confirmed=buyer.age_confirmed,
            total_amount=total_amount,
            total_tickets=total_tickets,
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )

    def mark_placed(self):
        self.raise_(
            OrderPlaced(
                order_id=str(self.id),
                order_number=self.order_number,
                event_id=str(self.event_id) if self.event_id else None,
                email=self.customer_email,
                total_amount=self.total_amount,
                total_tickets=self.total_tickets,
                placed_at=self.created_at,
            )
        )

    # -------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------
    def change_status(self, new_status):
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status: {new_status}"]}) from None

        previous = self.status
        if previous == target.value:
            return

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                order_number=self.order_number,
                previous_status=previous,
                new_status=target.value,
                changed_at=now,
            )
        )


@raffle.aggregate
class OrderLine:
    order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    item_number = String(max_length=20)
    name = String(max_length=255)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)

    @classmethod
    def from_cart_line(cls, order_id, line):
        return cls(
            order_id=order_id,
            item_id=str(line.item_id),
            item_number=line.item_number,
            name=line.name,
            quantity=line.quantity,
            price=line.unit_price,
        )

    @property
    def line_total(self) -> float:
        return round(self.price * self.quantity, 2)


@raffle.repository(part_of=Order)
class OrderRepository:
    def find_by_order_number(self, order_number) -> Order | None:
        results = self._dao.query.filter(order_number=order_number).all().items
        return results[0] if results else None

    def for_event(self, event_id) -> list[Order]:
        """Orders of an event, newest first."""
        return self._dao.query.filter(event_id=str(event_id)).order_by("-created_at").all().items


@raffle.repository(part_of=OrderLine)
class OrderLineRepository:
    def lines_for_order(self, order_id) -> list[OrderLine]:
        return self._dao.query.filter(order_id=str(order_id)).all().items
