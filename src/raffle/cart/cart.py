"""Cart aggregate — the buyer's in-progress selection for one browsing session.

The cart holds at most one line per raffle item. Adding an item that is
already in the cart bumps its quantity instead of adding a second line. Each
line copies the item's display fields when it is first added, so later
catalogue edits do not rewrite lines already in the cart.

Quantities never drop below a configurable minimum (1 by default); a line
leaves the cart only through ``remove_item`` or ``clear``.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text

from raffle import config
from raffle.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from raffle.domain import raffle


@dataclass(frozen=True)
class CartTotals:
    total_tickets: int
    total_price: float


@raffle.entity(part_of="Cart")
class CartLine:
    item_id = Identifier(required=True)
    item_number = String(max_length=20)
    name = String(required=True, max_length=255)
    description = Text()
    unit_price = Float(required=True, min_value=0.0)
    image_url = String(max_length=500)
    item_value = Float()
    is_over_21 = Boolean(default=False)
    is_local_pickup_only = Boolean(default=False)
    quantity = Integer(required=True, min_value=0)
    added_at = DateTime()


@raffle.aggregate
class Cart:
    session_id = String(max_length=255)
    event_id = Identifier(required=True)
    lines = HasMany(CartLine)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, event_id, session_id=None):
        now = datetime.now(UTC)
        return cls(
            event_id=event_id,
            session_id=session_id,
            created_at=now,
            updated_at=now,
        )

    def line_for(self, item_id):
        return next((line for line in self.lines if str(line.item_id) == str(item_id)), None)

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def add_item(self, item):
        """Add one draw of ``item``, creating its line on first add."""
        existing = self.line_for(item.id)
        now = datetime.now(UTC)

        if existing:
            existing.quantity += 1
            quantity = existing.quantity
        else:
            self.add_lines(
                CartLine(
                    item_id=str(item.id),
                    item_number=item.item_number,
                    name=item.name,
                    description=item.description,
                    unit_price=item.price,
                    image_url=item.primary_image_url,
                    item_value=item.item_value,
                    is_over_21=bool(item.is_over_21),
                    is_local_pickup_only=bool(item.is_local_pickup_only),
                    quantity=1,
                    added_at=now,
                )
            )
            quantity = 1

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                item_id=str(item.id),
                quantity=quantity,
            )
        )

    def update_quantity(self, item_id, delta, minimum=None):
        """Shift a line's quantity by ``delta``, never going below ``minimum``."""
        minimum = config.CART_MIN_QUANTITY if minimum is None else minimum

        line = self.line_for(item_id)
        if line is None:
            raise ValidationError({"item_id": ["Item not found in cart"]})

        previous_quantity = line.quantity
        new_quantity = max(minimum, previous_quantity + delta)
        if new_quantity == previous_quantity:
            return

        line.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_item(self, item_id):
        """Delete the line for ``item_id``. Removing an absent item does nothing."""
        line = self.line_for(item_id)
        if line is None:
            return

        self.remove_lines(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                item_id=str(item_id),
            )
        )

    def clear(self):
        removed = len(self.lines)
        for line in list(self.lines):
            self.remove_lines(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                lines_removed=removed,
            )
        )

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def is_empty(self) -> bool:
        return not any(line.quantity > 0 for line in self.lines)

    def totals(self) -> CartTotals:
        return CartTotals(
            total_tickets=sum(line.quantity for line in self.lines),
            total_price=round(sum(line.unit_price * line.quantity for line in self.lines), 2),
        )

    def has_age_restricted_selection(self) -> bool:
        return any(line.is_over_21 and line.quantity > 0 for line in self.lines)

    def has_pickup_only_selection(self) -> bool:
        return any(line.is_local_pickup_only and line.quantity > 0 for line in self.lines)
