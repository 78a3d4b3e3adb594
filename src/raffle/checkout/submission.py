"""Order submission — turns a cart and a validated buyer snapshot into an order.

The order and its lines are two separate writes with no transaction around
them. When the line write fails the order is deleted again; if that delete
fails too the order is left behind with no lines and logged at error level
so an operator can clean it up.
"""

from dataclasses import dataclass

import structlog

from raffle.checkout.errors import OrderSubmissionError, StaleCartError
from raffle.order.order import Order, OrderLine

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class OrderReceipt:
    order_id: str
    order_number: str
    total_amount: float
    total_tickets: int


class OrderSubmission:
    """Callable submitter passed to ``CheckoutForm.submit``."""

    def __init__(self, backend, cart):
        self.backend = backend
        self.cart = cart

    def __call__(self, buyer) -> OrderReceipt:
        return self.submit(buyer)

    def stale_lines(self) -> list[dict]:
        """Cart lines whose item vanished, became unavailable or changed price."""
        stale = []
        for line in self.cart.lines:
            item = self.backend.fetch_item(line.item_id)
            if item is None:
                reason = "This item no longer exists"
            elif not item.is_available:
                reason = "This item is no longer available"
            elif round(item.price, 2) != round(line.unit_price, 2):
                reason = f"The price changed from {line.unit_price:.2f} to {item.price:.2f}"
            else:
                continue
            stale.append({"item_id": str(line.item_id), "name": line.name, "reason": reason})
        return stale

    def submit(self, buyer) -> OrderReceipt:
        log = logger.bind(cart_id=str(self.cart.id))

        stale = self.stale_lines()
        if stale:
            log.warning("checkout_stale_cart", stale_items=[s["item_id"] for s in stale])
            raise StaleCartError(stale)

        totals = self.cart.totals()
        order = Order.place(
            event_id=self.cart.event_id,
            buyer=buyer,
            total_amount=totals.total_price,
            total_tickets=totals.total_tickets,
        )
        log = log.bind(order_id=str(order.id), order_number=order.order_number)
        lines = [OrderLine.from_cart_line(order.id, line) for line in self.cart.lines if line.quantity > 0]

        try:
            self.backend.insert_order(order)
        except Exception as exc:
            log.exception("order_insert_failed")
            raise OrderSubmissionError() from exc

        try:
            self.backend.insert_order_lines(lines)
            order.mark_placed()
            self.backend.save_order(order)
        except Exception as exc:
            log.exception("order_lines_insert_failed", line_count=len(lines))
            self._compensate(order, log)
            raise OrderSubmissionError(order_id=str(order.id), order_number=order.order_number) from exc

        self.cart.clear()
        try:
            self.backend.save_cart(self.cart)
        except Exception:
            log.exception("cart_not_cleared")

        log.info("order_placed", total_amount=totals.total_price, total_tickets=totals.total_tickets)
        return OrderReceipt(
            order_id=str(order.id),
            order_number=order.order_number,
            total_amount=totals.total_price,
            total_tickets=totals.total_tickets,
        )

    def _compensate(self, order, log):
        try:
            self.backend.delete_order(order.id)
        except Exception:
            log.exception("orphaned_order_not_deleted")
        else:
            log.info("order_rolled_back")
