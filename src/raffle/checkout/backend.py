"""Backend context handed to checkout and order submission.

The object exposes the read and write contracts the checkout flow relies on,
so the flow never reaches for global state and tests can substitute a
backend that fails at a chosen step.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from raffle.cart.cart import Cart
from raffle.catalogue.item import RaffleItem
from raffle.catalogue.settings import EventSettings
from raffle.order.order import Order, OrderLine


class RaffleBackend:
    def __init__(self, domain=None):
        self.domain = domain or current_domain

    # -------------------------------------------------------------------
    # Catalogue reads
    # -------------------------------------------------------------------
    def fetch_available_items(self, event_id) -> list[RaffleItem]:
        return self.domain.repository_for(RaffleItem).available_for_event(event_id)

    def fetch_item(self, item_id) -> RaffleItem | None:
        try:
            return self.domain.repository_for(RaffleItem).get(item_id)
        except ObjectNotFoundError:
            return None

    def fetch_event_settings(self, event_id) -> EventSettings:
        return self.domain.repository_for(EventSettings).for_event(event_id)

    # -------------------------------------------------------------------
    # Cart
    # -------------------------------------------------------------------
    def load_cart(self, cart_id) -> Cart:
        return self.domain.repository_for(Cart).get(cart_id)

    def save_cart(self, cart: Cart) -> None:
        self.domain.repository_for(Cart).add(cart)

    # -------------------------------------------------------------------
    # Order writes and reads
    # -------------------------------------------------------------------
    def insert_order(self, order: Order) -> Order:
        return self.domain.repository_for(Order).add(order)

    def insert_order_lines(self, lines: list[OrderLine]) -> None:
        repo = self.domain.repository_for(OrderLine)
        for line in lines:
            repo.add(line)

    def save_order(self, order: Order) -> None:
        self.domain.repository_for(Order).add(order)

    def delete_order(self, order_id) -> None:
        """Delete an order together with any lines already written for it."""
        line_repo = self.domain.repository_for(OrderLine)
        for line in line_repo.lines_for_order(order_id):
            line_repo._dao.delete(line)

        order_repo = self.domain.repository_for(Order)
        order_repo._dao.delete(order_repo.get(order_id))

    def fetch_order_by_number(self, order_number) -> Order | None:
        return self.domain.repository_for(Order).find_by_order_number(order_number)

    def fetch_order_lines(self, order_id) -> list[OrderLine]:
        return self.domain.repository_for(OrderLine).lines_for_order(order_id)
