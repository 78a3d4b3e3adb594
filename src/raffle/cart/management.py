"""Cart management — creating a cart and emptying it."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from raffle.cart.cart import Cart
from raffle.catalogue.event import RaffleEvent
from raffle.domain import raffle


@raffle.command(part_of="Cart")
class CreateCart:
    """Create an empty cart for a browsing session."""

    event_id = Identifier(required=True)
    session_id = String(max_length=255)


@raffle.command(part_of="Cart")
class ClearCart:
    cart_id = Identifier(required=True)


@raffle.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(CreateCart)
    def create_cart(self, command):
        current_domain.repository_for(RaffleEvent).get(command.event_id)

        cart = Cart.create(
            event_id=command.event_id,
            session_id=command.session_id,
        )
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        cart.clear()
        repo.add(cart)
