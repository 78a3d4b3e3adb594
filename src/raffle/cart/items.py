"""Cart line management — commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from raffle.cart.cart import Cart
from raffle.catalogue.item import RaffleItem
from raffle.domain import raffle


@raffle.command(part_of="Cart")
class AddToCart:
    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)


@raffle.command(part_of="Cart")
class UpdateCartQuantity:
    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    delta = Integer(required=True)


@raffle.command(part_of="Cart")
class RemoveFromCart:
    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)


@raffle.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        item = current_domain.repository_for(RaffleItem).get(command.item_id)

        if not item.is_available:
            raise ValidationError({"item_id": ["This item is no longer available"]})
        if str(item.event_id) != str(cart.event_id):
            raise ValidationError({"item_id": ["This item belongs to a different raffle event"]})

        cart.add_item(item)
        repo.add(cart)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        cart.update_quantity(item_id=command.item_id, delta=command.delta)
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        cart.remove_item(item_id=command.item_id)
        repo.add(cart)
