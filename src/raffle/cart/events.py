"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer

from raffle.domain import raffle


@raffle.event(part_of="Cart")
class CartItemAdded:
    """A raffle item was added to the cart (or its quantity bumped by one)."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True)


@raffle.event(part_of="Cart")
class CartQuantityUpdated:
    """The number of draws for a cart line was changed."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@raffle.event(part_of="Cart")
class CartItemRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)


@raffle.event(part_of="Cart")
class CartCleared:
    """Every line was removed, normally after a successful checkout."""

    __version__ = 1

    cart_id = Identifier(required=True)
    lines_removed = Integer(required=True)
