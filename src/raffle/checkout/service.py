"""Checkout entry point used by the HTTP layer."""

from raffle.checkout.form import CheckoutForm
from raffle.checkout.submission import OrderReceipt, OrderSubmission


def checkout_cart(backend, cart_id, home_country=None, **fields) -> OrderReceipt:
    """Load the cart, validate the buyer's fields and submit the order."""
    cart = backend.load_cart(cart_id)
    settings = backend.fetch_event_settings(cart.event_id)

    form = CheckoutForm(cart, settings, home_country=home_country, **fields)
    return form.submit(OrderSubmission(backend, cart))
