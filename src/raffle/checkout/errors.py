"""Errors raised by the checkout form and order submission."""


class CheckoutError(Exception):
    """Base class for checkout failures that are not field validation errors."""


class SubmissionInProgress(CheckoutError):
    def __init__(self):
        super().__init__("Your order is already being submitted")


class StaleCartError(CheckoutError):
    """The catalogue changed since the cart was built.

    ``lines`` holds one ``{"item_id", "name", "reason"}`` dict per offending
    cart line.
    """

    def __init__(self, lines):
        self.lines = lines
        super().__init__("Some items in your cart have changed. Please review your cart and try again.")


class OrderSubmissionError(CheckoutError):
    """A backend write failed; the buyer may retry."""

    def __init__(self, order_id=None, order_number=None):
        self.order_id = order_id
        self.order_number = order_number
        super().__init__("There was an error submitting your order. Please try again.")
