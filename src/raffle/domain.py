"""Raffle bounded context — catalogue, cart, checkout and orders.

Raffle events own a catalogue of items. Buyers collect items into a cart,
fill in the checkout form, and the submission turns the cart into an order
with one line per cart line.
"""

from protean.domain import Domain

from raffle.utils.logging import configure_logging, get_logger

configure_logging(log_dir="logs", log_file_prefix="raffle")

logger = get_logger(__name__)

# Domain Composition Root
raffle = Domain(name="raffle")
