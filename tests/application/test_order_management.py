"""Application tests for admin order status changes and order listings."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from raffle.cart.cart import Cart
from raffle.checkout.backend import RaffleBackend
from raffle.checkout.service import checkout_cart
from raffle.order.management import ChangeOrderStatus
from raffle.order.order import Order


def _place_order(running_event, make_item, buyer_fields):
    cart = Cart.create(event_id=str(running_event.id))
    cart.add_item(make_item())
    current_domain.repository_for(Cart).add(cart)
    receipt = checkout_cart(RaffleBackend(), cart.id, **buyer_fields)
    return receipt.order_id


class TestChangeOrderStatus:
    def test_mark_paid(self, running_event, make_item, buyer_fields):
        order_id = _place_order(running_event, make_item, buyer_fields)
        current_domain.process(ChangeOrderStatus(order_id=order_id, status="paid"), asynchronous=False)
        assert current_domain.repository_for(Order).get(order_id).status == "paid"

    def test_refund_can_be_corrected(self, running_event, make_item, buyer_fields):
        order_id = _place_order(running_event, make_item, buyer_fields)
        for status in ("paid", "refunded", "paid"):
            current_domain.process(ChangeOrderStatus(order_id=order_id, status=status), asynchronous=False)

        assert current_domain.repository_for(Order).get(order_id).status == "paid"

    def test_unknown_status_is_rejected(self, running_event, make_item, buyer_fields):
        order_id = _place_order(running_event, make_item, buyer_fields)

        with pytest.raises(ValidationError):
            current_domain.process(ChangeOrderStatus(order_id=order_id, status="shipped"), asynchronous=False)
        assert current_domain.repository_for(Order).get(order_id).status == "pending"


class TestOrderListing:
    def test_for_event_newest_first(self, running_event, make_item, buyer_fields):
        first = _place_order(running_event, make_item, buyer_fields)
        second = _place_order(running_event, make_item, buyer_fields)

        orders = current_domain.repository_for(Order).for_event(running_event.id)
        assert [str(o.id) for o in orders] == [second, first]

    def test_lines_for_order(self, running_event, make_item, buyer_fields):
        order_id = _place_order(running_event, make_item, buyer_fields)
        lines = RaffleBackend().fetch_order_lines(order_id)
        assert len(lines) == 1
        assert lines[0].quantity == 1
