"""BDD tests for checkout and order submission."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, then, when
from raffle.catalogue.item import RaffleItem
from raffle.checkout.backend import RaffleBackend
from raffle.checkout.errors import CheckoutError, OrderSubmissionError, StaleCartError
from raffle.checkout.service import checkout_cart
from raffle.order.order import Order

scenarios("features/checkout.feature")


class FailingLinesBackend(RaffleBackend):
    """Order writes succeed but every order line write fails."""

    def insert_order_lines(self, lines):
        raise RuntimeError("order_lines table unavailable")


def _orders(event):
    return current_domain.repository_for(Order).for_event(str(event.id))


def _checkout(backend, cart_id, outcome, **fields):
    try:
        outcome["result"] = checkout_cart(backend, cart_id, **fields)
    except (ValidationError, CheckoutError) as exc:
        outcome["exc"] = exc


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("the order line store is failing", target_fixture="backend")
def _():
    return FailingLinesBackend()


@given(parsers.cfparse('the price of "{name}" changes to {price:f}'))
def _(catalogue, name, price):
    item = catalogue[name]
    item.update_details(price=price)
    current_domain.repository_for(RaffleItem).add(item)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the buyer checks out with valid details")
def _(backend, cart_id, buyer_fields, outcome):
    _checkout(backend, cart_id, outcome, **buyer_fields)


@when("the buyer checks out with valid details and confirms their age")
def _(backend, cart_id, buyer_fields, outcome):
    _checkout(backend, cart_id, outcome, age_confirmed=True, **buyer_fields)


@when(parsers.cfparse('the buyer checks out from "{country}"'))
def _(backend, cart_id, buyer_fields, outcome, country):
    fields = dict(buyer_fields, country=country, state="ON", zip_code="M5V 2T6", city="Toronto")
    _checkout(backend, cart_id, outcome, **fields)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the checkout succeeds")
def _(outcome):
    assert outcome["exc"] is None, f"Checkout failed with {outcome['exc']!r}"
    assert outcome["result"].order_number


@then("the checkout fails with a submission error")
def _(outcome):
    assert isinstance(outcome["exc"], OrderSubmissionError)
    assert outcome["result"] is None


@then("the checkout fails because the cart is stale")
def _(outcome, catalogue):
    assert isinstance(outcome["exc"], StaleCartError)
    assert [line["item_id"] for line in outcome["exc"].lines] == [str(catalogue["Kayak"].id)]


@then(parsers.cfparse("exactly {count:d} order exists with total {total:f} and {tickets:d} ticket"))
def _(event, count, total, tickets):
    orders = _orders(event)
    assert len(orders) == count
    assert orders[0].total_amount == pytest.approx(total)
    assert orders[0].total_tickets == tickets
    assert orders[0].status == "pending"


@then("no order exists")
def _(event):
    assert _orders(event) == []


@then(parsers.cfparse('the order has a line for "{name}"'))
def _(backend, outcome, catalogue, name):
    lines = backend.fetch_order_lines(outcome["result"].order_id)
    assert [str(line.item_id) for line in lines] == [str(catalogue[name].id)]
    assert lines[0].quantity == 1


@then("the placed order is international with no state")
def _(event):
    order = _orders(event)[0]
    assert order.is_international is True
    assert order.customer_country == "CA"
    assert order.customer_state is None
