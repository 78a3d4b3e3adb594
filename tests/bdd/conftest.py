"""Shared BDD fixtures and step definitions for the raffle storefront."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when
from raffle.cart.cart import Cart
from raffle.cart.items import AddToCart
from raffle.cart.management import CreateCart
from raffle.catalogue.settings_management import SaveEventSettings
from raffle.checkout.backend import RaffleBackend


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def catalogue():
    """Stored raffle items keyed by name."""
    return {}


@pytest.fixture()
def backend():
    return RaffleBackend()


@pytest.fixture()
def outcome():
    """Container for the result or error of the last action."""
    return {"result": None, "exc": None}


@pytest.fixture()
def load_cart(cart_id):
    """Re-read the buyer's cart from its repository."""
    return lambda: current_domain.repository_for(Cart).get(cart_id)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a raffle event is running", target_fixture="event")
def _(running_event):
    return running_event


@given(parsers.cfparse('the catalogue has an item "{name}" priced {price:f}'))
def _(make_item, catalogue, name, price):
    catalogue[name] = make_item(name=name, price=price)


@given(parsers.cfparse('the catalogue has an age-restricted item "{name}" priced {price:f}'))
def _(make_item, catalogue, name, price):
    catalogue[name] = make_item(name=name, price=price, is_over_21=True)


@given(parsers.cfparse('the catalogue has a pickup-only item "{name}" priced {price:f}'))
def _(make_item, catalogue, name, price):
    catalogue[name] = make_item(name=name, price=price, is_local_pickup_only=True)


@given("the buyer has an empty cart", target_fixture="cart_id")
def _(event):
    return current_domain.process(CreateCart(event_id=str(event.id)), asynchronous=False)


@given(parsers.cfparse('the buyer added "{name}" to the cart'))
def _(cart_id, catalogue, name):
    current_domain.process(AddToCart(cart_id=cart_id, item_id=str(catalogue[name].id)), asynchronous=False)


@given("international orders are allowed")
def _(event):
    current_domain.process(
        SaveEventSettings(event_id=str(event.id), allow_international_orders=True),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the buyer adds "{name}" to the cart'))
def _(cart_id, catalogue, name, outcome):
    try:
        current_domain.process(AddToCart(cart_id=cart_id, item_id=str(catalogue[name].id)), asynchronous=False)
    except ValidationError as exc:
        outcome["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} line"))
def _(load_cart, count):
    assert len(load_cart().lines) == count


@then(parsers.cfparse("the cart has {count:d} lines"))
def _(load_cart, count):
    assert len(load_cart().lines) == count


@then(parsers.cfparse('the cart action is rejected with an error on "{field}"'))
def _(outcome, field):
    assert isinstance(outcome["exc"], ValidationError), "Expected a validation error but none was raised"
    assert field in outcome["exc"].messages


@then(parsers.cfparse('the checkout is rejected with an error on "{field}"'))
def _(outcome, field):
    assert isinstance(outcome["exc"], ValidationError), f"Expected a validation error, got {outcome['exc']!r}"
    assert field in outcome["exc"].messages


@then("the cart is empty")
def _(load_cart):
    assert load_cart().is_empty


@then(parsers.cfparse("the cart total is {total:f}"))
def _(load_cart, total):
    assert load_cart().totals().total_price == pytest.approx(total)
