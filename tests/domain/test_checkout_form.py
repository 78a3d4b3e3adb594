"""Tests for CheckoutForm validation and its submit state machine."""

import pytest
from protean.exceptions import ValidationError
from raffle.cart.cart import Cart
from raffle.catalogue.item import RaffleItem
from raffle.catalogue.settings import EventSettings
from raffle.checkout.errors import CheckoutError, SubmissionInProgress
from raffle.checkout.form import CheckoutForm, FormState

VALID_FIELDS = {
    "first_name": "Jane",
    "last_name": "Doe",
    "email": "jane@example.com",
    "confirm_email": "jane@example.com",
    "phone": "555-0100",
    "address": "123 Main St",
    "city": "Springfield",
    "state": "IL",
    "zip_code": "62701",
    "country": "US",
}


def _item(**overrides):
    return RaffleItem.create(event_id="evt-001", item_number="001", name="Prize", price=5.0, **overrides)


def _cart(*items):
    cart = Cart.create(event_id="evt-001")
    for item in items or (_item(),):
        cart.add_item(item)
    return cart


def _form(cart=None, settings=None, **fields):
    values = dict(VALID_FIELDS)
    values.update(fields)
    return CheckoutForm(
        cart if cart is not None else _cart(),
        settings or EventSettings.defaults_for("evt-001"),
        home_country="US",
        **values,
    )


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, buyer):
        self.calls.append(buyer)
        return "receipt"


class TestRequiredFields:
    def test_valid_form(self):
        form = _form()
        assert form.validate() is True
        assert form.status is FormState.VALID
        assert form.errors == {}

    def test_all_missing_fields_reported_together(self):
        form = _form(first_name="", last_name="  ", phone="", city="", zip_code="")
        assert form.validate() is False
        assert {"first_name", "last_name", "phone", "city", "zip_code"} <= set(form.errors)
        assert form.status is FormState.INVALID

    def test_state_required_for_domestic_orders(self):
        form = _form(state="")
        form.validate()
        assert "state" in form.errors

    def test_state_optional_for_international_orders(self):
        settings = EventSettings.defaults_for("evt-001")
        settings.allow_international_orders = True
        form = _form(settings=settings, country="CA", state="")
        assert form.validate() is True
        assert form.is_international is True


class TestEmailConfirmation:
    def test_mismatch_blocks_submission(self):
        form = _form(confirm_email="Jane@example.com")
        submitter = Recorder()
        with pytest.raises(ValidationError) as exc:
            form.submit(submitter)
        assert "confirm_email" in exc.value.messages
        assert submitter.calls == []

    def test_mismatch_detected_while_editing(self):
        form = _form()
        form.update(email="other@example.com")
        assert form.errors["confirm_email"] == ["Email addresses do not match"]
        assert form.can_submit is False

        form.update(confirm_email="other@example.com")
        assert "confirm_email" not in form.errors
        assert form.can_submit is True


class TestCanSubmit:
    def test_blank_form_with_empty_cart_cannot_submit(self):
        form = CheckoutForm(Cart.create(event_id="evt-001"), EventSettings.defaults_for("evt-001"), home_country="US")
        assert form.errors == {}
        assert form.can_submit is False

    def test_fixing_a_field_after_validation_reenables_submit(self):
        form = _form(phone="")
        assert form.validate() is False
        assert form.can_submit is False

        form.update(phone="555-0100")
        assert form.can_submit is True

    def test_missing_age_confirmation_blocks_submit(self):
        form = _form(cart=_cart(_item(is_over_21=True)))
        assert form.can_submit is False

        form.update(age_confirmed=True)
        assert form.can_submit is True


class TestAgeConfirmation:
    def test_required_when_cart_has_age_restricted_item(self):
        form = _form(cart=_cart(_item(is_over_21=True)))
        assert form.validate() is False
        assert "age_confirmed" in form.errors

    def test_confirming_age_unblocks(self):
        form = _form(cart=_cart(_item(is_over_21=True)))
        form.validate()
        form.update(age_confirmed=True)
        assert form.validate() is True

    def test_required_when_event_demands_it(self):
        settings = EventSettings.defaults_for("evt-001")
        settings.require_age_confirmation = True
        form = _form(settings=settings)
        assert form.validate() is False
        assert "age_confirmed" in form.errors

    def test_not_required_otherwise(self):
        assert _form().requires_age_confirmation is False


class TestInternationalOrders:
    def test_rejected_when_event_disallows(self):
        form = _form(country="CA", state="")
        form.validate()
        assert "country" in form.errors

    def test_pickup_only_item_blocks_international_order(self):
        settings = EventSettings.defaults_for("evt-001")
        settings.allow_international_orders = True
        form = _form(cart=_cart(_item(is_local_pickup_only=True)), settings=settings, country="CA", state="")
        assert form.validate() is False
        assert any("local pickup" in message for message in form.errors["country"])

    def test_pickup_only_item_fine_for_domestic_order(self):
        form = _form(cart=_cart(_item(is_local_pickup_only=True)))
        assert form.validate() is True

    def test_switching_abroad_clears_state(self):
        form = _form()
        form.update(country="MX")
        assert form.state == ""


class TestEmptyCart:
    def test_empty_cart_rejected(self):
        cart = Cart.create(event_id="evt-001")
        form = _form(cart=cart)
        assert form.validate() is False
        assert "cart" in form.errors


class TestSubmitStateMachine:
    def test_successful_submit(self):
        form = _form()
        submitter = Recorder()
        assert form.submit(submitter) == "receipt"
        assert form.status is FormState.SUBMITTED
        assert submitter.calls[0].customer_name == "Jane Doe"
        assert form.can_submit is False

    def test_snapshot_trims_values(self):
        form = _form(first_name="  Jane ", state="IL ")
        buyer = form.snapshot()
        assert buyer.first_name == "Jane"
        assert buyer.state == "IL"

    def test_failed_submit_returns_to_editing(self):
        form = _form()

        def failing(_buyer):
            raise RuntimeError("backend down")

        with pytest.raises(RuntimeError):
            form.submit(failing)
        assert form.status is FormState.EDITING
        assert form.can_submit is True

    def test_reentrant_submit_is_refused(self):
        form = _form()
        inner = {}

        def reentrant(_buyer):
            assert form.is_submitting
            assert form.can_submit is False
            with pytest.raises(SubmissionInProgress):
                form.submit(Recorder())
            inner["checked"] = True
            return "receipt"

        form.submit(reentrant)
        assert inner["checked"] is True

    def test_submitting_twice_is_refused(self):
        form = _form()
        form.submit(Recorder())
        with pytest.raises(CheckoutError):
            form.submit(Recorder())

    def test_unknown_field_rejected(self):
        form = _form()
        with pytest.raises(ValidationError):
            form.update(favourite_colour="blue")
