"""Checkout form — buyer details, field validation and the submit state machine.

State machine::

    EDITING → VALIDATING → VALID → SUBMITTING → SUBMITTED
                         ↘ INVALID → EDITING      ↘ EDITING (submission failed)

Every rule is evaluated on each validation pass so the buyer sees all
problems at once. The form never writes anything itself: ``submit`` hands a
``BuyerDetails`` snapshot to the submitter it is given.
"""

from dataclasses import dataclass
from enum import Enum

from protean.exceptions import ValidationError

from raffle import config
from raffle.checkout.errors import CheckoutError, SubmissionInProgress


class FormState(Enum):
    EDITING = "editing"
    VALIDATING = "validating"
    VALID = "valid"
    INVALID = "invalid"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"


REQUIRED_FIELDS = {
    "first_name": "First name is required",
    "last_name": "Last name is required",
    "email": "Email is required",
    "phone": "Phone is required",
    "address": "Address is required",
    "city": "City is required",
    "zip_code": "ZIP / postal code is required",
    "country": "Country is required",
}

FORM_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "confirm_email",
    "phone",
    "address",
    "city",
    "state",
    "zip_code",
    "country",
    "age_confirmed",
)

EMAIL_MISMATCH = "Email addresses do not match"


@dataclass(frozen=True)
class BuyerDetails:
    first_name: str
    last_name: str
    email: str
    phone: str
    address: str
    city: str
    state: str | None
    zip_code: str
    country: str
    is_international: bool
    age_confirmed: bool

    @property
    def customer_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class CheckoutForm:
    def __init__(self, cart, settings, home_country=None, **fields):
        self.cart = cart
        self.settings = settings
        self.home_country = home_country or config.HOME_COUNTRY

        self.first_name = ""
        self.last_name = ""
        self.email = ""
        self.confirm_email = ""
        self.phone = ""
        self.address = ""
        self.city = ""
        self.state = ""
        self.zip_code = ""
        self.country = self.home_country
        self.age_confirmed = False

        self.status = FormState.EDITING
        self.errors: dict[str, list[str]] = {}

        if fields:
            self.update(**fields)

    # -------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------
    def update(self, **changes):
        """Apply field edits and return to EDITING.

        Changing either email field re-checks that the two match. Switching
        to a foreign country clears the state field.
        """
        unknown = set(changes) - set(FORM_FIELDS)
        if unknown:
            raise ValidationError({name: ["Unknown checkout field"] for name in sorted(unknown)})

        for name, value in changes.items():
            if value is None:
                continue
            if name == "age_confirmed":
                value = bool(value)
            setattr(self, name, value)

        if "country" in changes and self.is_international:
            self.state = ""

        if "email" in changes or "confirm_email" in changes:
            self._check_email_match()

        self.status = FormState.EDITING

    def _check_email_match(self):
        if self.email != self.confirm_email:
            self.errors["confirm_email"] = [EMAIL_MISMATCH]
        else:
            self.errors.pop("confirm_email", None)

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def is_international(self) -> bool:
        return bool(self.country) and self.country != self.home_country

    @property
    def requires_age_confirmation(self) -> bool:
        return self.cart.has_age_restricted_selection() or bool(self.settings.require_age_confirmation)

    @property
    def is_submitting(self) -> bool:
        return self.status is FormState.SUBMITTING

    @property
    def can_submit(self) -> bool:
        """False while a submission is in flight or done, or any rule currently fails."""
        if self.status in (FormState.SUBMITTING, FormState.SUBMITTED):
            return False
        return not self.collect_errors()

    # -------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------
    def collect_errors(self) -> dict[str, list[str]]:
        errors: dict[str, list[str]] = {}

        def add(field, message):
            errors.setdefault(field, []).append(message)

        for field, message in REQUIRED_FIELDS.items():
            value = getattr(self, field)
            if not value or not str(value).strip():
                add(field, message)

        if not self.is_international and not (self.state or "").strip():
            add("state", "State is required")

        if self.email != self.confirm_email:
            add("confirm_email", EMAIL_MISMATCH)

        if self.requires_age_confirmation and not self.age_confirmed:
            add("age_confirmed", "You must confirm you are 21 or older")

        if self.is_international:
            if not self.settings.allow_international_orders:
                add("country", "International orders are not accepted for this event")
            if self.cart.has_pickup_only_selection():
                add("country", "Your cart contains local pickup only items, which cannot be shipped internationally")

        if self.cart.is_empty:
            add("cart", "Your cart is empty")

        return errors

    def validate(self) -> bool:
        self.status = FormState.VALIDATING
        self.errors = self.collect_errors()
        self.status = FormState.INVALID if self.errors else FormState.VALID
        return not self.errors

    # -------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------
    def snapshot(self) -> BuyerDetails:
        return BuyerDetails(
            first_name=self.first_name.strip(),
            last_name=self.last_name.strip(),
            email=self.email.strip(),
            phone=self.phone.strip(),
            address=self.address.strip(),
            city=self.city.strip(),
            state=(self.state or "").strip() or None,
            zip_code=self.zip_code.strip(),
            country=self.country,
            is_international=self.is_international,
            age_confirmed=self.age_confirmed,
        )

    def submit(self, submitter):
        """Validate and hand the buyer snapshot to ``submitter``.

        Raises ``SubmissionInProgress`` when called again before the first
        call returns, and ``ValidationError`` with every field error when the
        form is invalid. On failure the form goes back to EDITING.
        """
        if self.status is FormState.SUBMITTING:
            raise SubmissionInProgress()
        if self.status is FormState.SUBMITTED:
            raise CheckoutError("This order has already been submitted")

        if not self.validate():
            raise ValidationError(dict(self.errors))

        self.status = FormState.SUBMITTING
        try:
            receipt = submitter(self.snapshot())
        except Exception:
            self.status = FormState.EDITING
            raise

        self.status = FormState.SUBMITTED
        return receipt
