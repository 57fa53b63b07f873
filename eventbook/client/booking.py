"""
Multi-step booking flow, driven from the client.

    SELECTING_SLOT -> ENTERING_ADDRESS -> CHOOSING_PAYMENT -> SUBMITTED

Progress lives in the LocalStore under `bookingData`, so a flow can be
resumed after a restart. Nothing reaches the server until the address step
(profile save) and the payment step (order creation).

Payment is simulated: Cash on Delivery leaves the order PENDING, every other
method is recorded as COMPLETED without contacting a gateway.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from eventbook.client.api import ApiClient
from eventbook.client.store import BOOKING_KEY

LOGIN_REQUIRED = "LOGIN_REQUIRED"
SELECTING_SLOT = "SELECTING_SLOT"
ENTERING_ADDRESS = "ENTERING_ADDRESS"
CHOOSING_PAYMENT = "CHOOSING_PAYMENT"
SUBMITTED = "SUBMITTED"

CASH_ON_DELIVERY = "Cash on Delivery"
PAYMENT_METHODS = ["Online Payment", "UPI Payment", CASH_ON_DELIVERY]

MIN_LEAD_TIME = timedelta(hours=1)
ADDRESS_FIELDS = ("country", "state", "city", "pinCode", "address")


class BookingStepError(Exception):
    """The flow is not at the step the caller tried to run."""

    def __init__(self, message: str, redirect_to: str):
        super().__init__(message)
        self.message = message
        self.redirect_to = redirect_to


class BookingInputError(ValueError):
    """Input rejected on the client before any request is made."""


def _utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class BookingWorkflow:
    def __init__(self, api: ApiClient, clock=None):
        self.api = api
        self.store = api.store
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.last_order: Optional[Dict[str, Any]] = None

    @property
    def booking_data(self) -> Optional[Dict[str, Any]]:
        return self.store.get(BOOKING_KEY)

    def _user(self) -> Dict[str, Any]:
        user = self.api.current_user
        if not user or user.get("role") != "USER":
            raise BookingStepError("Log in as a user to book events", LOGIN_REQUIRED)
        return user

    def current_step(self) -> str:
        """
        Work out where the flow stands from what is stored.

        Missing slot data sends the user back to slot selection; a slot with
        no saved address (country and city) sends them to the address step.
        """
        user = self.api.current_user
        if not user or user.get("role") != "USER":
            return LOGIN_REQUIRED

        data = self.booking_data
        if not data:
            return SUBMITTED if self.last_order is not None else SELECTING_SLOT

        if not data.get("eventId") or not data.get("selectedDateTime") or data.get("finalCost") is None:
            return SELECTING_SLOT

        address = data.get("address") or {}
        if not address.get("country") or not address.get("city"):
            return ENTERING_ADDRESS

        return CHOOSING_PAYMENT

    def _expect(self, step: str) -> None:
        actual = self.current_step()
        if actual != step:
            raise BookingStepError(f"Booking is at {actual}, not {step}", actual)

    # --- STEP 1: SLOT ---
    def select_slot(self, event: Dict[str, Any], selected: datetime, now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Start a booking for `event` at `selected` (naive values are UTC).

        Raises:
            BookingInputError: The slot is less than an hour away.
        """
        self._user()
        now = _utc(now or self.clock())
        selected = _utc(selected)

        if selected < now + MIN_LEAD_TIME:
            raise BookingInputError("Please select a date and time at least one hour from now")

        data = {
            "eventId": event["id"],
            "selectedDateTime": selected.isoformat(),
            "finalCost": event["price"],
        }
        self.last_order = None
        self.store.set(BOOKING_KEY, data)
        return data

    # --- STEP 2: ADDRESS ---
    def submit_address(self, address: Dict[str, Any]) -> Dict[str, Any]:
        """
        Save the address as the user's profile, then keep it with the booking.

        The profile is saved whether or not the booking is ever paid for.

        Raises:
            BookingInputError: Country or city missing.
            ApiError / NetworkError: The profile could not be saved; the
                stored booking is left unchanged.
        """
        user = self._user()
        if self.current_step() not in (ENTERING_ADDRESS, CHOOSING_PAYMENT):
            raise BookingStepError("Select a date and time first", SELECTING_SLOT)

        if not address.get("country") or not address.get("city"):
            raise BookingInputError("Country and city are required")

        cleaned = {field: address.get(field) or "" for field in ADDRESS_FIELDS}
        self.api.update_user_profile(user["id"], user.get("name"), cleaned)

        data = dict(self.booking_data)
        data["address"] = cleaned
        self.store.set(BOOKING_KEY, data)
        return data

    # --- STEP 3: PAYMENT ---
    def pay(self, method: str) -> Dict[str, Any]:
        """
        Create the order with the chosen payment method and finish the flow.

        Raises:
            BookingStepError: Slot or address missing (see `redirect_to`).
            BookingInputError: Unknown payment method.
            ApiError / NetworkError: Order not created; booking data is kept
                so the user can retry.
        """
        user = self._user()
        self._expect(CHOOSING_PAYMENT)

        if method not in PAYMENT_METHODS:
            raise BookingInputError(f"Payment method must be one of: {', '.join(PAYMENT_METHODS)}")

        data = self.booking_data
        payload = {
            "userId": user["id"],
            "eventId": data["eventId"],
            "bookingDate": _utc(self.clock()).isoformat(),
            "selectedDateTime": data["selectedDateTime"],
            "finalCost": data["finalCost"],
            "paymentMethod": method,
            "paymentStatus": "PENDING" if method == CASH_ON_DELIVERY else "COMPLETED",
        }

        order = self.api.create_order(payload)
        self.store.remove(BOOKING_KEY)
        self.last_order = order
        return order

    def cancel(self) -> None:
        self.store.remove(BOOKING_KEY)
