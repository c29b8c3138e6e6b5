"""Booking flow: validate -> price -> pay -> persist -> notify.

Each step runs only after the previous one succeeded. Nothing is retried
automatically; the parent resubmits the form to try again.
"""
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from summercamp.core.config import settings
from summercamp.core.errors import BookingNotSavedError, BookingValidationError, PaymentFailedError
from summercamp.models.booking import Booking
from summercamp.services.booking_service import create_booking
from summercamp.services.draft import BookingDraft
from summercamp.services.eligibility import AccessPeriod, access_period
from summercamp.services.notification_service import send_booking_confirmation
from summercamp.services.payment_gateway import (
    USER_MESSAGES,
    BillingDetails,
    GatewayError,
    PaymentErrorCode,
    PaymentGateway,
    PaymentIntent,
    SandboxGateway,
    intent_id_from_secret,
)
from summercamp.services.pricing import PricingResult, to_minor_units
from summercamp.services.validation import validate_booking

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Quote:
    errors: dict[str, str]
    pricing: Optional[PricingResult]
    access: Optional[AccessPeriod]

    @property
    def valid(self) -> bool:
        return not self.errors


def quote(draft: BookingDraft, today: date) -> Quote:
    errors = validate_booking(draft, today)
    access = None
    if draft.plan is not None and draft.start_date is not None and "startDate" not in errors:
        access = access_period(draft.plan, draft.location, draft.start_date, today)
    return Quote(errors=errors, pricing=draft.pricing, access=access)


def _require_valid(draft: BookingDraft, today: date) -> PricingResult:
    q = quote(draft, today)
    if not q.valid or q.pricing is None:
        raise BookingValidationError(q.errors or {"children": "Please add at least one child"})
    return q.pricing


def start_payment(gateway: PaymentGateway, draft: BookingDraft, today: date) -> tuple[PaymentIntent, PricingResult]:
    """Open a payment intent for the server-computed total of a valid draft."""
    pricing = _require_valid(draft, today)
    intent = gateway.create_intent(
        pricing.final_total,
        settings.CURRENCY,
        metadata={
            "product": draft.product.value,
            "location": draft.location.value,
            "plan": draft.plan.name,
            "children": str(len(draft.children)),
            "parent_email": draft.parent_email,
        },
    )
    logger.info("payment intent %s opened for %s %s", intent.id, pricing.final_total, settings.CURRENCY)
    return intent, pricing


def _provider_name(gateway: PaymentGateway) -> str:
    return "sandbox" if isinstance(gateway, SandboxGateway) else "stripe"


def save_paid_booking(db: Session, draft: BookingDraft, pricing: PricingResult, payment_id: str,
                      provider: str = "stripe") -> Booking:
    """Persist after a successful charge. Any failure here is the severe 'paid but not saved' case."""
    try:
        booking = create_booking(db, draft, pricing, payment_id, provider=provider)
    except Exception:
        db.rollback()
        logger.exception("payment %s succeeded but booking could not be saved", payment_id)
        raise BookingNotSavedError(payment_id, settings.SUPPORT_EMAIL)
    send_booking_confirmation(db, booking)
    return booking


def _fail(code: PaymentErrorCode, message: str = "") -> PaymentFailedError:
    return PaymentFailedError(code.value, message or USER_MESSAGES[code])


def checkout(db: Session, gateway: PaymentGateway, draft: BookingDraft, *, client_secret: str,
             payment_method: str, billing: BillingDetails | None, today: date) -> Booking:
    pricing = _require_valid(draft, today)
    expected = to_minor_units(pricing.final_total)

    # the intent must be for this draft's total before any card is charged
    intent_id = intent_id_from_secret(client_secret)
    try:
        intent = gateway.get_intent(intent_id)
    except GatewayError as e:
        logger.warning("lookup of payment %s failed: %s", intent_id, e)
        raise _fail(PaymentErrorCode.GATEWAY_UNAVAILABLE) from e
    if intent is None:
        raise _fail(PaymentErrorCode.PAYMENT_NOT_FOUND)
    if intent.amount_minor != expected:
        logger.warning("payment %s is for %s but booking totals %s; not charging", intent_id,
                       intent.amount_minor, expected)
        raise _fail(PaymentErrorCode.AMOUNT_MISMATCH)

    billing = billing or BillingDetails(
        name=draft.parent_name,
        email=draft.parent_email,
        phone=draft.parent_phone,
        address_line1=draft.parent_address,
    )
    result = gateway.confirm(client_secret, payment_method, billing)
    if not result.succeeded:
        code = (result.error_code or PaymentErrorCode.PROCESSING_ERROR).value
        logger.warning("payment %s failed: %s", result.payment_id or "-", code)
        raise PaymentFailedError(code, result.message)

    if result.amount_minor and result.amount_minor != expected:
        logger.error("payment %s charged %s but booking totals %s", result.payment_id, result.amount_minor, expected)
        raise BookingNotSavedError(result.payment_id, settings.SUPPORT_EMAIL)

    return save_paid_booking(db, draft, pricing, result.payment_id, provider=_provider_name(gateway))


def find_booking_by_payment(db: Session, payment_id: str) -> Optional[Booking]:
    if not payment_id:
        return None
    return db.query(Booking).filter(Booking.payment_id == payment_id).first()


def _same_booking(booking: Booking, draft: BookingDraft, pricing: PricingResult) -> bool:
    return (
        booking.product == draft.product.value
        and booking.location == draft.location.value
        and booking.plan_name == draft.plan.name
        and booking.start_date == draft.start_date
        and booking.parent_email == draft.parent_email.lower()
        and booking.children_count == len(draft.children)
        and Decimal(booking.final_total) == pricing.final_total
    )


def record_booking(db: Session, gateway: PaymentGateway, draft: BookingDraft, payment_id: str,
                   today: date) -> Booking:
    """`POST /api/bookings`: the client confirmed the card itself and hands over the payment id.

    The payment is looked up with the gateway and must have succeeded for exactly
    the draft's total. Resubmitting the same payment id for the same booking
    returns the booking saved the first time.
    """
    pricing = _require_valid(draft, today)

    existing = find_booking_by_payment(db, payment_id)
    if existing is not None:
        if not _same_booking(existing, draft, pricing):
            raise BookingValidationError({"paymentId": "This payment is already linked to another booking"})
        return existing

    result = gateway.retrieve(payment_id)
    if not result.succeeded:
        code = (result.error_code or PaymentErrorCode.PROCESSING_ERROR).value
        logger.warning("refusing booking for payment %s: %s", payment_id, code)
        raise PaymentFailedError(code, result.message)

    expected = to_minor_units(pricing.final_total)
    if result.amount_minor != expected:
        logger.error("payment %s was for %s but booking totals %s", payment_id, result.amount_minor, expected)
        raise _fail(PaymentErrorCode.AMOUNT_MISMATCH)

    return save_paid_booking(db, draft, pricing, result.payment_id or payment_id,
                             provider=_provider_name(gateway))
