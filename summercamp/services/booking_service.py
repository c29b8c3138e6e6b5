import logging
import random
import string
import uuid

from sqlalchemy.orm import Session

from summercamp.core.config import settings
from summercamp.core.errors import BookingNotFound
from summercamp.models.booking import Booking
from summercamp.models.child import BookingChild
from summercamp.models.payment import Payment
from summercamp.services.draft import BookingDraft
from summercamp.services.eligibility import access_period
from summercamp.services.pricing import PricingResult, to_minor_units

logger = logging.getLogger(__name__)


def make_booking_ref() -> str:
    return "SC-" + "".join(random.choices(string.ascii_uppercase + string.digits, k=6))


def create_booking(db: Session, draft: BookingDraft, pricing: PricingResult, payment_id: str,
                   provider: str = "stripe") -> Booking:
    """Persist a paid booking with its children and payment row. The draft must already be validated."""
    if draft.plan is None or draft.start_date is None:
        raise ValueError("booking draft is incomplete")
    if len(pricing.per_child_prices) != len(draft.children):
        raise ValueError("pricing does not match the number of children")

    # booking_ref must be unique
    for _ in range(10):
        ref = make_booking_ref()
        exists = db.query(Booking).filter(Booking.booking_ref == ref).first()
        if not exists:
            break
    else:
        raise ValueError("could not allocate booking reference")

    period = access_period(draft.plan, draft.location, draft.start_date)
    booking = Booking(
        id=str(uuid.uuid4()),
        booking_ref=ref,
        product=draft.product.value,
        location=draft.location.value,
        plan_name=draft.plan.name,
        start_date=period.start,
        end_date=period.end,
        parent_name=draft.parent_name,
        parent_email=draft.parent_email.lower(),
        parent_phone=draft.parent_phone,
        parent_address=draft.parent_address,
        currency=settings.CURRENCY,
        base_price=draft.plan.price,
        subtotal=pricing.subtotal,
        discount_total=pricing.discount_total,
        tax_amount=pricing.tax_amount,
        final_total=pricing.final_total,
        children_count=len(draft.children),
        status="CONFIRMED",
        payment_status="paid",
        payment_id=payment_id,
    )
    db.add(booking)

    for i, (child, price) in enumerate(zip(draft.children, pricing.per_child_prices)):
        db.add(BookingChild(
            id=str(uuid.uuid4()),
            booking_id=booking.id,
            position=i,
            name=child.name,
            date_of_birth=child.date_of_birth,
            gender=child.gender,
            price=price,
        ))

    db.add(Payment(
        id=str(uuid.uuid4()),
        booking_id=booking.id,
        provider=provider,
        amount_minor=to_minor_units(pricing.final_total),
        currency=settings.CURRENCY,
        status="paid",
        provider_ref=payment_id,
    ))

    db.commit()
    db.refresh(booking)
    logger.info("booking %s saved (payment %s, total %s %s)", booking.booking_ref, payment_id,
                booking.final_total, booking.currency)
    return booking


def get_booking(db: Session, ref_or_id: str) -> Booking:
    b = db.query(Booking).filter(Booking.booking_ref == ref_or_id).first() or db.get(Booking, ref_or_id)
    if not b:
        raise BookingNotFound(ref_or_id)
    return b


def booking_children(db: Session, booking: Booking) -> list[BookingChild]:
    return (
        db.query(BookingChild)
        .filter(BookingChild.booking_id == booking.id)
        .order_by(BookingChild.position.asc())
        .all()
    )


def booking_to_dict(db: Session, b: Booking) -> dict:
    children = booking_children(db, b)
    return {
        "id": b.id,
        "bookingRef": b.booking_ref,
        "status": b.status,
        "paymentStatus": b.payment_status,
        "paymentId": b.payment_id,
        "product": b.product,
        "location": b.location,
        "plan": b.plan_name,
        "startDate": b.start_date.isoformat(),
        "endDate": b.end_date.isoformat(),
        "parentName": b.parent_name,
        "parentEmail": b.parent_email,
        "parentPhone": b.parent_phone,
        "children": [
            {"name": c.name, "dateOfBirth": c.date_of_birth.isoformat(), "gender": c.gender, "price": float(c.price)}
            for c in children
        ],
        "pricing": {
            "perChildPrices": [float(c.price) for c in children],
            "subtotal": float(b.subtotal),
            "originalTotal": float(b.base_price) * b.children_count,
            "discountTotal": float(b.discount_total),
            "taxAmount": float(b.tax_amount),
            "finalTotal": float(b.final_total),
        },
        "currency": b.currency,
        "consentStatus": b.consent_status,
        "createdAt": b.created_at.isoformat() if b.created_at else None,
    }
