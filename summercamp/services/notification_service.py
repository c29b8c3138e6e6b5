"""Booking and consent emails. Sending is fire-and-forget: nothing here raises to the caller."""
import logging

from sqlalchemy.orm import Session

from summercamp.core.config import settings
from summercamp.models.booking import Booking
from summercamp.models.consent_form import ConsentForm
from summercamp.services.booking_service import booking_children
from summercamp.services.catalog import Location, Product
from summercamp.services.email_service import queue_email
from summercamp.services.receipt_service import render_receipt_pdf_bytes

logger = logging.getLogger(__name__)

KIDS_CAMP_SCHEDULE = (
    "Kids Camp Schedule:\n"
    "- Abu Dhabi: Monday to Friday, 8:30 AM - 2 PM\n"
    "- Al Ain: Monday to Thursday, 8:30 AM - 2 PM\n"
)

FOOTBALL_CLINIC_SCHEDULE = (
    "Football Clinic Schedule (Abu Dhabi):\n"
    "- U17 & U18: 3:00 PM - 5:00 PM\n"
    "- U6, U8 & U10: 5:00 PM - 6:15 PM\n"
    "- U12 & U13: 6:15 PM - 7:40 PM\n"
    "- U14 & U15: 7:30 PM - 9:00 PM\n"
)


def booking_confirmation_email(booking: Booking, children: list[tuple[str, object]]) -> tuple[str, str]:
    """Return (subject, body) for a paid booking."""
    location = Location(booking.location)
    product = Product(booking.product)
    days = (booking.end_date - booking.start_date).days + 1
    names = ", ".join(name for name, _ in children)

    lines = [
        f"Dear {booking.parent_name},",
        "",
        f"Thank you for booking the {booking.plan_name} for {names}.",
        "",
        "Booking Details:",
        f"- Reference: {booking.booking_ref}",
        f"- Programme: {product.label}",
        f"- Plan: {booking.plan_name}",
        f"- Location: {location.label}",
        f"- Access Period: {days} days ({booking.start_date:%B %d, %Y} to {booking.end_date:%B %d, %Y})",
        "",
        "Price breakdown:",
    ]
    for name, price in children:
        lines.append(f"- {name}: {booking.currency} {price:,.2f}")
    lines += [
        f"- Subtotal: {booking.currency} {booking.subtotal:,.2f}",
        f"- Sibling discount: {booking.currency} {booking.discount_total:,.2f}",
        f"- VAT (5%): {booking.currency} {booking.tax_amount:,.2f}",
        f"- Total paid: {booking.currency} {booking.final_total:,.2f}",
        "",
        KIDS_CAMP_SCHEDULE if product is Product.KIDS_CAMP else FOOTBALL_CLINIC_SCHEDULE,
        "Please complete the parent consent form before your child's first day"
        + (f": {settings.CLIENT_BASE_URL.rstrip('/')}/parent-consent" if settings.CLIENT_BASE_URL else "."),
        "Please ensure your child arrives 15 minutes before the scheduled time.",
        "",
        "If you have any questions, please don't hesitate to contact us.",
        "",
        "Best regards,",
        "Summer Camp Team",
    ]
    subject = f"Summer Camp Booking Confirmation - {booking.plan_name}"
    return subject, "\n".join(lines)


def send_booking_confirmation(db: Session, booking: Booking) -> None:
    try:
        children = [(c.name, c.price) for c in booking_children(db, booking)]
        subject, body = booking_confirmation_email(booking, children)
        pdf = render_receipt_pdf_bytes(
            booking_ref=booking.booking_ref,
            parent_name=booking.parent_name,
            product_label=Product(booking.product).label,
            location_label=Location(booking.location).label,
            plan_name=booking.plan_name,
            start_date=booking.start_date,
            end_date=booking.end_date,
            children=children,
            subtotal=booking.subtotal,
            discount_total=booking.discount_total,
            tax_amount=booking.tax_amount,
            final_total=booking.final_total,
            currency=booking.currency,
            payment_id=booking.payment_id,
        )
        queue_email(db, booking.parent_email, subject, body, related_booking_ref=booking.booking_ref,
                    attachments=[(f"{booking.booking_ref}.pdf", pdf, "application/pdf")])
    except Exception:
        logger.exception("could not queue confirmation email for booking %s", booking.booking_ref)
        db.rollback()


def send_consent_acknowledgement(db: Session, booking: Booking, form: ConsentForm) -> None:
    try:
        body = (
            f"Dear {form.guardian_name},\n\n"
            f"We have received the consent and health declaration form for {form.kid_full_name} "
            f"(booking {booking.booking_ref}).\n\n"
            "Best regards,\nSummer Camp Team"
        )
        queue_email(db, form.guardian_email, f"Consent form received - {booking.booking_ref}", body,
                    related_booking_ref=booking.booking_ref)
    except Exception:
        logger.exception("could not queue consent acknowledgement for booking %s", booking.booking_ref)
        db.rollback()
