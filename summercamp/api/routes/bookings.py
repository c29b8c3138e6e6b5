from datetime import date
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from summercamp.api.deps import get_payment_gateway, get_today
from summercamp.api.responses import booking_not_saved, payment_failed, validation_failed
from summercamp.core.errors import BookingNotFound, BookingNotSavedError, BookingValidationError, PaymentFailedError
from summercamp.db.session import get_db
from summercamp.schemas.booking import BookingCreate, BookingOut
from summercamp.services.booking_service import booking_children, booking_to_dict, get_booking
from summercamp.services.catalog import Location, Product
from summercamp.services.checkout import record_booking
from summercamp.services.payment_gateway import PaymentGateway
from summercamp.services.receipt_service import render_receipt_pdf_bytes

router = APIRouter(tags=["bookings"])


@router.post("/bookings")
def create_paid_booking(body: BookingCreate, db: Session = Depends(get_db),
                        gateway: PaymentGateway = Depends(get_payment_gateway), today: date = Depends(get_today)):
    """Save a booking the client already paid for. The payment is checked with the gateway first."""
    if not body.paymentId.strip():
        raise HTTPException(status_code=400, detail="paymentId is required")
    try:
        booking = record_booking(db, gateway, body.to_draft(), body.paymentId.strip(), today)
    except BookingValidationError as e:
        return validation_failed(e)
    except PaymentFailedError as e:
        return payment_failed(e)
    except BookingNotSavedError as e:
        return booking_not_saved(e)
    return {"success": True, "booking": booking_to_dict(db, booking)}


@router.get("/bookings/{booking_ref}", response_model=BookingOut)
def read_booking(booking_ref: str, db: Session = Depends(get_db)):
    try:
        b = get_booking(db, booking_ref)
    except BookingNotFound:
        raise HTTPException(status_code=404, detail="Not found")
    return booking_to_dict(db, b)


@router.get("/bookings/{booking_ref}/receipt")
def download_receipt(booking_ref: str, db: Session = Depends(get_db)):
    try:
        b = get_booking(db, booking_ref)
    except BookingNotFound:
        raise HTTPException(status_code=404, detail="Not found")
    if b.payment_status != "paid":
        raise HTTPException(status_code=409, detail="Receipt is only available after payment")
    pdf = render_receipt_pdf_bytes(
        booking_ref=b.booking_ref,
        parent_name=b.parent_name,
        product_label=Product(b.product).label,
        location_label=Location(b.location).label,
        plan_name=b.plan_name,
        start_date=b.start_date,
        end_date=b.end_date,
        children=[(c.name, c.price) for c in booking_children(db, b)],
        subtotal=b.subtotal,
        discount_total=b.discount_total,
        tax_amount=b.tax_amount,
        final_total=b.final_total,
        currency=b.currency,
        payment_id=b.payment_id,
    )
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{b.booking_ref}.pdf"'},
    )
