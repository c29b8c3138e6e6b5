from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from summercamp.core.errors import BookingNotFound
from summercamp.db.session import get_db
from summercamp.schemas.consent import ConsentFormIn, ConsentFormOut
from summercamp.services.booking_service import get_booking
from summercamp.services.consent_service import create_consent_form, validate_consent_form
from summercamp.services.notification_service import send_consent_acknowledgement

router = APIRouter(tags=["consent"])


@router.post("/consent-forms")
def submit_consent_form(body: ConsentFormIn, db: Session = Depends(get_db)):
    errors = validate_consent_form(body)
    if errors:
        return JSONResponse(status_code=422, content={"success": False, "errors": errors})
    try:
        booking = get_booking(db, body.parentBooking)
    except BookingNotFound:
        return JSONResponse(status_code=404, content={"success": False, "message": "Booking not found"})

    form = create_consent_form(db, booking, body)
    send_consent_acknowledgement(db, booking, form)
    out = ConsentFormOut(
        id=form.id,
        parentBooking=booking.booking_ref,
        kidFullName=form.kid_full_name,
        guardianName=form.guardian_name,
        createdAt=form.created_at.isoformat(),
    )
    return {"success": True, "form": out.model_dump()}
