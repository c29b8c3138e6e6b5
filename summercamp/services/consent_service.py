import json
import re
import uuid

from sqlalchemy.orm import Session

from summercamp.models.booking import Booking
from summercamp.models.consent_form import ConsentForm
from summercamp.schemas.consent import ConsentFormIn, YES_NO
from summercamp.services.validation import is_valid_email

SIGNATURE_FIELDS = ("playerSignature", "guardianSignature")
MED_QUESTIONS = tuple(f"medQ{i}" for i in range(1, 9))
PNG_DATA_URL = re.compile(r"^data:image/png;base64,[A-Za-z0-9+/=]+$")


def validate_consent_form(form: ConsentFormIn) -> dict[str, str]:
    """Every field is mandatory, as on the paper form."""
    errors: dict[str, str] = {}
    data = form.model_dump()
    for key, val in data.items():
        if key in SIGNATURE_FIELDS or key == "parentBooking":
            continue
        if not str(val or "").strip():
            errors[key] = "Required"

    if not form.parentBooking:
        errors["parentBooking"] = "Required"
    for key in MED_QUESTIONS:
        if key not in errors and data[key].strip().lower() not in YES_NO:
            errors[key] = "Please answer yes or no"
    if "parent1Email" not in errors and not is_valid_email(form.parent1Email):
        errors["parent1Email"] = "Please enter a valid email address"
    if form.gender and form.gender not in ("boy", "girl"):
        errors.setdefault("gender", "Please select boy or girl")
    for key in SIGNATURE_FIELDS:
        sig = getattr(form, key)
        if not sig:
            errors[key] = "Signature required"
        elif not PNG_DATA_URL.match(sig):
            errors[key] = "Signature must be a PNG image"
    return errors


def create_consent_form(db: Session, booking: Booking, form: ConsentFormIn) -> ConsentForm:
    answers = form.model_dump(exclude=set(SIGNATURE_FIELDS) | {"parentBooking"})
    cf = ConsentForm(
        id=str(uuid.uuid4()),
        booking_id=booking.id,
        booking_ref=booking.booking_ref,
        kid_full_name=form.kidFullName.strip(),
        guardian_name=form.guardianName.strip(),
        guardian_email=form.parent1Email.strip().lower(),
        answers_json=json.dumps(answers, ensure_ascii=False),
        player_signature=form.playerSignature,
        guardian_signature=form.guardianSignature,
    )
    db.add(cf)
    booking.consent_status = "received"
    db.commit()
    db.refresh(cf)
    return cf
