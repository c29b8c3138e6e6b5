import re
from datetime import date

from summercamp.services.draft import BookingDraft, Child
from summercamp.services.eligibility import validate_start_date
from summercamp.services.pricing import MAX_CHILDREN

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
UAE_PHONE_RE = re.compile(r"^(\+971|971|0)?[2-9][0-9]{8}$")

MIN_CHILD_AGE = 4
MAX_CHILD_AGE = 12
CHILD_NAME_MIN, CHILD_NAME_MAX = 3, 20
GENDERS = ("boy", "girl")

REQUIRED = "This field is required"


def normalize_phone(phone: str) -> str:
    return re.sub(r"[\s\-()]", "", phone or "")


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.match((email or "").strip()))


def is_valid_uae_phone(phone: str) -> bool:
    return bool(UAE_PHONE_RE.match(normalize_phone(phone)))


def age_on(dob: date, today: date) -> int:
    """Whole years completed by `today`."""
    years = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        years -= 1
    return years


def _validate_child(i: int, child: Child, today: date, errors: dict[str, str]) -> None:
    prefix = f"children.{i}"
    name = (child.name or "").strip()
    if not name:
        errors[f"{prefix}.name"] = REQUIRED
    elif not CHILD_NAME_MIN <= len(name) <= CHILD_NAME_MAX:
        errors[f"{prefix}.name"] = f"Name must be between {CHILD_NAME_MIN} and {CHILD_NAME_MAX} characters"

    if child.date_of_birth is None:
        errors[f"{prefix}.dateOfBirth"] = REQUIRED
    else:
        age = age_on(child.date_of_birth, today)
        if not MIN_CHILD_AGE <= age <= MAX_CHILD_AGE:
            errors[f"{prefix}.dateOfBirth"] = (
                f"Child must be between {MIN_CHILD_AGE} and {MAX_CHILD_AGE} years old"
            )

    if not child.gender:
        errors[f"{prefix}.gender"] = REQUIRED
    elif child.gender not in GENDERS:
        errors[f"{prefix}.gender"] = "Please select boy or girl"


def validate_booking(draft: BookingDraft, today: date) -> dict[str, str]:
    """Field name -> message for everything wrong with the draft. Empty dict means valid."""
    errors: dict[str, str] = {}

    for key, value in (
        ("parentName", draft.parent_name),
        ("parentEmail", draft.parent_email),
        ("parentPhone", draft.parent_phone),
        ("parentAddress", draft.parent_address),
    ):
        if not (value or "").strip():
            errors[key] = REQUIRED

    if "parentEmail" not in errors and not is_valid_email(draft.parent_email):
        errors["parentEmail"] = "Please enter a valid email address"
    if "parentPhone" not in errors and not is_valid_uae_phone(draft.parent_phone):
        errors["parentPhone"] = "Please enter a valid UAE phone number"

    if not draft.children:
        errors["children"] = "Please add at least one child"
    elif len(draft.children) > MAX_CHILDREN:
        errors["children"] = f"A booking can include at most {MAX_CHILDREN} children"
    for i, child in enumerate(draft.children[:MAX_CHILDREN]):
        _validate_child(i, child, today, errors)

    if draft.plan is None:
        errors["plan"] = "Please select a plan"

    if draft.start_date is None:
        errors["startDate"] = REQUIRED
    elif draft.plan is not None:
        msg = validate_start_date(draft.plan, draft.location, draft.start_date, today)
        if msg:
            errors["startDate"] = msg

    return errors
