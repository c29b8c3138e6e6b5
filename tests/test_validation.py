from datetime import date

import pytest

from summercamp.services.catalog import Location, Product, get_plan
from summercamp.services.draft import Child, new_draft, set_parent, set_start_date
from summercamp.services.validation import age_on, is_valid_uae_phone, validate_booking

TODAY = date(2026, 6, 20)


def make_draft(children=None, **parent):
    plan = get_plan(Product.KIDS_CAMP, Location.ABU_DHABI, "1-Day Access")
    d = new_draft(Product.KIDS_CAMP, Location.ABU_DHABI, plan,
                  children=children if children is not None else (Child("Omar", date(2018, 3, 14), "boy"),))
    fields = dict(parent_name="Mariam", parent_email="mariam@example.com",
                  parent_phone="+971501234567", parent_address="Khalifa City")
    fields.update(parent)
    d = set_parent(d, **fields)
    return set_start_date(d, date(2026, 7, 1))


def test_valid_draft_has_no_errors():
    assert validate_booking(make_draft(), TODAY) == {}


def test_missing_parent_fields_are_required():
    errors = validate_booking(make_draft(parent_name="", parent_address="  "), TODAY)
    assert errors["parentName"] == "This field is required"
    assert errors["parentAddress"] == "This field is required"


@pytest.mark.parametrize("email", ["mariam", "mariam@example", "m ariam@example.com"])
def test_bad_email(email):
    assert validate_booking(make_draft(parent_email=email), TODAY)["parentEmail"] == \
        "Please enter a valid email address"


@pytest.mark.parametrize("phone,ok", [
    ("0501234567", True),
    ("+971501234567", True),
    ("971501234567", True),
    ("050 123 4567", True),
    ("501234567", True),
    ("0101234567", False),
    ("05012345", False),
    ("+44501234567", False),
])
def test_uae_phone(phone, ok):
    assert is_valid_uae_phone(phone) is ok


def test_age_boundaries():
    exactly_four = date(2022, 6, 20)
    one_day_short = date(2022, 6, 21)
    assert age_on(exactly_four, TODAY) == 4
    assert validate_booking(make_draft(children=(Child("Omar", exactly_four, "boy"),)), TODAY) == {}
    errors = validate_booking(make_draft(children=(Child("Omar", one_day_short, "boy"),)), TODAY)
    assert errors["children.0.dateOfBirth"] == "Child must be between 4 and 12 years old"


def test_thirteen_year_old_rejected():
    errors = validate_booking(make_draft(children=(Child("Layla", date(2013, 6, 20), "girl"),)), TODAY)
    assert "children.0.dateOfBirth" in errors


def test_child_fields_are_indexed():
    children = (
        Child("Omar", date(2018, 3, 14), "boy"),
        Child("Al", None, ""),
        Child("Salama", date(2019, 1, 2), "other"),
    )
    errors = validate_booking(make_draft(children=children), TODAY)
    assert errors == {
        "children.1.name": "Name must be between 3 and 20 characters",
        "children.1.dateOfBirth": "This field is required",
        "children.1.gender": "This field is required",
        "children.2.gender": "Please select boy or girl",
    }


def test_no_children():
    errors = validate_booking(make_draft(children=()), TODAY)
    assert errors["children"] == "Please add at least one child"


def test_start_date_rule_surfaces_as_field_error():
    d = set_start_date(make_draft(), date(2026, 7, 4))
    assert validate_booking(d, TODAY) == {"startDate": "Camp in Abu Dhabi runs Monday to Friday"}
