from datetime import date

import pytest

from summercamp.services.catalog import Location, Product, camp_window, get_plan
from summercamp.services.eligibility import access_period, validate_start_date

TODAY = date(2026, 6, 20)


def kids(name, location=Location.ABU_DHABI):
    return get_plan(Product.KIDS_CAMP, location, name)


def test_windows():
    ad = camp_window(Location.ABU_DHABI, 2026)
    assert (ad.start, ad.end) == (date(2026, 7, 1), date(2026, 8, 21))
    aa = camp_window(Location.AL_AIN, 2026)
    assert (aa.start, aa.end) == (date(2026, 7, 5), date(2026, 8, 19))


def test_day_before_window_rejected_first_day_accepted():
    plan = kids("1-Day Access")
    assert validate_start_date(plan, Location.ABU_DHABI, date(2026, 6, 30), TODAY) == \
        "Camp in Abu Dhabi runs from July 1 to August 21"
    assert validate_start_date(plan, Location.ABU_DHABI, date(2026, 7, 1), TODAY) is None


def test_al_ain_first_valid_day():
    plan = kids("1-Day Access", Location.AL_AIN)
    assert validate_start_date(plan, Location.AL_AIN, date(2026, 7, 4), TODAY) == \
        "Camp in Al Ain runs from July 5 to August 19"
    # July 5 2026 is a Sunday
    assert validate_start_date(plan, Location.AL_AIN, date(2026, 7, 5), TODAY) == \
        "Camp in Al Ain runs Monday to Thursday"
    assert validate_start_date(plan, Location.AL_AIN, date(2026, 7, 6), TODAY) is None


@pytest.mark.parametrize("location,day,ok", [
    (Location.ABU_DHABI, date(2026, 7, 4), False),   # Saturday
    (Location.ABU_DHABI, date(2026, 7, 5), False),   # Sunday
    (Location.ABU_DHABI, date(2026, 7, 10), True),   # Friday
    (Location.AL_AIN, date(2026, 7, 9), True),       # Thursday
    (Location.AL_AIN, date(2026, 7, 10), False),     # Friday
])
def test_weekday_rules(location, day, ok):
    plan = kids("1-Day Access", location)
    assert (validate_start_date(plan, location, day, TODAY) is None) is ok


def test_past_date_rejected_before_any_calendar_rule():
    plan = kids("1-Day Access")
    assert validate_start_date(plan, Location.ABU_DHABI, date(2026, 7, 1), date(2026, 7, 2)) == \
        "Start date cannot be in the past"
    assert validate_start_date(plan, Location.ABU_DHABI, date(2026, 7, 2), date(2026, 7, 2)) is None


def test_fixed_duration_must_finish_inside_window():
    plan = kids("5-Days Access")
    assert validate_start_date(plan, Location.ABU_DHABI, date(2026, 8, 17), TODAY) is None
    assert validate_start_date(plan, Location.ABU_DHABI, date(2026, 8, 18), TODAY) == \
        "5-day plan must be completed by August 21"
    al_ain = kids("3-Days Access", Location.AL_AIN)
    assert validate_start_date(al_ain, Location.AL_AIN, date(2026, 8, 18), TODAY) == \
        "3-day plan must be completed by August 19"


def test_clinic_plans_only_check_past_dates():
    plan = get_plan(Product.FOOTBALL_CLINIC, Location.ABU_DHABI, "1 Day Access")
    assert validate_start_date(plan, Location.ABU_DHABI, date(2026, 9, 5), TODAY) is None
    assert validate_start_date(plan, Location.ABU_DHABI, date(2026, 6, 1), TODAY) == \
        "Start date cannot be in the past"


def test_access_periods():
    p = access_period(kids("5-Days Access"), Location.ABU_DHABI, date(2026, 7, 6))
    assert (p.start, p.end, p.days) == (date(2026, 7, 6), date(2026, 7, 10), 5)
    full = access_period(kids("Full Camp Access", Location.AL_AIN), Location.AL_AIN, date(2026, 7, 6))
    assert full.end == date(2026, 8, 19)
    assert full.days == 45
