"""Static plan catalogue and camp calendar per product and location."""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from summercamp.core.errors import PlanNotFound


class Location(str, Enum):
    ABU_DHABI = "abuDhabi"
    AL_AIN = "alAin"

    @property
    def label(self) -> str:
        return "Abu Dhabi" if self is Location.ABU_DHABI else "Al Ain"


class Product(str, Enum):
    KIDS_CAMP = "kidsCamp"
    FOOTBALL_CLINIC = "footballClinic"

    @property
    def label(self) -> str:
        return "Kids Camp" if self is Product.KIDS_CAMP else "Football Clinic"


@dataclass(frozen=True)
class Plan:
    name: str
    description: str
    price: Decimal
    features: tuple[str, ...]
    product: Product
    popular: bool = False
    duration_days: Optional[int] = None
    full_access: bool = False

    @property
    def calendar_bounded(self) -> bool:
        return self.product is Product.KIDS_CAMP


@dataclass(frozen=True)
class CampWindow:
    start: date
    end: date
    weekdays: frozenset[int]  # date.weekday(): Monday=0

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end


# (month, day) bounds and allowed weekdays; the year is supplied per request
_WINDOWS = {
    Location.ABU_DHABI: ((7, 1), (8, 21), frozenset({0, 1, 2, 3, 4})),
    Location.AL_AIN: ((7, 5), (8, 19), frozenset({0, 1, 2, 3})),
}

WEEKDAY_RANGE_LABEL = {
    Location.ABU_DHABI: "Monday to Friday",
    Location.AL_AIN: "Monday to Thursday",
}


def camp_window(location: Location, year: int) -> CampWindow:
    (sm, sd), (em, ed), weekdays = _WINDOWS[Location(location)]
    return CampWindow(start=date(year, sm, sd), end=date(year, em, ed), weekdays=weekdays)


def _kids_camp_plans() -> tuple[Plan, ...]:
    k = Product.KIDS_CAMP
    return (
        Plan("1-Day Access", "Perfect for trying out our summer camp", Decimal("250"),
             ("Full day camp activities", "Professional supervision"), k, duration_days=1),
        Plan("3-Days Access", "Great for a short camp experience", Decimal("650"),
             ("All 1-day features", "Extended skill development", "Progress tracking"), k, duration_days=3),
        Plan("5-Days Access", "Complete summer camp experience", Decimal("850"),
             ("All 3-day features", "Full week activities", "Individual attention"), k,
             popular=True, duration_days=5),
        Plan("10-Days Access", "Extended camp experience", Decimal("1600"),
             ("All 5-day features", "Advanced activities", "Special workshops", "Extended care options"), k,
             duration_days=10),
        Plan("20-Days Access", "Full summer camp experience", Decimal("3000"),
             ("All 10-day features", "Complete summer program", "Priority registration", "Exclusive activities"), k,
             duration_days=20),
        Plan("Full Camp Access", "Unlimited access to all camp days and activities", Decimal("5700"),
             ("All 20-day features", "Unlimited access", "Personalized coaching", "Exclusive events"), k,
             full_access=True),
    )


def _football_clinic_plans() -> tuple[Plan, ...]:
    f = Product.FOOTBALL_CLINIC
    return (
        Plan("1 Day Access", "Perfect for trying out our football clinic", Decimal("150"),
             ("Professional coaching", "Skill assessment", "Training equipment provided"), f, duration_days=1),
        Plan("1 Week (3 sessions)", "Comprehensive football training program", Decimal("390"),
             ("Professional coaching", "Advanced skill development", "Tactical training", "Progress tracking"), f,
             popular=True),
        Plan("Full Month (12 sessions)", "Complete football development experience", Decimal("1440"),
             ("Professional coaching", "Match play experience", "Progress tracking", "Performance report"), f),
        Plan("Full Camp Access (21 sessions)", "Ultimate football training experience", Decimal("2520"),
             ("Professional coaching", "Extended training period", "Comprehensive skill development",
              "Advanced tactical understanding"), f),
    )


CATALOG: dict[tuple[Product, Location], tuple[Plan, ...]] = {
    (Product.KIDS_CAMP, Location.ABU_DHABI): _kids_camp_plans(),
    (Product.KIDS_CAMP, Location.AL_AIN): _kids_camp_plans(),
    (Product.FOOTBALL_CLINIC, Location.ABU_DHABI): _football_clinic_plans(),
    (Product.FOOTBALL_CLINIC, Location.AL_AIN): _football_clinic_plans(),
}


def list_plans(product: Product, location: Location) -> tuple[Plan, ...]:
    return CATALOG[(Product(product), Location(location))]


def get_plan(product: Product, location: Location, name: str) -> Plan:
    wanted = (name or "").strip().lower()
    for p in list_plans(product, location):
        if p.name.lower() == wanted:
            return p
    raise PlanNotFound(f"{name.strip()} is not offered for {Product(product).label} in {Location(location).label}")
