from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from summercamp.core.config import settings
from summercamp.services.catalog import Location, Plan, WEEKDAY_RANGE_LABEL, camp_window


@dataclass(frozen=True)
class AccessPeriod:
    start: date
    end: date

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def as_dict(self) -> dict:
        return {"start": self.start.isoformat(), "end": self.end.isoformat(), "days": self.days}


def local_today(tz_name: str | None = None) -> date:
    """Today's date in the camp timezone. Callers pass this into the pure functions below."""
    return datetime.now(ZoneInfo(tz_name or settings.CAMP_TIMEZONE)).date()


def camp_year(today: date) -> int:
    return settings.CAMP_YEAR or today.year


def _fmt(d: date) -> str:
    return f"{d.strftime('%B')} {d.day}"


def validate_start_date(plan: Plan, location: Location, start_date: date, today: date) -> Optional[str]:
    """Return an error message for the first rule `start_date` breaks, or None."""
    if start_date < today:
        return "Start date cannot be in the past"
    if not plan.calendar_bounded:
        return None

    location = Location(location)
    window = camp_window(location, camp_year(today))
    if not window.contains(start_date):
        return f"Camp in {location.label} runs from {_fmt(window.start)} to {_fmt(window.end)}"
    if start_date.weekday() not in window.weekdays:
        return f"Camp in {location.label} runs {WEEKDAY_RANGE_LABEL[location]}"

    if plan.duration_days and plan.duration_days > 1:
        last_day = start_date + timedelta(days=plan.duration_days - 1)
        if last_day > window.end:
            return f"{plan.duration_days}-day plan must be completed by {_fmt(window.end)}"
    return None


def access_period(plan: Plan, location: Location, start_date: date, today: date | None = None) -> AccessPeriod:
    if plan.full_access and plan.calendar_bounded:
        window = camp_window(Location(location), camp_year(today or start_date))
        return AccessPeriod(start=start_date, end=window.end)
    days = plan.duration_days or 1
    return AccessPeriod(start=start_date, end=start_date + timedelta(days=days - 1))
