"""Immutable booking draft and the pure transitions that edit it.

Every transition returns a new `BookingDraft` with `pricing` recomputed, so the
price shown to the parent is always a function of the draft alone.
"""
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Optional

from summercamp.services.catalog import Location, Plan, Product
from summercamp.services.pricing import MAX_CHILDREN, PricingResult, calculate_pricing

PARENT_FIELDS = ("parent_name", "parent_email", "parent_phone", "parent_address")


@dataclass(frozen=True)
class Child:
    name: str = ""
    date_of_birth: Optional[date] = None
    gender: str = ""


@dataclass(frozen=True)
class BookingDraft:
    product: Product
    location: Location
    plan: Optional[Plan] = None
    parent_name: str = ""
    parent_email: str = ""
    parent_phone: str = ""
    parent_address: str = ""
    children: tuple[Child, ...] = ()
    start_date: Optional[date] = None
    pricing: Optional[PricingResult] = field(default=None, compare=False)


def _priced(draft: BookingDraft) -> BookingDraft:
    n = len(draft.children)
    if draft.plan is None or not 1 <= n <= MAX_CHILDREN:
        return replace(draft, pricing=None)
    return replace(draft, pricing=calculate_pricing(draft.plan.price, n))


def new_draft(product: Product, location: Location, plan: Optional[Plan] = None,
              children: tuple[Child, ...] = (Child(),)) -> BookingDraft:
    return _priced(BookingDraft(product=Product(product), location=Location(location), plan=plan,
                                children=tuple(children)))


def set_parent(draft: BookingDraft, **fields: str) -> BookingDraft:
    unknown = set(fields) - set(PARENT_FIELDS)
    if unknown:
        raise ValueError(f"unknown parent field(s): {', '.join(sorted(unknown))}")
    return replace(draft, **{k: (v or "") for k, v in fields.items()})


def set_location(draft: BookingDraft, location: Location) -> BookingDraft:
    return _priced(replace(draft, location=Location(location)))


def set_plan(draft: BookingDraft, plan: Optional[Plan]) -> BookingDraft:
    return _priced(replace(draft, plan=plan))


def set_start_date(draft: BookingDraft, start_date: Optional[date]) -> BookingDraft:
    return replace(draft, start_date=start_date)


def add_child(draft: BookingDraft, child: Child | None = None) -> BookingDraft:
    if len(draft.children) >= MAX_CHILDREN:
        return draft
    return _priced(replace(draft, children=draft.children + (child or Child(),)))


def update_child(draft: BookingDraft, index: int, **fields: Any) -> BookingDraft:
    if not 0 <= index < len(draft.children):
        raise IndexError(f"no child at position {index}")
    children = list(draft.children)
    children[index] = replace(children[index], **fields)
    return replace(draft, children=tuple(children))


def remove_child(draft: BookingDraft, index: int) -> BookingDraft:
    if len(draft.children) <= 1 or not 0 <= index < len(draft.children):
        return draft
    children = draft.children[:index] + draft.children[index + 1:]
    return _priced(replace(draft, children=children))


_ACTIONS = {
    "set_parent": lambda d, p: set_parent(d, **p),
    "set_location": lambda d, p: set_location(d, p),
    "set_plan": lambda d, p: set_plan(d, p),
    "set_start_date": lambda d, p: set_start_date(d, p),
    "add_child": lambda d, p: add_child(d, p),
    "update_child": lambda d, p: update_child(d, p["index"], **{k: v for k, v in p.items() if k != "index"}),
    "remove_child": lambda d, p: remove_child(d, p),
}


def apply(draft: BookingDraft, action: tuple[str, Any]) -> BookingDraft:
    """Reducer entry point: `apply(draft, ("add_child", Child(name="Sara")))`."""
    kind, payload = action
    try:
        handler = _ACTIONS[kind]
    except KeyError:
        raise ValueError(f"unknown draft action {kind!r}")
    return handler(draft, payload)
