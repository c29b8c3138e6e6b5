from datetime import date
from fastapi import APIRouter, Depends

from summercamp.api.deps import get_today
from summercamp.core.config import settings
from summercamp.core.errors import BookingValidationError
from summercamp.schemas.booking import AccessPeriodOut, BookingDraftIn, PricingOut, QuoteOut
from summercamp.schemas.plan import CampWindowOut, PlanListOut, PlanOut
from summercamp.services.catalog import Location, Product, camp_window, list_plans
from summercamp.services.checkout import quote
from summercamp.services.eligibility import camp_year

router = APIRouter(tags=["plans"])


@router.get("/plans", response_model=PlanListOut)
def get_plans(product: Product = Product.KIDS_CAMP, location: Location = Location.ABU_DHABI,
              today: date = Depends(get_today)):
    """Plans on sale for a product/location, with the camp window when the product is calendar-bound."""
    window = camp_window(location, camp_year(today)) if product is Product.KIDS_CAMP else None
    return PlanListOut(
        product=product.value,
        location=location.value,
        currency=settings.CURRENCY,
        window=CampWindowOut.from_window(window) if window else None,
        plans=[PlanOut.from_plan(p) for p in list_plans(product, location)],
    )


@router.post("/quote", response_model=QuoteOut)
def get_quote(body: BookingDraftIn, today: date = Depends(get_today)):
    """Price breakdown plus inline field errors for the current form state. Never fails on bad input."""
    try:
        draft = body.to_draft()
    except BookingValidationError as e:
        return QuoteOut(valid=False, errors=e.errors, currency=settings.CURRENCY)
    q = quote(draft, today)
    return QuoteOut(
        valid=q.valid,
        errors=q.errors,
        pricing=PricingOut(**q.pricing.as_dict()) if q.pricing else None,
        accessPeriod=AccessPeriodOut(**q.access.as_dict()) if q.access else None,
        currency=settings.CURRENCY,
    )
