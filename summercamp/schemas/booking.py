from datetime import date
from pydantic import BaseModel, Field
from typing import List, Optional

from summercamp.core.errors import BookingValidationError, PlanNotFound
from summercamp.services.catalog import Location, Product, get_plan
from summercamp.services.draft import BookingDraft, Child, new_draft, set_parent, set_start_date

class ChildIn(BaseModel):
    name: str = ""
    dateOfBirth: Optional[date] = None
    gender: str = ""

class BookingDraftIn(BaseModel):
    product: Product = Product.KIDS_CAMP
    location: Location
    plan: str = ""
    parentName: str = ""
    parentEmail: str = ""  # plain str; format is checked by the form validator
    parentPhone: str = ""
    parentAddress: str = ""
    children: List[ChildIn] = Field(default_factory=list)
    startDate: Optional[date] = None

    def to_draft(self) -> BookingDraft:
        try:
            plan = get_plan(self.product, self.location, self.plan) if self.plan.strip() else None
        except PlanNotFound as e:
            raise BookingValidationError({"plan": str(e)})
        draft = new_draft(
            self.product,
            self.location,
            plan,
            children=tuple(Child(name=c.name.strip(), date_of_birth=c.dateOfBirth, gender=c.gender.strip().lower())
                           for c in self.children),
        )
        draft = set_parent(
            draft,
            parent_name=self.parentName.strip(),
            parent_email=self.parentEmail.strip(),
            parent_phone=self.parentPhone.strip(),
            parent_address=self.parentAddress.strip(),
        )
        return set_start_date(draft, self.startDate)

class PricingOut(BaseModel):
    perChildPrices: List[float]
    subtotal: float
    originalTotal: float
    discountTotal: float
    taxAmount: float
    finalTotal: float

class AccessPeriodOut(BaseModel):
    start: str
    end: str
    days: int

class QuoteOut(BaseModel):
    valid: bool
    errors: dict[str, str] = Field(default_factory=dict)
    pricing: Optional[PricingOut] = None
    accessPeriod: Optional[AccessPeriodOut] = None
    currency: str = "AED"

class BookingCreate(BookingDraftIn):
    paymentId: str

class ChildOut(BaseModel):
    name: str
    dateOfBirth: str
    gender: str
    price: float

class BookingOut(BaseModel):
    id: str
    bookingRef: str
    status: str
    paymentStatus: str
    paymentId: str
    product: str
    location: str
    plan: str
    startDate: str
    endDate: str
    parentName: str
    parentEmail: str
    parentPhone: str
    children: List[ChildOut]
    pricing: PricingOut
    currency: str
    consentStatus: str
    createdAt: Optional[str] = None
