from pydantic import BaseModel
from typing import Optional

from summercamp.schemas.booking import BookingDraftIn, PricingOut


class BillingDetailsIn(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    addressLine1: str = ""


class PaymentIntentOut(BaseModel):
    clientSecret: str
    amount: int  # minor units (fils)
    currency: str
    pricing: PricingOut


class CheckoutRequest(BaseModel):
    booking: BookingDraftIn
    clientSecret: str
    # Gateway payment method id produced by the card widget (e.g. pm_... from Stripe Elements)
    paymentMethod: str
    billing: Optional[BillingDetailsIn] = None

