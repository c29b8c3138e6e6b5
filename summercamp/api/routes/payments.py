from datetime import date
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from summercamp.api.deps import get_payment_gateway, get_today
from summercamp.api.responses import booking_not_saved, payment_failed, validation_failed
from summercamp.core.errors import BookingNotSavedError, BookingValidationError, PaymentFailedError
from summercamp.db.session import get_db
from summercamp.schemas.booking import BookingDraftIn, PricingOut
from summercamp.schemas.payments import CheckoutRequest, PaymentIntentOut
from summercamp.services.booking_service import booking_to_dict
from summercamp.services.checkout import checkout, start_payment
from summercamp.services.payment_gateway import BillingDetails, GatewayError, PaymentGateway

router = APIRouter(tags=["payments"])
intent_router = APIRouter(tags=["payments"])


@intent_router.post("/create-payment-intent", response_model=PaymentIntentOut)
def create_payment_intent(body: BookingDraftIn, gateway: PaymentGateway = Depends(get_payment_gateway),
                          today: date = Depends(get_today)):
    """Open a card payment for the server-side total. Client-supplied amounts are never trusted."""
    try:
        intent, pricing = start_payment(gateway, body.to_draft(), today)
    except BookingValidationError as e:
        return validation_failed(e)
    except GatewayError as e:
        raise HTTPException(status_code=502, detail=f"Failed to initialize payment. Please try again. ({e})")
    return PaymentIntentOut(
        clientSecret=intent.client_secret,
        amount=intent.amount_minor,
        currency=intent.currency,
        pricing=PricingOut(**pricing.as_dict()),
    )


@router.post("/checkout")
def checkout_booking(body: CheckoutRequest, db: Session = Depends(get_db),
                     gateway: PaymentGateway = Depends(get_payment_gateway), today: date = Depends(get_today)):
    billing = None
    if body.billing:
        billing = BillingDetails(
            name=body.billing.name,
            email=body.billing.email,
            phone=body.billing.phone,
            address_line1=body.billing.addressLine1,
        )
    try:
        booking = checkout(
            db,
            gateway,
            body.booking.to_draft(),
            client_secret=body.clientSecret,
            payment_method=body.paymentMethod,
            billing=billing,
            today=today,
        )
    except BookingValidationError as e:
        return validation_failed(e)
    except PaymentFailedError as e:
        return payment_failed(e)
    except BookingNotSavedError as e:
        return booking_not_saved(e)
    return {"success": True, "booking": booking_to_dict(db, booking)}
