from datetime import date

from summercamp.services.eligibility import local_today
from summercamp.services.payment_gateway import GatewayError, PaymentGateway, get_gateway
from fastapi import HTTPException


def get_today() -> date:
    """Camp-local date; overridden in tests to pin the calendar."""
    return local_today()


def get_payment_gateway() -> PaymentGateway:
    try:
        return get_gateway()
    except GatewayError as e:
        raise HTTPException(status_code=500, detail=str(e))
