from fastapi import APIRouter
from summercamp.api.routes.plans import router as plans_router
from summercamp.api.routes.bookings import router as bookings_router
from summercamp.api.routes.payments import router as payments_router, intent_router
from summercamp.api.routes.consent import router as consent_router

api_router = APIRouter(prefix="/api")
api_router.include_router(plans_router)
api_router.include_router(bookings_router)
api_router.include_router(payments_router)
api_router.include_router(consent_router)

# The booking client calls POST /create-payment-intent at the server root.
root_router = APIRouter()
root_router.include_router(intent_router)
