from fastapi.responses import JSONResponse

from summercamp.core.errors import BookingNotSavedError, BookingValidationError, PaymentFailedError


def validation_failed(exc: BookingValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"success": False, "errors": exc.errors})


def payment_failed(exc: PaymentFailedError) -> JSONResponse:
    # booking was not saved; the parent can try again with another card
    return JSONResponse(status_code=402, content={
        "success": False,
        "code": exc.code,
        "message": f"Payment failed: {exc.message} Please try again.",
        "retryable": True,
    })


def booking_not_saved(exc: BookingNotSavedError) -> JSONResponse:
    return JSONResponse(status_code=500, content={
        "success": False,
        "code": "booking_not_saved",
        "message": exc.message,
        "paymentId": exc.payment_id,
        "retryable": False,
    })
