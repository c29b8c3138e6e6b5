"""Domain errors raised by services and translated to HTTP responses by the routes.

Field validation problems are *not* exceptions for the calculator itself (it
returns a field -> message mapping); `BookingValidationError` only wraps that
mapping once a request has to be rejected.
"""


class BookingValidationError(Exception):
    def __init__(self, errors: dict[str, str]):
        super().__init__("Booking form has errors")
        self.errors = errors


class PlanNotFound(ValueError):
    pass


class PaymentFailedError(RuntimeError):
    """Card charge did not go through. Nothing was persisted; the parent may try again."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class BookingNotSavedError(RuntimeError):
    """Payment succeeded but the booking could not be stored. Money has moved."""

    def __init__(self, payment_id: str, support_email: str = ""):
        msg = (
            "Your payment was successful but we could not save your booking. "
            f"Please contact support{f' at {support_email}' if support_email else ''} "
            f"quoting payment reference {payment_id}."
        )
        super().__init__(msg)
        self.payment_id = payment_id
        self.message = msg


class BookingNotFound(LookupError):
    pass
