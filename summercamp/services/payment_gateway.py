import logging
import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional, Protocol

import requests

from summercamp.core.config import settings
from summercamp.services.pricing import to_minor_units

logger = logging.getLogger(__name__)


class PaymentErrorCode(str, Enum):
    CARD_DECLINED = "card_declined"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    EXPIRED_CARD = "expired_card"
    INCORRECT_CVC = "incorrect_cvc"
    PROCESSING_ERROR = "processing_error"
    AUTHENTICATION_REQUIRED = "authentication_required"
    GATEWAY_UNAVAILABLE = "gateway_unavailable"
    PAYMENT_NOT_FOUND = "payment_not_found"
    AMOUNT_MISMATCH = "amount_mismatch"


USER_MESSAGES = {
    PaymentErrorCode.CARD_DECLINED: "Your card was declined.",
    PaymentErrorCode.INSUFFICIENT_FUNDS: "Your card has insufficient funds.",
    PaymentErrorCode.EXPIRED_CARD: "Your card has expired.",
    PaymentErrorCode.INCORRECT_CVC: "Your card's security code is incorrect.",
    PaymentErrorCode.PROCESSING_ERROR: "An error occurred while processing your card.",
    PaymentErrorCode.AUTHENTICATION_REQUIRED: "Your bank requires additional authentication for this payment.",
    PaymentErrorCode.GATEWAY_UNAVAILABLE: "We could not reach the payment provider.",
    PaymentErrorCode.PAYMENT_NOT_FOUND: "We could not find this payment.",
    PaymentErrorCode.AMOUNT_MISMATCH: "The payment amount does not match the booking total.",
}


class GatewayError(RuntimeError):
    """Transport or configuration problem talking to the gateway (not a card decline)."""


@dataclass
class PaymentIntent:
    id: str
    client_secret: str
    amount_minor: int
    currency: str


@dataclass
class BillingDetails:
    name: str = ""
    email: str = ""
    phone: str = ""
    address_line1: str = ""


@dataclass
class PaymentResult:
    succeeded: bool
    payment_id: str = ""
    amount_minor: int = 0
    currency: str = ""
    error_code: Optional[PaymentErrorCode] = None
    message: str = ""
    raw: dict = field(default_factory=dict)

    @classmethod
    def failure(cls, code: PaymentErrorCode, message: str = "", payment_id: str = "", raw: dict | None = None):
        return cls(succeeded=False, payment_id=payment_id, error_code=code,
                   message=message or USER_MESSAGES[code], raw=raw or {})


class PaymentGateway(Protocol):
    def create_intent(self, amount: Decimal, currency: str, metadata: dict | None = None) -> PaymentIntent: ...

    def confirm(self, client_secret: str, payment_method: str, billing: BillingDetails) -> PaymentResult: ...

    def get_intent(self, intent_id: str) -> Optional[PaymentIntent]: ...

    def retrieve(self, payment_id: str) -> PaymentResult: ...


def intent_id_from_secret(client_secret: str) -> str:
    # Stripe client secrets look like pi_123_secret_abc
    return (client_secret or "").split("_secret_", 1)[0]


_DECLINE_CODES = {
    "insufficient_funds": PaymentErrorCode.INSUFFICIENT_FUNDS,
    "expired_card": PaymentErrorCode.EXPIRED_CARD,
    "incorrect_cvc": PaymentErrorCode.INCORRECT_CVC,
    "processing_error": PaymentErrorCode.PROCESSING_ERROR,
    "authentication_required": PaymentErrorCode.AUTHENTICATION_REQUIRED,
}


def classify_stripe_error(err: dict) -> PaymentErrorCode:
    for key in (err.get("decline_code"), err.get("code")):
        if key in _DECLINE_CODES:
            return _DECLINE_CODES[key]
    if err.get("type") == "card_error":
        return PaymentErrorCode.CARD_DECLINED
    return PaymentErrorCode.PROCESSING_ERROR


@dataclass
class StripeConfig:
    secret_key: str
    api_base: str = "https://api.stripe.com/v1"
    timeout: int = 20


def _flatten(prefix: str, value, out: dict) -> None:
    # Stripe wants nested params as billing_details[address][line1]=...
    if isinstance(value, dict):
        for k, v in value.items():
            _flatten(f"{prefix}[{k}]" if prefix else k, v, out)
    elif value not in (None, ""):
        out[prefix] = value


class StripeGateway:
    def __init__(self, cfg: StripeConfig, session: requests.Session | None = None):
        if not cfg.secret_key:
            raise GatewayError("Stripe is not configured (missing STRIPE_SECRET_KEY)")
        self.cfg = cfg
        self.http = session or requests.Session()

    def _send(self, method: str, path: str, form: dict | None = None,
              idempotency_key: str | None = None) -> tuple[int, dict]:
        headers = {"Authorization": f"Bearer {self.cfg.secret_key}"}
        if idempotency_key:
            headers["Idempotency-Key"] = idempotency_key
        url = f"{self.cfg.api_base.rstrip('/')}{path}"
        try:
            if method == "GET":
                r = self.http.get(url, headers=headers, timeout=self.cfg.timeout)
            else:
                r = self.http.post(url, data=form, headers=headers, timeout=self.cfg.timeout)
        except requests.RequestException as e:
            raise GatewayError(f"Stripe request failed: {e}") from e
        try:
            data = r.json() if r.text else {}
        except ValueError:
            data = {"raw": r.text}
        return r.status_code, data

    def _post(self, path: str, params: dict, idempotency_key: str | None = None) -> tuple[int, dict]:
        form: dict = {}
        _flatten("", params, form)
        return self._send("POST", path, form, idempotency_key)

    def _get(self, path: str) -> tuple[int, dict]:
        return self._send("GET", path)

    def create_intent(self, amount: Decimal, currency: str, metadata: dict | None = None) -> PaymentIntent:
        amount_minor = to_minor_units(amount)
        status, data = self._post("/payment_intents", {
            "amount": amount_minor,
            "currency": currency.lower(),
            "payment_method_types": {"0": "card"},
            "metadata": metadata or {},
        }, idempotency_key=str(uuid.uuid4()))
        if status >= 400:
            raise GatewayError(f"Stripe {status}: {data.get('error', data)}")
        return PaymentIntent(
            id=data["id"],
            client_secret=data["client_secret"],
            amount_minor=int(data.get("amount", amount_minor)),
            currency=str(data.get("currency", currency)).upper(),
        )

    def confirm(self, client_secret: str, payment_method: str, billing: BillingDetails) -> PaymentResult:
        intent_id = intent_id_from_secret(client_secret)
        params = {
            "payment_method": payment_method,
            "metadata": {"billing_name": billing.name, "billing_phone": billing.phone},
        }
        if billing.email:
            params["receipt_email"] = billing.email
        try:
            status, data = self._post(f"/payment_intents/{intent_id}/confirm", params)
        except GatewayError as e:
            logger.warning("stripe confirm for %s failed: %s", intent_id, e)
            return PaymentResult.failure(PaymentErrorCode.GATEWAY_UNAVAILABLE, payment_id=intent_id)

        if status >= 400:
            err = data.get("error") or {}
            code = classify_stripe_error(err)
            logger.info("stripe declined %s: %s", intent_id, err.get("code") or err.get("type"))
            return PaymentResult.failure(code, err.get("message") or "", payment_id=intent_id, raw=data)

        return _result_from_intent(intent_id, data)

    def get_intent(self, intent_id: str) -> Optional[PaymentIntent]:
        """Look up an intent before charging it. Unknown ids give None; transport errors raise GatewayError."""
        status, data = self._get(f"/payment_intents/{intent_id}")
        if status == 404:
            return None
        if status >= 400:
            raise GatewayError(f"Stripe {status}: {data.get('error', data)}")
        return PaymentIntent(
            id=data["id"],
            client_secret=data.get("client_secret") or "",
            amount_minor=int(data.get("amount") or 0),
            currency=str(data.get("currency") or "").upper(),
        )

    def retrieve(self, payment_id: str) -> PaymentResult:
        """Final state of a payment the client confirmed on its own."""
        try:
            status, data = self._get(f"/payment_intents/{payment_id}")
        except GatewayError as e:
            logger.warning("stripe lookup of %s failed: %s", payment_id, e)
            return PaymentResult.failure(PaymentErrorCode.GATEWAY_UNAVAILABLE, payment_id=payment_id)
        if status == 404:
            return PaymentResult.failure(PaymentErrorCode.PAYMENT_NOT_FOUND, payment_id=payment_id, raw=data)
        if status >= 400:
            logger.warning("stripe lookup of %s returned %s", payment_id, status)
            return PaymentResult.failure(PaymentErrorCode.GATEWAY_UNAVAILABLE, payment_id=payment_id, raw=data)
        return _result_from_intent(payment_id, data)


def _result_from_intent(intent_id: str, data: dict) -> PaymentResult:
    status = data.get("status")
    if status != "succeeded":
        if status == "requires_action":
            code = PaymentErrorCode.AUTHENTICATION_REQUIRED
        elif data.get("last_payment_error"):
            code = classify_stripe_error(data["last_payment_error"])
        else:
            code = PaymentErrorCode.PROCESSING_ERROR
        return PaymentResult.failure(code, payment_id=intent_id, raw=data)

    return PaymentResult(
        succeeded=True,
        payment_id=str(data.get("id") or intent_id),
        amount_minor=int(data.get("amount") or 0),
        currency=str(data.get("currency") or "").upper(),
        raw=data,
    )


# Stripe's documented test payment methods, mapped to the outcome they trigger
SANDBOX_OUTCOMES = {
    "pm_card_visa": None,
    "pm_card_mastercard": None,
    "pm_card_chargeDeclined": PaymentErrorCode.CARD_DECLINED,
    "pm_card_chargeDeclinedInsufficientFunds": PaymentErrorCode.INSUFFICIENT_FUNDS,
    "pm_card_chargeDeclinedExpiredCard": PaymentErrorCode.EXPIRED_CARD,
    "pm_card_chargeDeclinedIncorrectCvc": PaymentErrorCode.INCORRECT_CVC,
    "pm_card_chargeDeclinedProcessingError": PaymentErrorCode.PROCESSING_ERROR,
    "pm_card_authenticationRequired": PaymentErrorCode.AUTHENTICATION_REQUIRED,
}


class SandboxGateway:
    """In-process gateway for local development and tests. Never moves money."""

    def __init__(self):
        self._intents: dict[str, PaymentIntent] = {}
        self._results: dict[str, PaymentResult] = {}

    def create_intent(self, amount: Decimal, currency: str, metadata: dict | None = None) -> PaymentIntent:
        intent_id = f"pi_sandbox_{uuid.uuid4().hex[:16]}"
        intent = PaymentIntent(
            id=intent_id,
            client_secret=f"{intent_id}_secret_{uuid.uuid4().hex[:12]}",
            amount_minor=to_minor_units(amount),
            currency=currency.upper(),
        )
        self._intents[intent_id] = intent
        return intent

    def confirm(self, client_secret: str, payment_method: str, billing: BillingDetails) -> PaymentResult:
        intent = self._intents.get(intent_id_from_secret(client_secret))
        if intent is None or intent.client_secret != client_secret:
            return PaymentResult.failure(PaymentErrorCode.PROCESSING_ERROR, "Unknown payment session.")
        prior = self._results.get(intent.id)
        if prior is not None and prior.succeeded:
            # already charged; confirming again does not charge twice
            return prior
        code = SANDBOX_OUTCOMES.get(payment_method, PaymentErrorCode.CARD_DECLINED)
        if code is not None:
            result = PaymentResult.failure(code, payment_id=intent.id)
        else:
            result = PaymentResult(succeeded=True, payment_id=intent.id, amount_minor=intent.amount_minor,
                                   currency=intent.currency)
        self._results[intent.id] = result
        return result

    def get_intent(self, intent_id: str) -> Optional[PaymentIntent]:
        return self._intents.get(intent_id)

    def retrieve(self, payment_id: str) -> PaymentResult:
        if payment_id not in self._intents:
            return PaymentResult.failure(PaymentErrorCode.PAYMENT_NOT_FOUND, payment_id=payment_id)
        # an intent nobody confirmed yet has not been paid
        return self._results.get(payment_id) or PaymentResult.failure(
            PaymentErrorCode.PROCESSING_ERROR, "This payment has not been completed.", payment_id=payment_id)


_sandbox = SandboxGateway()


def get_gateway() -> PaymentGateway:
    if settings.PAYMENT_SANDBOX:
        return _sandbox
    return StripeGateway(StripeConfig(
        secret_key=settings.STRIPE_SECRET_KEY,
        api_base=settings.STRIPE_API_BASE,
        timeout=settings.PAYMENT_TIMEOUT_SECONDS,
    ))
