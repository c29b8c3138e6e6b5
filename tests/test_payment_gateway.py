from decimal import Decimal

import pytest
import requests

from summercamp.services.payment_gateway import (
    BillingDetails,
    GatewayError,
    PaymentErrorCode,
    SandboxGateway,
    StripeConfig,
    StripeGateway,
    intent_id_from_secret,
)


class FakeResponse:
    def __init__(self, status_code, data):
        self.status_code = status_code
        self._data = data
        self.text = "x"

    def json(self):
        return self._data


class FakeSession:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def post(self, url, data=None, headers=None, timeout=None):
        self.calls.append({"url": url, "data": data, "headers": headers, "timeout": timeout})
        r = self.responses.pop(0)
        if isinstance(r, Exception):
            raise r
        return r

    def get(self, url, headers=None, timeout=None):
        return self.post(url, headers=headers, timeout=timeout)


def stripe(*responses):
    session = FakeSession(*responses)
    return StripeGateway(StripeConfig(secret_key="sk_test_123", timeout=7), session=session), session


def test_intent_id_from_client_secret():
    assert intent_id_from_secret("pi_abc_secret_xyz") == "pi_abc"


def test_stripe_create_intent_sends_minor_units():
    gw, session = stripe(FakeResponse(200, {"id": "pi_1", "client_secret": "pi_1_secret_2", "amount": 72188,
                                            "currency": "aed"}))
    intent = gw.create_intent(Decimal("721.88"), "AED", metadata={"plan": "1-Day Access"})
    call = session.calls[0]
    assert call["url"] == "https://api.stripe.com/v1/payment_intents"
    assert call["data"]["amount"] == 72188
    assert call["data"]["currency"] == "aed"
    assert call["data"]["metadata[plan]"] == "1-Day Access"
    assert call["headers"]["Authorization"] == "Bearer sk_test_123"
    assert "Idempotency-Key" in call["headers"]
    assert call["timeout"] == 7
    assert (intent.id, intent.client_secret, intent.amount_minor, intent.currency) == \
        ("pi_1", "pi_1_secret_2", 72188, "AED")


def test_stripe_create_intent_error_raises():
    gw, _ = stripe(FakeResponse(401, {"error": {"message": "Invalid API Key"}}))
    with pytest.raises(GatewayError):
        gw.create_intent(Decimal("10"), "AED")


def test_stripe_confirm_success():
    gw, session = stripe(FakeResponse(200, {"id": "pi_1", "status": "succeeded", "amount": 15750, "currency": "aed"}))
    result = gw.confirm("pi_1_secret_2", "pm_123", BillingDetails(name="Mariam", email="m@example.com"))
    assert session.calls[0]["url"].endswith("/payment_intents/pi_1/confirm")
    assert session.calls[0]["data"]["receipt_email"] == "m@example.com"
    assert result.succeeded and result.payment_id == "pi_1" and result.amount_minor == 15750


@pytest.mark.parametrize("error,code", [
    ({"type": "card_error", "code": "card_declined", "decline_code": "insufficient_funds"},
     PaymentErrorCode.INSUFFICIENT_FUNDS),
    ({"type": "card_error", "code": "expired_card"}, PaymentErrorCode.EXPIRED_CARD),
    ({"type": "card_error", "code": "card_declined", "decline_code": "generic_decline"},
     PaymentErrorCode.CARD_DECLINED),
    ({"type": "api_error"}, PaymentErrorCode.PROCESSING_ERROR),
])
def test_stripe_confirm_typed_declines(error, code):
    gw, _ = stripe(FakeResponse(402, {"error": {**error, "message": "Declined"}}))
    result = gw.confirm("pi_1_secret_2", "pm_123", BillingDetails())
    assert not result.succeeded
    assert result.error_code is code
    assert result.message == "Declined"


def test_stripe_confirm_requires_action():
    gw, _ = stripe(FakeResponse(200, {"id": "pi_1", "status": "requires_action"}))
    result = gw.confirm("pi_1_secret_2", "pm_123", BillingDetails())
    assert result.error_code is PaymentErrorCode.AUTHENTICATION_REQUIRED


def test_stripe_timeout_is_a_gateway_failure_not_an_exception():
    gw, _ = stripe(requests.Timeout("read timed out"))
    result = gw.confirm("pi_1_secret_2", "pm_123", BillingDetails())
    assert result.error_code is PaymentErrorCode.GATEWAY_UNAVAILABLE


def test_stripe_requires_secret_key():
    with pytest.raises(GatewayError):
        StripeGateway(StripeConfig(secret_key=""))


def test_sandbox_outcomes():
    gw = SandboxGateway()
    intent = gw.create_intent(Decimal("157.5"), "aed")
    assert intent.amount_minor == 15750 and intent.currency == "AED"
    ok = gw.confirm(intent.client_secret, "pm_card_visa", BillingDetails())
    assert ok.succeeded and ok.payment_id == intent.id
    other = gw.create_intent(Decimal("157.5"), "aed")
    declined = gw.confirm(other.client_secret, "pm_card_chargeDeclinedInsufficientFunds", BillingDetails())
    assert declined.error_code is PaymentErrorCode.INSUFFICIENT_FUNDS
    assert declined.message == "Your card has insufficient funds."


def test_sandbox_rejects_unknown_session():
    gw = SandboxGateway()
    result = gw.confirm("pi_nope_secret_nope", "pm_card_visa", BillingDetails())
    assert not result.succeeded


def test_sandbox_does_not_charge_twice():
    gw = SandboxGateway()
    intent = gw.create_intent(Decimal("262.5"), "AED")
    first = gw.confirm(intent.client_secret, "pm_card_visa", BillingDetails())
    again = gw.confirm(intent.client_secret, "pm_card_chargeDeclined", BillingDetails())
    assert again is first


def test_sandbox_retrieve_reports_final_state():
    gw = SandboxGateway()
    paid = gw.create_intent(Decimal("262.5"), "AED")
    declined = gw.create_intent(Decimal("262.5"), "AED")
    pending = gw.create_intent(Decimal("262.5"), "AED")
    gw.confirm(paid.client_secret, "pm_card_visa", BillingDetails())
    gw.confirm(declined.client_secret, "pm_card_chargeDeclined", BillingDetails())

    ok = gw.retrieve(paid.id)
    assert ok.succeeded and ok.amount_minor == 26250
    assert gw.retrieve(declined.id).error_code is PaymentErrorCode.CARD_DECLINED
    assert not gw.retrieve(pending.id).succeeded
    assert gw.retrieve("pi_made_up").error_code is PaymentErrorCode.PAYMENT_NOT_FOUND
    assert gw.get_intent(pending.id) is pending
    assert gw.get_intent("pi_made_up") is None


def test_stripe_get_intent():
    gw, session = stripe(FakeResponse(200, {"id": "pi_1", "client_secret": "pi_1_secret_2", "amount": 26250,
                                            "currency": "aed", "status": "requires_payment_method"}))
    intent = gw.get_intent("pi_1")
    assert session.calls[0]["url"] == "https://api.stripe.com/v1/payment_intents/pi_1"
    assert session.calls[0]["headers"]["Authorization"] == "Bearer sk_test_123"
    assert (intent.id, intent.amount_minor, intent.currency) == ("pi_1", 26250, "AED")


def test_stripe_get_intent_unknown_and_errors():
    gw, _ = stripe(FakeResponse(404, {"error": {"code": "resource_missing"}}),
                   FakeResponse(500, {"error": {"message": "boom"}}))
    assert gw.get_intent("pi_nope") is None
    with pytest.raises(GatewayError):
        gw.get_intent("pi_1")


def test_stripe_retrieve_succeeded():
    gw, _ = stripe(FakeResponse(200, {"id": "pi_1", "status": "succeeded", "amount": 26250, "currency": "aed"}))
    result = gw.retrieve("pi_1")
    assert result.succeeded and result.amount_minor == 26250 and result.currency == "AED"


def test_stripe_retrieve_failed_payment_is_classified():
    gw, _ = stripe(FakeResponse(200, {
        "id": "pi_1",
        "status": "requires_payment_method",
        "last_payment_error": {"type": "card_error", "code": "card_declined", "decline_code": "insufficient_funds"},
    }))
    result = gw.retrieve("pi_1")
    assert not result.succeeded
    assert result.error_code is PaymentErrorCode.INSUFFICIENT_FUNDS


def test_stripe_retrieve_unknown_and_unreachable():
    gw, _ = stripe(FakeResponse(404, {"error": {"code": "resource_missing"}}), requests.ConnectionError("down"))
    assert gw.retrieve("pi_made_up").error_code is PaymentErrorCode.PAYMENT_NOT_FOUND
    assert gw.retrieve("pi_1").error_code is PaymentErrorCode.GATEWAY_UNAVAILABLE
