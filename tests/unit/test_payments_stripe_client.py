import pytest
import stripe

from paygate.payments.channels import ChannelSelector
from paygate.payments.stripe_client import StripeGateway


def _stripe_object(values):
    return stripe.StripeObject.construct_from(values, "sk_test_obj")


class _Recorder:
    def __init__(self, result):
        self.result = result
        self.calls = []

    def __call__(self, **params):
        self.calls.append(params)
        return self.result


def test_create_session_reads_stripe_object(monkeypatch):
    create = _Recorder(_stripe_object({"id": "cs_test_real", "url": "https://checkout.stripe.com/c/pay/cs_test_real"}))
    monkeypatch.setattr(stripe.checkout.Session, "create", create)

    session = StripeGateway("sk_test_abc").create_session(
        payment_method_types=["card"],
        line_items=[{"price_data": {"currency": "usd", "product_data": {"name": "x"}, "unit_amount": 100}, "quantity": 1}],
        mode="payment",
        success_url="https://a.example/ok",
        cancel_url="https://a.example/ko",
    )

    assert session["id"] == "cs_test_real"
    assert session["url"].endswith("cs_test_real")
    assert len(create.calls) == 1
    assert create.calls[0]["api_key"] == "sk_test_abc"
    assert create.calls[0]["payment_method_types"] == ["card"]
    assert create.calls[0]["mode"] == "payment"

def test_get_capabilities_maps_account_capabilities(monkeypatch):
    account = _stripe_object({
        "id": "acct_1",
        "capabilities": {"card_payments": "active", "sepa_debit_payments": "active"},
    })
    retrieve = _Recorder(account)
    monkeypatch.setattr(stripe.Account, "retrieve", retrieve)

    caps = StripeGateway("sk_test_caps").get_capabilities()

    assert caps == {"card_payments": "active", "sepa_debit_payments": "active"}
    assert retrieve.calls == [{"api_key": "sk_test_caps"}]

def test_get_capabilities_without_capabilities_field(monkeypatch):
    monkeypatch.setattr(stripe.Account, "retrieve", _Recorder(_stripe_object({"id": "acct_2"})))
    assert StripeGateway("sk_test").get_capabilities() == {}

@pytest.mark.parametrize("status,expected", [
    ("active", ["card", "sepa_debit"]),
    ("inactive", ["card"]),
])
def test_selector_with_real_gateway_adds_sepa_when_active(monkeypatch, status, expected):
    account = _stripe_object({"id": "acct_3", "capabilities": {"sepa_debit_payments": status}})
    monkeypatch.setattr(stripe.Account, "retrieve", _Recorder(account))

    outcome = ChannelSelector(StripeGateway("sk_test")).select("eur")

    assert outcome.channels == expected
    assert outcome.degraded is False
