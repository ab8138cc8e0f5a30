import os

# Désactive l'init fastapi-limiter (évite toute connexion Redis pendant les tests)
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

import pytest
from typing import Any, Dict, Generator, List, Optional
from fastapi.testclient import TestClient

from paygate.app import app as fastapi_app

PAYMENT_ENV_VARS = (
    "STRIPE_SECRET_KEY",
    "STRIPE_PUBLIC_KEY",
    "STRIPE_PUBLISHABLE_KEY",
    "SUPABASE_URL",
    "VITE_SUPABASE_URL",
    "NEXT_PUBLIC_SUPABASE_URL",
    "SUPABASE_SERVICE_KEY",
    "SUPABASE_SERVICE_ROLE",
    "SUPABASE_ANON_KEY",
    "VITE_SUPABASE_ANON_KEY",
    "LOCAL_RATE_LIMIT_FALLBACK",
)

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "tests/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)
        elif "tests/functional/" in nodeid:
            item.add_marker(pytest.mark.functional)

@pytest.fixture(scope="session")
def app():
    return fastapi_app

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c

# Un .env local ne doit pas fuiter dans les tests
@pytest.fixture(autouse=True)
def _clean_payment_env(monkeypatch):
    for name in PAYMENT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class FakeGateway:
    """
    Faux StripeGateway: sert aussi de factory (appelé avec la clé secrète).
    Compte les créations de session et les sondes de capacités.
    """

    def __init__(self, session_id: str = "cs_test_123", capabilities: Optional[Dict[str, Any]] = None):
        self.session_id = session_id
        self.capabilities = capabilities or {}
        self.probe_error: Optional[Exception] = None
        self.create_error: Optional[Exception] = None
        self.api_keys: List[str] = []
        self.created: List[Dict[str, Any]] = []
        self.probe_calls = 0

    def __call__(self, api_key: str) -> "FakeGateway":
        self.api_keys.append(api_key)
        return self

    def create_session(self, **params) -> Dict[str, Any]:
        self.created.append(params)
        if self.create_error:
            raise self.create_error
        return {"id": self.session_id, "url": f"https://checkout.stripe.test/{self.session_id}"}

    def get_capabilities(self) -> Dict[str, Any]:
        self.probe_calls += 1
        if self.probe_error:
            raise self.probe_error
        return self.capabilities


class FakeStore:
    """Faux SiteConfigStore: factory (url, key) + ligne site_config configurable."""

    def __init__(self, record: Optional[Dict[str, Any]] = None):
        self.record = record
        self.error: Optional[Exception] = None
        self.calls: List[tuple] = []
        self.queried: List[tuple] = []

    def __call__(self, url: str, key: str) -> "FakeStore":
        self.calls.append((url, key))
        return self

    def get_credential_record(self, *columns: str) -> Optional[Dict[str, Any]]:
        self.queried.append(columns)
        if self.error:
            raise self.error
        return self.record


@pytest.fixture
def fake_gateway(monkeypatch) -> FakeGateway:
    gateway = FakeGateway()
    monkeypatch.setattr("paygate.payments.service.StripeGateway", gateway)
    return gateway

@pytest.fixture
def fake_store(monkeypatch) -> FakeStore:
    store = FakeStore()
    monkeypatch.setattr("paygate.payments.credentials.SiteConfigStore", store)
    return store

@pytest.fixture
def stripe_env(monkeypatch):
    monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_test_env")

@pytest.fixture
def supabase_env(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "proj.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", "service-role-key")
