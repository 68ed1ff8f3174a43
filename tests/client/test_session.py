import httpx
import pytest

from payroll_service.client.api_client import PayrollApiClient
from payroll_service.client.session import SessionManager, SessionStore

BASE_URL = "http://testserver/api/v1"


@pytest.fixture
def store(tmp_path):
    return SessionStore(tmp_path / "session.json")


@pytest.fixture
def api(app):
    return PayrollApiClient(BASE_URL, transport=httpx.WSGITransport(app=app))


def test_store_roundtrip(store):
    assert store.load() is None
    store.save("abc")
    assert store.load() == "abc"
    store.clear()
    assert store.load() is None
    store.clear()


def test_corrupt_store_reads_as_empty(store):
    store.path.write_text("{not json", encoding="utf-8")
    assert store.load() is None


def test_restore_without_stored_id_shows_onboarding(api, store):
    state = SessionManager(api, store).restore()
    assert not state.is_logged_in
    assert state.stack == "onboarding"


def test_login_then_restore(api, store, business):
    manager = SessionManager(api, store)
    manager.login({"id": business.business_id, "businessEmail": business.business_email})

    restored = SessionManager(api, store).restore()

    assert restored.is_logged_in
    assert restored.stack == "main"
    assert restored.business["id"] == business.business_id


def test_restore_requires_latest_business_to_match(api, store, container, business):
    store.save(business.business_id)
    container.business_service.create(name="B", business_name="Newer", business_email="n@x.example")

    assert SessionManager(api, store).restore().stack == "onboarding"


def test_restore_degrades_to_logged_out_on_api_error(store):
    store.save("abc")
    failing = PayrollApiClient(BASE_URL, transport=httpx.MockTransport(lambda r: httpx.Response(500, json={"success": False, "error": "boom"})))

    assert SessionManager(failing, store).restore().is_logged_in is False


def test_logout_clears_store(api, store, business):
    manager = SessionManager(api, store)
    manager.login({"id": business.business_id})
    state = manager.logout()

    assert state.stack == "onboarding"
    assert store.load() is None
