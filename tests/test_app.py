import pytest
import requests
import responses

from opstrace.app import LoginManager
from opstrace.network import (
    BYPASS_SESSION,
    DEFAULT_BASE_URL,
    SESSION_FAILED_MESSAGE,
    TIMEOUT_MESSAGE,
    SessionClient,
)

BASE = DEFAULT_BASE_URL


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def _manager(client):
    successes = []
    failures = []
    return LoginManager(client, successes.append, failures.append), successes, failures


def test_bypassed_login_succeeds_with_fixed_session():
    manager, successes, failures = _manager(SessionClient(BASE, bypass_login=True))
    password = "password"
    result = manager.login("user", password)
    assert result == BYPASS_SESSION
    assert successes == [BYPASS_SESSION]
    assert failures == []


def test_wrong_credentials_report_failure(mocked):
    mocked.add(responses.POST, f"{BASE}/login", status=401)
    manager, successes, failures = _manager(SessionClient(BASE, bypass_login=False))
    password = "password"
    assert manager.login("user", password) is None
    assert failures == ["Username & password does not match."]
    assert successes == []


def test_maintenance_reports_failure(mocked):
    mocked.add(responses.POST, f"{BASE}/login", status=404)
    manager, successes, failures = _manager(SessionClient(BASE, bypass_login=False))
    password = "password"
    assert manager.login("user", password) is None
    assert failures == ["Server is currently in maintenance mode."]
    assert successes == []


def test_successful_login_starts_session_and_reports_user(mocked):
    user = {"id": "7", "token": "token"}
    mocked.add(responses.POST, f"{BASE}/login", json=user, status=200)
    mocked.add(responses.POST, f"{BASE}/user/7/session/start", status=200)
    manager, successes, failures = _manager(SessionClient(BASE, bypass_login=False))
    password = "password"
    result = manager.login("user", password)
    assert result == user
    assert successes == [user]
    assert failures == []
    assert mocked.calls[1].request.headers["Authorization"] == "Bearer token"


def test_session_start_failure_reports_failure(mocked):
    mocked.add(responses.POST, f"{BASE}/login", json={"id": "7", "token": "token"}, status=200)
    mocked.add(responses.POST, f"{BASE}/user/7/session/start", status=500)
    manager, successes, failures = _manager(SessionClient(BASE, bypass_login=False))
    password = "password"
    assert manager.login("user", password) is None
    assert failures == [SESSION_FAILED_MESSAGE]
    assert successes == []


def test_unreachable_server_reports_timeout(mocked):
    mocked.add(
        responses.POST, f"{BASE}/login", body=requests.ConnectionError("unreachable")
    )
    manager, successes, failures = _manager(SessionClient(BASE, bypass_login=False))
    password = "password"
    assert manager.login("user", password) is None
    assert failures == [TIMEOUT_MESSAGE]
    assert successes == []


def test_unrecognised_status_reports_nothing(mocked):
    mocked.add(responses.POST, f"{BASE}/login", status=500)
    manager, successes, failures = _manager(SessionClient(BASE, bypass_login=False))
    password = "password"
    assert manager.login("user", password) is None
    assert successes == []
    assert failures == []