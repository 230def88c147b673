"""Client for the remote session service and the worker that uploads activity reports."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

import requests

from .utils import bytes_to_json, json_to_string
from .watchers import Watcher

log = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost/remoteassistant"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
BYPASS_SESSION = {"id": "12345", "token": "token"}

TIMEOUT_MESSAGE = "Request timed out."
SESSION_FAILED_MESSAGE = "Session could not be started."
_LOGIN_FAILURES = {
    404: "Server is currently in maintenance mode.",
    401: "Username & password does not match.",
}


class LoginError(Exception):
    """Logging in or starting a session with the server failed."""


def _text(user: dict[str, Any], key: str) -> str:
    value = user.get(key)
    return value if isinstance(value, str) else ""


def _nothing() -> None:
    return None


class SessionClient:
    """Talks to the session service over HTTP."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        bypass_login: bool = True,
        session: requests.Session | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.bypass_login = bypass_login
        self.http = session if session is not None else requests.Session()
        self.timeout = timeout

    def _session_url(self, user: dict[str, Any], action: str) -> str:
        return f"{self.base_url}/user/{_text(user, 'id')}/session/{action}"

    @staticmethod
    def _headers(user: dict[str, Any]) -> dict[str, str]:
        return {
            "Content-Type": FORM_CONTENT_TYPE,
            "Authorization": f"Bearer {_text(user, 'token')}",
        }

    def _post_session(self, user: dict[str, Any], action: str) -> None:
        try:
            response = self.http.post(
                self._session_url(user, action),
                data=b"",
                headers=self._headers(user),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise LoginError(SESSION_FAILED_MESSAGE) from exc
        if response.status_code != 200:
            raise LoginError(SESSION_FAILED_MESSAGE)

    def login(self, username: str, password: str) -> dict[str, Any] | None:
        """Log in and start a session, returning the user record.

        While login is bypassed a fixed session is returned without contacting
        the server. An unrecognised status yields None.
        """
        if self.bypass_login:
            return dict(BYPASS_SESSION)
        try:
            response = self.http.post(
                f"{self.base_url}/login",
                data={"username": username, "password": password},
                headers={"Content-Type": FORM_CONTENT_TYPE},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise LoginError(TIMEOUT_MESSAGE) from exc
        if response.status_code == 200:
            return self.start_session(bytes_to_json(response.content))
        if response.status_code in _LOGIN_FAILURES:
            raise LoginError(_LOGIN_FAILURES[response.status_code])
        return None

    def start_session(self, user: dict[str, Any]) -> dict[str, Any]:
        """Open a session for the user and return the user record."""
        self._post_session(user, "start")
        return user

    def end_session(self, user: dict[str, Any]) -> None:
        """Close the user's session."""
        self._post_session(user, "end")

    def send_load(self, payload: dict[str, Any], user: dict[str, Any]) -> dict[str, Any]:
        """Upload an activity report and return the parsed reply."""
        response = self.http.post(
            self._session_url(user, "load"),
            data=json_to_string(payload).encode("utf-8"),
            headers=self._headers(user),
            timeout=self.timeout,
        )
        return bytes_to_json(response.content)


class NetworkWorker(Watcher):
    """Uploads the latest fed report periodically, then asks for a fresh one."""

    def __init__(
        self,
        client: SessionClient,
        on_request_sent: Callable[[], object] = _nothing,
        interval: float = 5.0,
    ) -> None:
        super().__init__(on_request_sent, interval)
        self.client = client
        self._lock = threading.Lock()
        self._payload: dict[str, Any] = {}
        self._user: dict[str, Any] = {}

    def feed(self, payload: dict[str, Any], user: dict[str, Any]) -> None:
        """Replace the report and the user it is sent for."""
        with self._lock:
            self._payload = dict(payload)
            self._user = dict(user)

    def stop(self) -> None:
        super().stop()

    def poll(self) -> dict[str, Any] | None:
        """Send the current report if there is one; return the server's reply."""
        with self._lock:
            payload, user = self._payload, self._user
        if not payload:
            return None
        try:
            return self.client.send_load(payload, user)
        except requests.RequestException as exc:
            log.warning("report upload failed: %s", exc)
            return None

    def run(self) -> None:
        """Send, wait an interval, then signal that a request went out; until stopped."""
        while not self._stop.is_set():
            self.poll()
            self._stop.wait(self.interval)
            self.action()