"""Application start-up: the login flow and the main window with its tracker."""

from __future__ import annotations

import argparse
import queue
import threading
import tkinter as tk
from functools import partial
from tkinter import messagebox
from typing import Any, Callable, Sequence

from .gui import LoginWindow, MainWindow
from .network import DEFAULT_BASE_URL, LoginError, SessionClient
from .tracker import ActivityTracker

_POLL_MS = 50
LOGIN_ERROR_TITLE = "Error occured while logging in."


class LoginManager:
    """Runs a login through the client and reports the outcome to callbacks."""

    def __init__(
        self,
        client: SessionClient,
        on_success: Callable[[dict[str, Any]], object],
        on_failure: Callable[[str], object],
    ) -> None:
        self.client = client
        self.on_success = on_success
        self.on_failure = on_failure

    def login(self, username: str, password: str) -> dict[str, Any] | None:
        """Log in; the user record goes to on_success, an error message to on_failure."""
        try:
            user = self.client.login(username, password)
        except LoginError as exc:
            self.on_failure(str(exc))
            return None
        if user is not None:
            self.on_success(user)
        return user


class _Application:
    def __init__(self, root: tk.Tk, client: SessionClient) -> None:
        self.root = root
        self.client = client
        self.tracker: ActivityTracker | None = None
        self.main_window: MainWindow | None = None
        self._events: queue.SimpleQueue[Callable[[], object]] = queue.SimpleQueue()
        self.manager = LoginManager(
            client, self._deferred(self._open_main), self._deferred(self._show_failure)
        )
        self.login_window = LoginWindow(root, self._start_login, on_dismiss=root.quit)
        root.after(_POLL_MS, self._drain)

    def _deferred(self, action: Callable[..., object]) -> Callable[..., None]:
        def schedule(*args: Any) -> None:
            self._events.put(partial(action, *args))

        return schedule

    def _drain(self) -> None:
        while True:
            try:
                action = self._events.get_nowait()
            except queue.Empty:
                break
            action()
        self.root.after(_POLL_MS, self._drain)

    def _start_login(self, username: str, password: str) -> None:
        threading.Thread(
            target=self.manager.login, args=(username, password), daemon=True
        ).start()

    def _toggle_block(self, name: str) -> None:
        if self.tracker is not None:
            self.tracker.on_window_block_toggled(name)

    def _keystroke(self, _event: object) -> None:
        if self.tracker is not None:
            self.tracker.on_keystroke()

    def _mouse_click(self, _event: object) -> None:
        if self.tracker is not None:
            self.tracker.on_mouse_click()

    def _open_main(self, user: dict[str, Any]) -> None:
        if self.tracker is not None:
            return
        self.main_window = MainWindow(
            user, self.root, on_block_toggled=self._toggle_block, on_closing=self._close
        )
        self.tracker = ActivityTracker(user, self.main_window, self.client, start=True)
        self.root.bind_all("<Key>", self._keystroke, add="+")
        self.root.bind_all("<Button>", self._mouse_click, add="+")
        self.login_window.close()

    def _show_failure(self, message: str) -> None:
        messagebox.showwarning(LOGIN_ERROR_TITLE, message, parent=self.login_window.top)

    def _close(self) -> None:
        if self.tracker is not None:
            self.tracker.on_closing()
        self.root.quit()


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="opstrace", description="Track desktop activity.")
    parser.add_argument("--server", default=DEFAULT_BASE_URL, help="base URL of the service")
    parser.add_argument(
        "--live",
        action="store_true",
        help="log in against the server instead of using a fixed session",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Show the login window and run until the main window is closed."""
    args = _parse_args(argv)
    client = SessionClient(args.server, bypass_login=not args.live)
    root = tk.Tk()
    root.withdraw()
    _Application(root, client)
    try:
        root.mainloop()
    finally:
        root.destroy()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())