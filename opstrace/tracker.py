"""Accumulates process, window, idle and total time and reports it to the server."""

from __future__ import annotations

import logging
import threading
from typing import Any, Protocol

from .network import LoginError, NetworkWorker, SessionClient
from .process import Process
from .utils import format_duration
from .watchers import ActiveWindowTracker, ElapsedTimeWatcher, ProcessListWatcher, Watcher

log = logging.getLogger(__name__)

KEYBOARD_IDLE_THRESHOLD_IN_SECS = 5
MOUSE_IDLE_THRESHOLD_IN_SECS = 5


class TrackerView(Protocol):
    """What the tracker shows its state on."""

    def update_processes(self, processes: list[Process]) -> None: ...
    def update_windows(self, processes: list[Process]) -> None: ...
    def set_active_window(self, title: str) -> None: ...
    def set_active_window_time(self, text: str) -> None: ...
    def set_total_time(self, text: str) -> None: ...
    def set_keyboard_idle(self, text: str) -> None: ...
    def set_mouse_idle(self, text: str) -> None: ...


class ActivityTracker:
    """Keeps the counters of one user's session and pushes them to a view."""

    def __init__(
        self,
        user: dict[str, Any],
        view: TrackerView | None = None,
        client: SessionClient | None = None,
        *,
        start: bool = False,
    ) -> None:
        self.user = dict(user)
        self.view = view
        self.client = client
        self.worker = NetworkWorker(client, self.on_request_sent) if client else None
        self.processes: list[Process] = []
        self.windows: list[Process] = []
        self.total_time = 0
        self.keyboard_idle_run = 0
        self.total_keyboard_idle = 0
        self.mouse_idle_run = 0
        self.total_mouse_idle = 0
        self._lock = threading.RLock()
        self._watchers: list[Watcher] = []
        if start:
            self._launch()

    def _launch(self) -> None:
        self._watchers = [
            ProcessListWatcher(self.on_process_arrived),
            ActiveWindowTracker(self.on_active_window_changed),
            ElapsedTimeWatcher(self.on_tick),
        ]
        if self.worker is not None:
            self._watchers.append(self.worker)
        for watcher in self._watchers:
            threading.Thread(target=watcher.run, daemon=True).start()

    def on_process_arrived(self, name: str) -> None:
        """Count a second for a seen process, or start tracking a new one."""
        with self._lock:
            matches = [p for p in self.processes if p.name == name]
            for process in matches:
                process.increase_uptime()
            if not matches:
                self.processes.append(Process(name))
            if self.view is not None:
                self.view.update_processes(list(self.processes))

    def on_active_window_changed(self, title: str) -> None:
        """Count a second of focus for the window and show it as active."""
        with self._lock:
            time_text = "0"
            matches = [w for w in self.windows if w.name == title]
            for window in matches:
                window.increase_uptime()
                time_text = format_duration(window.uptime)
            if not matches:
                self.windows.append(Process(title))
            if self.view is not None:
                self.view.update_windows(list(self.windows))
                self.view.set_active_window(title)
                self.view.set_active_window_time(time_text)

    def on_keystroke(self) -> None:
        with self._lock:
            self.keyboard_idle_run = 0

    def on_mouse_click(self) -> None:
        with self._lock:
            self.mouse_idle_run = 0

    def on_tick(self) -> None:
        """Advance one second; idle totals grow once a run passes its threshold."""
        with self._lock:
            self.keyboard_idle_run += 1
            if self.keyboard_idle_run > KEYBOARD_IDLE_THRESHOLD_IN_SECS:
                self.total_keyboard_idle += 1
                if self.view is not None:
                    self.view.set_keyboard_idle(format_duration(self.total_keyboard_idle))
            self.mouse_idle_run += 1
            if self.mouse_idle_run > MOUSE_IDLE_THRESHOLD_IN_SECS:
                self.total_mouse_idle += 1
                if self.view is not None:
                    self.view.set_mouse_idle(format_duration(self.total_mouse_idle))
            self.total_time += 1
            if self.view is not None:
                self.view.set_total_time(format_duration(self.total_time))

    def build_report(self) -> dict[str, Any]:
        """The activity report in the shape the server expects."""
        with self._lock:
            return {
                "total_mouse_freeze_time_in_seconds": self.total_mouse_idle,
                "total_no_keyboard_store_time_in_seconds": self.total_keyboard_idle,
                "process_list_history": [
                    {
                        "process_id": p.process_id,
                        "process_name": p.name,
                        "uptime_in_seconds": p.uptime,
                        "is_hidden": int(p.blocked),
                    }
                    for p in self.processes
                ],
                "active_window_history": [
                    {
                        "active_window_id": w.process_id,
                        "active_window_name": w.name,
                        "focused_time_in_seconds": w.uptime,
                        "is_hidden": int(w.blocked),
                    }
                    for w in self.windows
                ],
            }

    def on_request_sent(self) -> None:
        """Hand the current report to the network worker for the next upload."""
        report = self.build_report()
        if self.worker is not None:
            self.worker.feed(report, self.user)

    def on_window_block_toggled(self, name: str) -> None:
        """Flip whether the named window is hidden from the report."""
        with self._lock:
            for window in self.windows:
                if window.name == name:
                    window.blocked = not window.blocked

    def on_closing(self) -> None:
        """End the session with the server and stop background polling."""
        if self.client is not None:
            try:
                self.client.end_session(self.user)
            except LoginError as exc:
                log.warning("ending session failed: %s", exc)
        for watcher in self._watchers:
            watcher.stop()