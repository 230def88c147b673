"""Background pollers for elapsed time, running processes and the focused window."""

from __future__ import annotations

import logging
import subprocess
import sys
import threading
from typing import Callable, Iterable

from .utils import clean_string

log = logging.getLogger(__name__)

_LINUX_PROCESS_COMMAND = r"""top -bn 1 | grep "^ " | awk '{ printf("%-8s\n", $12); }'"""
_WINDOWS_PROCESS_COMMAND = ["cmd", "/C", "echo", "process", "get", "caption", "|", "wmic"]
_WINDOWS_TIMEOUT = 2.0


class Watcher:
    """Calls an action repeatedly, pausing between calls, until stopped."""

    def __init__(self, action: Callable[[], object], interval: float = 1.0) -> None:
        self.action = action
        self.interval = interval
        self._stop = threading.Event()

    def stop(self) -> None:
        self._stop.set()

    def poll(self) -> None:
        self.action()

    def run(self) -> None:
        """Poll until stop() is called; meant as a thread target."""
        while not self._stop.is_set():
            self.poll()
            self._stop.wait(self.interval)


class ElapsedTimeWatcher(Watcher):
    """Emits one tick per interval."""

    def __init__(self, on_tick: Callable[[], object], interval: float = 1.0) -> None:
        super().__init__(on_tick, interval)

    def poll(self) -> None:
        self.action()


def parse_process_listing(text: str) -> list[str]:
    """Turn a process listing into names, skipping the header line and repeats.

    A name is skipped when, ignoring case, it occurs inside the names already kept.
    """
    lines = clean_string(text).splitlines()[1:]
    seen = ""
    names = []
    for name in lines:
        if name.lower() in seen.lower():
            continue
        seen += name
        names.append(name)
    return names


def list_processes() -> list[str]:
    """Names of running processes, or an empty list where they cannot be read."""
    try:
        if sys.platform == "win32":
            result = subprocess.run(
                _WINDOWS_PROCESS_COMMAND,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                timeout=_WINDOWS_TIMEOUT,
            )
        elif sys.platform.startswith("linux"):
            result = subprocess.run(
                _LINUX_PROCESS_COMMAND,
                shell=True,
                stdout=subprocess.PIPE,
                text=True,
                errors="replace",
            )
        else:
            return []
    except (OSError, subprocess.SubprocessError) as exc:
        log.warning("process listing failed: %s", exc)
        return []
    return parse_process_listing(result.stdout or "")


class ProcessListWatcher(Watcher):
    """Reports every running process name once per interval."""

    def __init__(
        self,
        on_process: Callable[[str], object],
        interval: float = 1.0,
        lister: Callable[[], Iterable[str]] = list_processes,
    ) -> None:
        super().__init__(on_process, interval)
        self.lister = lister

    def poll(self) -> None:
        for name in self.lister():
            self.action(name)


def active_window_title() -> str:
    """Title of the focused window via xdotool, or "" when it cannot be read."""
    try:
        result = subprocess.run(
            ["xdotool", "getwindowfocus", "getwindowname"],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            errors="replace",
        )
    except (OSError, subprocess.SubprocessError):
        return ""
    return (result.stdout or "").rstrip("\n")


class ActiveWindowTracker(Watcher):
    """Reports the focused window's title once per interval when there is one."""

    def __init__(
        self,
        on_change: Callable[[str], object],
        interval: float = 1.0,
        title_source: Callable[[], str] = active_window_title,
    ) -> None:
        super().__init__(on_change, interval)
        self.title_source = title_source

    def poll(self) -> None:
        title = self.title_source()
        if title:
            self.action(title)