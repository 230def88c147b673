"""Tk windows for logging in and for watching the tracked activity."""

from __future__ import annotations

import queue
import tkinter as tk
from tkinter import messagebox, ttk
from typing import Any, Callable, Iterable

from .process import Process
from .table_model import ProcessTableModel
from .utils import format_duration

_POLL_MS = 50


def _text(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def user_caption(data: dict[str, Any]) -> str:
    """The "name (id)" line shown for the logged-in user; non-text values show as empty."""
    return f"{_text(data, 'name')} ({_text(data, 'id')})"


def filter_rows(processes: Iterable[Process], text: str) -> list[Process]:
    """Processes whose name contains the text, case-sensitively, in their original order."""
    return [process for process in processes if text in process.name]


class LoginWindow:
    """A username and password form that hands both to a login callback."""

    def __init__(
        self,
        master: tk.Misc,
        on_login: Callable[[str, str], object],
        on_dismiss: Callable[[], object] | None = None,
    ) -> None:
        self.on_login = on_login
        self.top = tk.Toplevel(master)
        self.top.title("Login")
        self.username = tk.StringVar(master=self.top)
        self.password = tk.StringVar(master=self.top)

        frame = ttk.Frame(self.top, padding=12)
        frame.grid(sticky="nsew")
        ttk.Label(frame, text="Username").grid(row=0, column=0, sticky="w")
        ttk.Entry(frame, textvariable=self.username).grid(row=0, column=1, sticky="ew")
        ttk.Label(frame, text="Password").grid(row=1, column=0, sticky="w")
        ttk.Entry(frame, textvariable=self.password, show="*").grid(row=1, column=1, sticky="ew")
        buttons = ttk.Frame(frame)
        buttons.grid(row=2, column=0, columnspan=2, pady=(8, 0))
        ttk.Button(buttons, text="Login", command=self._login_clicked).pack(side="left")
        ttk.Button(buttons, text="Cancel", command=self.clear).pack(side="left")

        if on_dismiss is not None:
            self.top.protocol("WM_DELETE_WINDOW", on_dismiss)

    def _login_clicked(self) -> None:
        self.on_login(self.username.get(), self.password.get())

    def clear(self) -> None:
        """Empty both fields."""
        self.username.set("")
        self.password.set("")

    def close(self) -> None:
        self.top.destroy()


class _Table:
    """A filterable tree view backed by a process table model."""

    def __init__(self, parent: tk.Misc, title: str, name_width: int, uptime_width: int) -> None:
        self.model = ProcessTableModel()
        frame = ttk.LabelFrame(parent, text=title, padding=6)
        self.frame = frame
        self.search = tk.StringVar(master=frame)
        ttk.Entry(frame, textvariable=self.search).pack(fill="x")
        columns = tuple(
            self.model.header_data(section) or "" for section in range(self.model.column_count())
        )
        self.tree = ttk.Treeview(frame, columns=columns, show="headings", selectmode="browse")
        for column, width in zip(columns, (name_width, uptime_width, 120)):
            self.tree.heading(column, text=column)
            self.tree.column(column, width=width)
        self.tree.pack(fill="both", expand=True)
        self.search.trace_add("write", lambda *_: self.refresh())

    @staticmethod
    def _values(process: Process) -> tuple[str, str, str]:
        status = "Hidden" if process.blocked else "Shared"
        return process.name, format_duration(process.uptime), status

    def refresh(self) -> None:
        rows = filter_rows(self.model.rows, self.search.get())
        items = self.tree.get_children()
        if len(items) == len(rows):
            for item, process in zip(items, rows):
                self.tree.item(item, values=self._values(process))
            return
        self.tree.delete(*items)
        for process in rows:
            self.tree.insert("", "end", values=self._values(process))

    def update(self, processes: list[Process]) -> None:
        self.model.update_fast(processes)
        self.refresh()

    def selected_name(self) -> str | None:
        selection = self.tree.selection()
        if not selection:
            return None
        values = self.tree.item(selection[0], "values")
        return str(values[0]) if values else None


class MainWindow:
    """Shows the tracked processes, windows and timers; safe to update from any thread."""

    def __init__(
        self,
        data: dict[str, Any],
        master: tk.Misc,
        *,
        on_block_toggled: Callable[[str], object] | None = None,
        on_closing: Callable[[], object] | None = None,
    ) -> None:
        self.on_block_toggled = on_block_toggled
        self.on_closing = on_closing
        self._pending: queue.SimpleQueue[Callable[[], object]] = queue.SimpleQueue()

        self.top = tk.Toplevel(master)
        self.top.title("OpsTrace")
        body = ttk.Frame(self.top, padding=10)
        body.pack(fill="both", expand=True)

        ttk.Label(body, text=user_caption(data)).grid(row=0, column=0, columnspan=2, sticky="w")
        ttk.Label(body, text=_text(data, "title")).grid(row=1, column=0, columnspan=2, sticky="w")

        self._labels: dict[str, ttk.Label] = {}
        captions = (
            ("active_window", "Active window"),
            ("active_time", "Time on active window"),
            ("total_time", "Total time"),
            ("keyboard_idle", "Keyboard idle"),
            ("mouse_idle", "Mouse idle"),
        )
        for offset, (key, caption) in enumerate(captions, start=2):
            ttk.Label(body, text=f"{caption}:").grid(row=offset, column=0, sticky="w")
            label = ttk.Label(body, text="")
            label.grid(row=offset, column=1, sticky="w")
            self._labels[key] = label

        tables = ttk.Frame(body)
        tables.grid(row=len(captions) + 2, column=0, columnspan=2, sticky="nsew")
        body.rowconfigure(len(captions) + 2, weight=1)
        body.columnconfigure(1, weight=1)
        self.process_table = _Table(tables, "All processes", 180, 96)
        self.process_table.frame.pack(side="left", fill="both", expand=True)
        self.window_table = _Table(tables, "Active windows", 260, 96)
        self.window_table.frame.pack(side="left", fill="both", expand=True)
        self.window_table.tree.bind("<<TreeviewSelect>>", self._window_selected)

        self.top.protocol("WM_DELETE_WINDOW", self._confirm_close)
        self.top.after(_POLL_MS, self._drain)

    def _post(self, action: Callable[[], object]) -> None:
        self._pending.put(action)

    def _drain(self) -> None:
        while True:
            try:
                action = self._pending.get_nowait()
            except queue.Empty:
                break
            action()
        self.top.after(_POLL_MS, self._drain)

    def _set_label(self, key: str, text: str) -> None:
        self._post(lambda: self._labels[key].configure(text=text))

    def _window_selected(self, _event: object) -> None:
        name = self.window_table.selected_name()
        if name is not None and self.on_block_toggled is not None:
            self.on_block_toggled(name)

    def _confirm_close(self) -> None:
        answer = messagebox.askyesnocancel(
            "Ending session?", "Are you sure?\n", parent=self.top, default=messagebox.YES
        )
        if answer is not True:
            return
        if self.on_closing is not None:
            self.on_closing()
        self.top.destroy()

    def update_processes(self, processes: list[Process]) -> None:
        snapshot = list(processes)
        self._post(lambda: self.process_table.update(snapshot))

    def update_windows(self, processes: list[Process]) -> None:
        snapshot = list(processes)
        self._post(lambda: self.window_table.update(snapshot))

    def set_active_window(self, title: str) -> None:
        self._set_label("active_window", title)

    def set_active_window_time(self, text: str) -> None:
        self._set_label("active_time", text)

    def set_total_time(self, text: str) -> None:
        self._set_label("total_time", text)

    def set_keyboard_idle(self, text: str) -> None:
        self._set_label("keyboard_idle", text)

    def set_mouse_idle(self, text: str) -> None:
        self._set_label("mouse_idle", text)