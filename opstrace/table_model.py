"""A table of processes with name, uptime and share-status columns."""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Iterable

from .process import Process
from .utils import format_hms

CHECKED_ICON = ":/MainView/Resources/ic_checked.png"
UNCHECKED_ICON = ":/MainView/Resources/ic_unchecked.png"
ICON_SIZE = (18, 18)

_HEADERS = ("Process Name", "Uptime (in secs)", "Data Share Status")


class Role(Enum):
    DISPLAY = "display"
    EDIT = "edit"
    DECORATION = "decoration"


class Orientation(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class ProcessTableModel:
    """Rows of processes shown as a three-column table."""

    def __init__(self) -> None:
        self.rows: list[Process] = []

    def row_count(self) -> int:
        return len(self.rows)

    def column_count(self) -> int:
        return len(_HEADERS)

    def data(self, row: int, column: int, role: Role = Role.DISPLAY) -> str | None:
        """Cell contents for a role; the share-status column gives an icon path."""
        process = self.rows[row]
        if role is Role.DECORATION and column == 2:
            return UNCHECKED_ICON if process.blocked else CHECKED_ICON
        if role not in (Role.DISPLAY, Role.EDIT):
            return None
        if column == 0:
            return process.name
        if column == 1:
            uptime = process.uptime
            return format_hms(uptime // 3600, (uptime % 3600) // 60, uptime % 60)
        return None

    def header_data(
        self,
        section: int,
        orientation: Orientation = Orientation.HORIZONTAL,
        role: Role = Role.DISPLAY,
    ) -> str | None:
        if orientation is not Orientation.HORIZONTAL or role is not Role.DISPLAY:
            return None
        if 0 <= section < len(_HEADERS):
            return _HEADERS[section]
        return None

    def append(self, process: Process) -> None:
        self.rows.append(dataclasses.replace(process))

    def clear(self) -> None:
        self.rows.clear()

    def set_processes(self, processes: Iterable[Process]) -> None:
        """Replace every row with copies of the given processes."""
        self.clear()
        for process in processes:
            self.append(process)

    def update_fast(self, processes: list[Process]) -> None:
        """Refresh uptime and block status in place when the row count is unchanged."""
        if len(self.rows) != len(processes):
            self.set_processes(processes)
            return
        for row, source in zip(self.rows, processes):
            row.uptime = source.uptime
            row.blocked = source.blocked