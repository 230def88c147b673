"""A tracked process or window and its accumulated uptime."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

_MAX_ID = 2**31 - 1


def _random_id() -> int:
    return random.randint(0, _MAX_ID)


@dataclass
class Process:
    """A named process or window, counted in seconds of uptime."""

    name: str
    process_id: int = field(default_factory=_random_id)
    uptime: int = 0
    blocked: bool = False

    def increase_uptime(self) -> None:
        """Add one second of uptime."""
        self.uptime += 1