"""Formatting and conversion helpers shared by the tracker."""

from __future__ import annotations

import json
from itertools import groupby
from typing import Any


def json_to_string(obj: dict[str, Any]) -> str:
    """Render a JSON object as indented text with sorted keys and a trailing newline."""
    return json.dumps(obj, indent=4, sort_keys=True, ensure_ascii=False) + "\n"


def bytes_to_json(data: bytes | str) -> dict[str, Any]:
    """Parse a JSON object; anything that is not a valid object yields an empty dict."""
    try:
        parsed = json.loads(data)
    except (ValueError, TypeError):
        return {}
    return parsed if isinstance(parsed, dict) else {}


def clean_string(text: str) -> str:
    """Split on whitespace, drop consecutive repeated words, end each word with a newline."""
    return "".join(f"{word}\n" for word, _ in groupby(text.split()))


def _two_digits(value: int) -> str:
    return f"0{value}" if value < 10 else str(value)


def format_hms(hour: int, minute: int, second: int) -> str:
    """Format hours, minutes and seconds as HH:MM:SS, padding values below ten."""
    return ":".join(_two_digits(v) for v in (hour, minute, second))


def format_duration(seconds: int) -> str:
    """Format a non-negative number of seconds as HH:MM:SS."""
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return format_hms(hours, minutes, secs)