import pytest

from opstrace.utils import (
    bytes_to_json,
    clean_string,
    format_duration,
    format_hms,
    json_to_string,
)


def test_json_round_trip():
    obj = {"name": "bash", "uptime": 12, "hidden": False, "items": [1, 2]}
    assert bytes_to_json(json_to_string(obj).encode("utf-8")) == obj


def test_json_to_string_sorts_keys_and_ends_with_newline():
    text = json_to_string({"b": 1, "a": 2})
    assert text.endswith("\n")
    assert text.index('"a"') < text.index('"b"')


@pytest.mark.parametrize("raw", [b"not json", b"[1, 2]", b"", b"42"])
def test_bytes_to_json_non_object_is_empty(raw):
    assert bytes_to_json(raw) == {}


def test_clean_string_collapses_consecutive_duplicates():
    assert clean_string("a  a b\n a") == "a\nb\na\n"


def test_clean_string_empty():
    assert clean_string("   \n\t") == ""


@pytest.mark.parametrize("text", ["x x y", "one\ntwo two\nthree", "p q p q"])
def test_clean_string_idempotent(text):
    once = clean_string(text)
    assert clean_string(once) == once


def test_format_duration_zero():
    assert format_duration(0) == "00:00:00"


@pytest.mark.parametrize("h,m,s", [(0, 0, 5), (1, 2, 3), (12, 59, 59), (100, 0, 7)])
def test_format_duration_matches_hms(h, m, s):
    assert format_duration(h * 3600 + m * 60 + s) == format_hms(h, m, s)


def test_format_hms_has_three_fields():
    parts = format_hms(3, 45, 9).split(":")
    assert [int(p) for p in parts] == [3, 45, 9]
    assert all(len(p) == 2 for p in parts)