from opstrace.gui import filter_rows, user_caption
from opstrace.process import Process


def test_user_caption_joins_name_and_id():
    assert user_caption({"name": "Ada", "id": "42"}) == "Ada (42)"


def test_user_caption_missing_fields_are_empty():
    assert user_caption({}) == " ()"


def test_user_caption_non_text_id_is_empty():
    assert user_caption({"name": "Ada", "id": 42}) == "Ada ()"


def _procs(*names):
    return [Process(name) for name in names]


def test_filter_rows_empty_text_keeps_everything_in_order():
    processes = _procs("bash", "python", "code")
    assert filter_rows(processes, "") == processes


def test_filter_rows_matches_substrings():
    processes = _procs("bash", "python", "ipython", "code")
    result = filter_rows(processes, "python")
    assert [p.name for p in result] == ["python", "ipython"]


def test_filter_rows_is_case_sensitive():
    processes = _procs("Firefox", "firefox")
    result = filter_rows(processes, "fire")
    assert [p.name for p in result] == ["firefox"]


def test_filter_rows_returns_same_objects():
    processes = _procs("alpha", "beta")
    result = filter_rows(processes, "beta")
    assert len(result) == 1
    assert result[0] is processes[1]


def test_filter_rows_no_match_gives_empty_list():
    assert filter_rows(_procs("alpha", "beta"), "gamma") == []