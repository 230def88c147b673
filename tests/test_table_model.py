import pytest

from opstrace.process import Process
from opstrace.table_model import (
    CHECKED_ICON,
    UNCHECKED_ICON,
    Orientation,
    ProcessTableModel,
    Role,
)
from opstrace.utils import format_duration


def _model(*names):
    model = ProcessTableModel()
    model.set_processes(Process(n) for n in names)
    return model


def test_headers():
    model = ProcessTableModel()
    assert [model.header_data(i) for i in range(3)] == [
        "Process Name",
        "Uptime (in secs)",
        "Data Share Status",
    ]
    assert model.header_data(3) is None


def test_header_vertical_or_other_role_is_none():
    model = ProcessTableModel()
    assert model.header_data(0, Orientation.VERTICAL, Role.DISPLAY) is None
    assert model.header_data(0, Orientation.HORIZONTAL, Role.EDIT) is None


def test_counts():
    model = _model("a", "b")
    assert model.row_count() == 2
    assert model.column_count() == 3


def test_name_and_uptime_columns():
    model = ProcessTableModel()
    model.append(Process("bash", uptime=3725))
    assert model.data(0, 0) == "bash"
    assert model.data(0, 0, Role.EDIT) == "bash"
    assert model.data(0, 1) == format_duration(3725)
    assert model.data(0, 2) is None


def test_decoration_icon_follows_block_status():
    model = ProcessTableModel()
    model.append(Process("a"))
    model.append(Process("b", blocked=True))
    assert model.data(0, 2, Role.DECORATION) == CHECKED_ICON
    assert model.data(1, 2, Role.DECORATION) == UNCHECKED_ICON
    assert model.data(0, 0, Role.DECORATION) is None


def test_out_of_range_row_raises():
    with pytest.raises(IndexError):
        ProcessTableModel().data(0, 0)


def test_clear_empties():
    model = _model("a", "b", "c")
    model.clear()
    assert model.row_count() == 0


def test_set_processes_stores_copies():
    source = [Process("a")]
    model = ProcessTableModel()
    model.set_processes(source)
    source[0].uptime = 99
    assert model.rows[0].uptime == 0


def test_update_fast_same_size_keeps_names():
    model = _model("a", "b")
    update = [Process("x", uptime=4), Process("y", uptime=8, blocked=True)]
    model.update_fast(update)
    assert [r.name for r in model.rows] == ["a", "b"]
    assert [r.uptime for r in model.rows] == [4, 8]
    assert [r.blocked for r in model.rows] == [False, True]


def test_update_fast_different_size_replaces():
    model = _model("a")
    model.update_fast([Process("x"), Process("y")])
    assert [r.name for r in model.rows] == ["x", "y"]