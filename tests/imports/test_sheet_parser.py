from __future__ import annotations

from datetime import date

import pytest

from team_scheduler.core.enums import WorkType
from team_scheduler.core.exceptions import ValidationError
from team_scheduler.imports.parser import normalize_label, parse_schedule_grid, parse_work_type, sheet_range


def _type_row(cells: dict) -> list:
    row = [""] * 34
    for day, value in cells.items():
        row[2 + day] = value
    return row


def test_normalize_label_collapses_whitespace():
    assert normalize_label("  Ota\n（Fri） ") == "Ota （Fri）"
    assert normalize_label("A \t  B") == "A B"
    assert normalize_label(None) == ""


def test_parse_work_type_values():
    assert parse_work_type("出社") == WorkType.OFFICE
    assert parse_work_type(" テレ ") == WorkType.REMOTE
    assert parse_work_type("Office") == WorkType.OFFICE
    assert parse_work_type("休み") is None
    assert parse_work_type("") is None


def test_parse_grid_reads_third_row_of_each_member():
    rows = [
        ["header"],
        ["Yamada"],
        ["note row"],
        _type_row({1: "出社", 2: "テレ", 3: "休"}),
        ["Sato\n（Tue）"],
        [],
        _type_row({28: "remote"}),
    ]

    entries = parse_schedule_grid(rows, "202502")

    assert [(e.label, e.work_date, e.work_type) for e in entries] == [
        ("Yamada", date(2025, 2, 1), WorkType.OFFICE),
        ("Yamada", date(2025, 2, 2), WorkType.REMOTE),
        ("Sato （Tue）", date(2025, 2, 28), WorkType.REMOTE),
    ]


def test_parse_grid_skips_impossible_dates_and_incomplete_blocks():
    rows = [
        ["header"],
        ["Yamada"],
        [],
        _type_row({29: "出社", 30: "出社", 31: "出社"}),
        ["Truncated"],
        [],
    ]

    assert parse_schedule_grid(rows, "202502") == []
    assert len(parse_schedule_grid(rows, "202403")) == 3


def test_parse_grid_requires_yyyymm_sheet_name():
    with pytest.raises(ValidationError):
        parse_schedule_grid([], "March")


def test_sheet_range_covers_31_days():
    assert sheet_range("202502") == "202502!A:AH"
