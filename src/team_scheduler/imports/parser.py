"""Parse the monthly team schedule grid.

Layout of one tab (titled YYYYMM):

    row 0          header
    rows 1, 4, 7…  member label in column A
    rows 3, 6, 9…  work type per day; day d sits in column 2 + d

Each member owns three consecutive rows; only the label (first row) and the
work type (third row) are read.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, List, Optional, Sequence

from ..core.enums import WorkType
from ..core.exceptions import ValidationError

ROWS_PER_MEMBER = 3
FIRST_DAY_COLUMN_OFFSET = 2
SHEET_RANGE_COLUMNS = "A:AH"

_WORK_TYPE_VALUES = {
    "出社": WorkType.OFFICE,
    "office": WorkType.OFFICE,
    "テレ": WorkType.REMOTE,
    "remote": WorkType.REMOTE,
}

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class SheetEntry:
    label: str
    work_date: date
    work_type: WorkType


def normalize_label(value: Any) -> str:
    if value is None:
        return ""
    return _WHITESPACE.sub(" ", str(value).replace("\n", " ")).strip()


def parse_work_type(value: Any) -> Optional[WorkType]:
    if value is None:
        return None
    v = str(value).strip()
    return _WORK_TYPE_VALUES.get(v) or _WORK_TYPE_VALUES.get(v.lower())


def parse_sheet_month(sheet_name: str) -> tuple[int, int]:
    try:
        parsed = datetime.strptime((sheet_name or "").strip(), "%Y%m")
    except ValueError:
        raise ValidationError(f"Sheet name must be YYYYMM: {sheet_name!r}")
    return parsed.year, parsed.month


def sheet_range(sheet_name: str) -> str:
    return f"{sheet_name}!{SHEET_RANGE_COLUMNS}"


def _cell(row: Sequence[Any], index: int) -> Any:
    return row[index] if index < len(row) else None


def parse_schedule_grid(rows: Sequence[Sequence[Any]], sheet_name: str) -> List[SheetEntry]:
    year, month = parse_sheet_month(sheet_name)
    entries: List[SheetEntry] = []

    for start in range(1, len(rows), ROWS_PER_MEMBER):
        label = normalize_label(_cell(rows[start], 0))
        if not label:
            continue
        type_row_index = start + ROWS_PER_MEMBER - 1
        if type_row_index >= len(rows):
            continue
        type_row = rows[type_row_index]

        for day in range(1, 32):
            work_type = parse_work_type(_cell(type_row, FIRST_DAY_COLUMN_OFFSET + day))
            if work_type is None:
                continue
            try:
                work_date = date(year, month, day)
            except ValueError:
                continue
            entries.append(SheetEntry(label=label, work_date=work_date, work_type=work_type))

    return entries
