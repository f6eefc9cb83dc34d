from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from ..common.permissions import require_admin
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_WORK_END, DEFAULT_WORK_START
from ..core.enums import WorkType
from ..events.model import Event
from ..events.service import EventService
from ..logging_config import get_logger
from ..users.model import User
from ..users.repository import UserRepository
from .matcher import NameMatcher
from .parser import parse_schedule_grid, sheet_range
from .sheets_client import SheetsGateway

logger = get_logger(__name__)

EVENT_TITLES = {
    WorkType.OFFICE: "Office",
    WorkType.REMOTE: "Remote work",
}


@dataclass(frozen=True)
class ImportPlan:
    sheet_name: str
    events: List[Event] = field(default_factory=list)
    unmatched: List[dict] = field(default_factory=list)

    def to_dict(self, users_by_id: dict) -> dict:
        return {
            "sheet_name": self.sheet_name,
            "events": [
                dict(e.to_dict(), user_name=users_by_id[e.user_id].name if e.user_id in users_by_id else None)
                for e in self.events
            ],
            "unmatched": self.unmatched,
            "total": len(self.events),
        }


@dataclass(frozen=True)
class ImportResult:
    sheet_name: str
    imported: int
    skipped: int
    unmatched: List[dict]

    def to_dict(self) -> dict:
        return {
            "sheet_name": self.sheet_name,
            "imported": self.imported,
            "skipped": self.skipped,
            "unmatched": self.unmatched,
        }


class SheetImportService:
    """Use case: turn a monthly schedule tab into office/remote events."""

    def __init__(self, sheets: SheetsGateway, users: UserRepository, events: EventService):
        self._sheets = sheets
        self._users = users
        self._events = events

    def list_sheet_names(self, spreadsheet_id: str) -> List[str]:
        return self._sheets.list_sheet_names(require_non_empty(spreadsheet_id, "Spreadsheet id"))

    def users_by_id(self) -> dict:
        return {u.user_id: u for u in self._users.list_all()}

    def preview(self, *, spreadsheet_id: str, sheet_name: str) -> ImportPlan:
        spreadsheet_id = require_non_empty(spreadsheet_id, "Spreadsheet id")
        sheet_name = require_non_empty(sheet_name, "Sheet name")

        rows = self._sheets.get_values(spreadsheet_id, sheet_range(sheet_name))
        entries = parse_schedule_grid(rows, sheet_name)

        matcher = NameMatcher(self._users.list_all())
        results = {}
        events: List[Event] = []
        for entry in entries:
            result = results.get(entry.label)
            if result is None:
                result = results[entry.label] = matcher.match(entry.label)
            if not result.matched:
                continue
            events.append(
                Event(
                    event_id=str(uuid.uuid4()),
                    user_id=result.user.user_id,
                    title=EVENT_TITLES[entry.work_type],
                    start_time=datetime.combine(entry.work_date, DEFAULT_WORK_START),
                    end_time=datetime.combine(entry.work_date, DEFAULT_WORK_END),
                    work_type=entry.work_type,
                )
            )

        unmatched = [
            {"label": r.label, "reason": r.status, "candidates": list(r.candidates)}
            for r in results.values()
            if not r.matched
        ]
        return ImportPlan(sheet_name=sheet_name, events=events, unmatched=unmatched)

    def import_sheet(self, *, actor: User, spreadsheet_id: str, sheet_name: str) -> ImportResult:
        require_admin(actor)
        plan = self.preview(spreadsheet_id=spreadsheet_id, sheet_name=sheet_name)
        imported = self._events.bulk_create(plan.events)

        logger.info(
            "Sheet imported",
            sheet_name=plan.sheet_name,
            imported=imported,
            skipped=len(plan.events) - imported,
            unmatched=len(plan.unmatched),
            by=actor.user_id,
        )
        return ImportResult(
            sheet_name=plan.sheet_name,
            imported=imported,
            skipped=len(plan.events) - imported,
            unmatched=plan.unmatched,
        )
