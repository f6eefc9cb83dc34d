from __future__ import annotations

from flask import Flask, g

from ..api import json_body, make_guards, ok, parse_int
from ..common.datetime_utils import parse_optional_date
from ..common.validators import optional_bool
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required, _ = make_guards(container)

    @app.route("/api/export-calendar", methods=["POST"], endpoint="api_export_calendar")
    @login_required
    def export_calendar():
        body = json_body()
        days = body.get("days")
        result = container.calendar_export_service.export_calendar(
            user_id=g.current_user.user_id,
            include_events=optional_bool(body.get("include_events"), "include_events", True),
            include_tasks=optional_bool(body.get("include_tasks"), "include_tasks", True),
            days=parse_int(days, "days") if days is not None else None,
            access_token=body.get("access_token"),
            today=parse_optional_date(body.get("today")),
        )
        return ok(result.to_dict())
