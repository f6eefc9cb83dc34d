from __future__ import annotations

from flask import Flask, g, request

from ..api import json_body, make_guards, ok, parse_int
from ..common.datetime_utils import parse_iso_date, parse_optional_date
from ..common.permissions import require_owner_or_admin
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required, _ = make_guards(container)
    service = container.attendance_service

    def _target_user_id() -> int:
        user_id_s = request.args.get("user_id")
        if not user_id_s:
            return g.current_user.user_id
        user_id = parse_int(user_id_s, "user_id")
        require_owner_or_admin(g.current_user, user_id)
        return user_id

    def _day_payload(day) -> dict:
        data = day.to_dict()
        data["work_time"] = service.work_time(day).to_dict()
        return data

    @app.route("/api/attendance", methods=["GET"], endpoint="api_list_attendance")
    @login_required
    def list_attendance():
        user_id = _target_user_id()
        date_s = request.args.get("date")
        if date_s:
            day = service.get_day(user_id=user_id, work_date=parse_iso_date(date_s))
            return ok(_day_payload(day) if day else None)

        days = service.list_days(
            user_id=user_id,
            start=parse_optional_date(request.args.get("start")),
            end=parse_optional_date(request.args.get("end")),
        )
        return ok([_day_payload(d) for d in days])

    @app.route("/api/attendance", methods=["POST"], endpoint="api_save_attendance")
    @login_required
    def save_attendance():
        body = json_body()
        day = service.save_day(
            user_id=g.current_user.user_id,
            work_date=parse_iso_date(body.get("date")),
            log=body.get("attendance_log") or [],
        )
        return ok(_day_payload(day))

    @app.route("/api/attendance/entries", methods=["POST"], endpoint="api_record_attendance_entry")
    @login_required
    def record_entry():
        body = json_body()
        day = service.record_entry(
            user_id=g.current_user.user_id,
            work_date=parse_optional_date(body.get("date")),
            entry_type=body.get("type"),
            at=body.get("time"),
        )
        return ok(_day_payload(day), 201)

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="api_attendance_summary")
    @login_required
    def attendance_summary():
        summary = service.summary(
            user_id=_target_user_id(),
            today=parse_optional_date(request.args.get("today")),
        )
        return ok(summary.to_dict())
