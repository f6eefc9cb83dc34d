from __future__ import annotations

from flask import Flask, g, request

from ..api import json_body, make_guards, ok, parse_int
from ..common.datetime_utils import parse_optional_date
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required, _ = make_guards(container)
    service = container.event_service

    @app.route("/api/events", methods=["GET"], endpoint="api_list_events")
    @login_required
    def list_events():
        user_id_s = request.args.get("user_id")
        events = service.list_events(
            user_id=parse_int(user_id_s, "user_id") if user_id_s else None,
            start=parse_optional_date(request.args.get("start")),
            end=parse_optional_date(request.args.get("end")),
        )
        return ok([e.to_dict() for e in events])

    @app.route("/api/events", methods=["POST"], endpoint="api_create_event")
    @login_required
    def create_event():
        body = json_body()
        event = service.create_event(
            user_id=g.current_user.user_id,
            title=body.get("title", ""),
            start_time=body.get("start_time", ""),
            end_time=body.get("end_time", ""),
            work_type=body.get("work_type", ""),
            description=body.get("description"),
        )
        return ok(event.to_dict(), 201)

    @app.route("/api/events/<event_id>", methods=["PUT"], endpoint="api_update_event")
    @login_required
    def update_event(event_id: str):
        event = service.update_event(actor=g.current_user, event_id=event_id, changes=json_body())
        return ok(event.to_dict())

    @app.route("/api/events/<event_id>", methods=["DELETE"], endpoint="api_delete_event")
    @login_required
    def delete_event(event_id: str):
        service.delete_event(actor=g.current_user, event_id=event_id)
        return ok()
