from __future__ import annotations

from flask import Flask, g

from ..api import json_body, make_guards, ok, parse_int
from ..common.permissions import require_owner_or_admin
from ..common.validators import require_non_empty
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    login_required, _ = make_guards(container)
    service = container.push_service

    @app.route("/api/push/vapid-public-key", methods=["GET"], endpoint="api_push_vapid_public_key")
    def vapid_public_key():
        return ok({"publicKey": service.vapid_public_key()})

    @app.route("/api/push/subscribe", methods=["POST"], endpoint="api_push_subscribe")
    @login_required
    def subscribe():
        service.subscribe(user_id=g.current_user.user_id, subscription=json_body().get("subscription"))
        return ok(status=201)

    @app.route("/api/push/unsubscribe", methods=["DELETE"], endpoint="api_push_unsubscribe")
    @login_required
    def unsubscribe():
        service.unsubscribe(user_id=g.current_user.user_id)
        return ok()

    @app.route("/api/push/send", methods=["POST"], endpoint="api_push_send")
    @login_required
    def send():
        body = json_body()
        user_id = parse_int(body.get("user_id", g.current_user.user_id), "user_id")
        require_owner_or_admin(g.current_user, user_id)
        service.send(
            user_id=user_id,
            title=require_non_empty(body.get("title"), "Title"),
            body=body.get("body") or "",
            data=body.get("data") if isinstance(body.get("data"), dict) else None,
        )
        return ok()

    @app.route("/api/push/notify-admin", methods=["POST"], endpoint="api_push_notify_admin")
    @login_required
    def notify_admin():
        body = json_body()
        admin = container.user_service.get_user(parse_int(body.get("admin_id"), "admin_id"))
        if not admin.is_admin:
            raise ValidationError("admin_id must refer to an admin")
        service.notify_admin(
            admin_id=admin.user_id,
            user_name=require_non_empty(body.get("user_name"), "User name"),
            user_email=require_non_empty(body.get("user_email"), "User email"),
        )
        return ok()
