from __future__ import annotations

from flask import Flask, g, request

from ..api import json_body, make_guards, ok
from ..common.validators import require_enum
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = make_guards(container)
    service = container.user_service

    @app.route("/api/me", methods=["GET"], endpoint="api_me")
    @login_required
    def me():
        return ok(g.current_user.to_dict())

    @app.route("/api/users", methods=["GET"], endpoint="api_list_users")
    @login_required
    def list_users():
        users = service.list_users(search=request.args.get("search"))
        return ok([u.to_dict() for u in users])

    @app.route("/api/users", methods=["POST"], endpoint="api_pre_register_user")
    @admin_required
    def pre_register_user():
        body = json_body()
        user = service.pre_register(
            actor=g.current_user,
            name=body.get("name", ""),
            email=body.get("email", ""),
            sheet_name=body.get("sheet_name", ""),
            role=require_enum(body.get("role") or Role.MEMBER.value, Role, "role"),
        )
        return ok(user.to_dict(), 201)

    @app.route("/api/users/<int:user_id>", methods=["GET"], endpoint="api_get_user")
    @login_required
    def get_user(user_id: int):
        return ok(service.get_user(user_id).to_dict())

    @app.route("/api/users/<int:user_id>", methods=["DELETE"], endpoint="api_delete_user")
    @admin_required
    def delete_user(user_id: int):
        service.delete_user(actor=g.current_user, user_id=user_id)
        return ok()

    @app.route("/api/users/<int:user_id>/role", methods=["PUT"], endpoint="api_set_user_role")
    @admin_required
    def set_role(user_id: int):
        role = require_enum(json_body().get("role"), Role, "role")
        return ok(service.set_role(actor=g.current_user, user_id=user_id, role=role).to_dict())

    @app.route("/api/users/<int:user_id>/sheet-name", methods=["PUT"], endpoint="api_set_sheet_name")
    @admin_required
    def set_sheet_name(user_id: int):
        sheet_name = json_body().get("sheet_name", "")
        return ok(service.update_sheet_name(actor=g.current_user, user_id=user_id, sheet_name=sheet_name).to_dict())

    @app.route("/api/users/<int:user_id>/google-token", methods=["PUT"], endpoint="api_set_google_token")
    @login_required
    def set_google_token(user_id: int):
        token = json_body().get("access_token")
        service.set_google_token(actor=g.current_user, user_id=user_id, token=token)
        return ok()
