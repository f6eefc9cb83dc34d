from __future__ import annotations

from flask import Flask, g, request

from ..api import json_body, make_guards, ok, parse_int
from ..common.validators import require_enum
from ..container import Container
from ..core.enums import TaskStatus


def register(app: Flask, container: Container) -> None:
    login_required, _ = make_guards(container)
    service = container.task_service

    @app.route("/api/tasks", methods=["GET"], endpoint="api_list_tasks")
    @login_required
    def list_tasks():
        user_id_s = request.args.get("user_id")
        status_s = request.args.get("status")
        tasks = service.list_tasks(
            user_id=parse_int(user_id_s, "user_id") if user_id_s else None,
            project_id=request.args.get("project_id") or None,
            status=require_enum(status_s, TaskStatus, "status") if status_s else None,
            search=request.args.get("search"),
        )
        return ok([t.to_dict() for t in tasks])

    @app.route("/api/tasks", methods=["POST"], endpoint="api_create_task")
    @login_required
    def create_task():
        body = json_body()
        task = service.create_task(
            user_id=g.current_user.user_id,
            title=body.get("title", ""),
            project_id=body.get("project_id"),
            tag=body.get("tag"),
            due_date=body.get("due_date"),
            detail=body.get("detail"),
            status=body.get("status"),
        )
        return ok(task.to_dict(), 201)

    @app.route("/api/tasks/<task_id>", methods=["PUT"], endpoint="api_update_task")
    @login_required
    def update_task(task_id: str):
        task = service.update_task(actor=g.current_user, task_id=task_id, changes=json_body())
        return ok(task.to_dict())

    @app.route("/api/tasks/<task_id>/status", methods=["PUT"], endpoint="api_set_task_status")
    @login_required
    def set_task_status(task_id: str):
        task = service.set_status(actor=g.current_user, task_id=task_id, status=json_body().get("status"))
        return ok(task.to_dict())

    @app.route("/api/tasks/<task_id>", methods=["DELETE"], endpoint="api_delete_task")
    @login_required
    def delete_task(task_id: str):
        service.delete_task(actor=g.current_user, task_id=task_id)
        return ok()
