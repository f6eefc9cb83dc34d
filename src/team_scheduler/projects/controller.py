from __future__ import annotations

from flask import Flask, g, request

from ..api import json_body, make_guards, ok, parse_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required, _ = make_guards(container)
    service = container.project_service

    def _project_payload(project) -> dict:
        data = project.to_dict()
        data["progress"] = service.progress(project.project_id).to_dict()
        return data

    @app.route("/api/projects", methods=["GET"], endpoint="api_list_projects")
    @login_required
    def list_projects():
        user_id_s = request.args.get("user_id")
        if user_id_s:
            projects = service.list_user_projects(parse_int(user_id_s, "user_id"))
        else:
            projects = service.list_projects(search=request.args.get("search"))
        return ok([_project_payload(p) for p in projects])

    @app.route("/api/projects", methods=["POST"], endpoint="api_create_project")
    @login_required
    def create_project():
        body = json_body()
        project = service.create_project(name=body.get("name", ""), tag=body.get("tag"), detail=body.get("detail"))
        return ok(_project_payload(project), 201)

    @app.route("/api/projects/<project_id>", methods=["GET"], endpoint="api_get_project")
    @login_required
    def get_project(project_id: str):
        return ok(_project_payload(service.get_project(project_id)))

    @app.route("/api/projects/<project_id>", methods=["PUT"], endpoint="api_update_project")
    @login_required
    def update_project(project_id: str):
        project = service.update_project(project_id=project_id, changes=json_body())
        return ok(_project_payload(project))

    @app.route("/api/projects/<project_id>", methods=["DELETE"], endpoint="api_delete_project")
    @login_required
    def delete_project(project_id: str):
        service.delete_project(actor=g.current_user, project_id=project_id)
        return ok()

    @app.route("/api/projects/<project_id>/members", methods=["GET"], endpoint="api_list_project_members")
    @login_required
    def list_members(project_id: str):
        return ok([u.to_dict() for u in service.list_members(project_id)])

    @app.route("/api/projects/<project_id>/members", methods=["POST"], endpoint="api_add_project_member")
    @login_required
    def add_member(project_id: str):
        user_id = parse_int(json_body().get("user_id"), "user_id")
        service.add_member(project_id=project_id, user_id=user_id)
        return ok(status=201)

    @app.route(
        "/api/projects/<project_id>/members/<int:user_id>",
        methods=["DELETE"],
        endpoint="api_remove_project_member",
    )
    @login_required
    def remove_member(project_id: str, user_id: int):
        service.remove_member(project_id=project_id, user_id=user_id)
        return ok()
