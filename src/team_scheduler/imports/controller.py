from __future__ import annotations

from flask import Flask, g, request

from ..api import json_body, make_guards, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    _, admin_required = make_guards(container)
    service = container.sheet_import_service

    @app.route("/api/admin/sheet-names", methods=["GET"], endpoint="api_sheet_names")
    @admin_required
    def sheet_names():
        return ok(service.list_sheet_names(request.args.get("spreadsheet_id", "")))

    @app.route("/api/admin/import-sheets/preview", methods=["POST"], endpoint="api_import_sheets_preview")
    @admin_required
    def import_sheets_preview():
        body = json_body()
        plan = service.preview(spreadsheet_id=body.get("spreadsheet_id", ""), sheet_name=body.get("sheet_name", ""))
        return ok(plan.to_dict(service.users_by_id()))

    @app.route("/api/admin/import-sheets", methods=["POST"], endpoint="api_import_sheets")
    @admin_required
    def import_sheets():
        body = json_body()
        result = service.import_sheet(
            actor=g.current_user,
            spreadsheet_id=body.get("spreadsheet_id", ""),
            sheet_name=body.get("sheet_name", ""),
        )
        return ok(result.to_dict())
