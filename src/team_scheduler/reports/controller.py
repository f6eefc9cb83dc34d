from __future__ import annotations

from flask import Flask, g, request, send_file

from ..api import make_guards, ok, parse_int
from ..common.datetime_utils import parse_optional_date, today_local
from ..container import Container
from .service import report_to_csv, report_to_xlsx

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def register(app: Flask, container: Container) -> None:
    login_required, _ = make_guards(container)
    service = container.report_service

    def _build():
        """Admins may report on everyone (or ?user_id=); members only see themselves."""
        today = today_local()
        start = parse_optional_date(request.args.get("start")) or today.replace(day=1)
        end = parse_optional_date(request.args.get("end")) or today

        user = g.current_user
        user_id_s = request.args.get("user_id")
        if user.is_admin:
            user_id = parse_int(user_id_s, "user_id") if user_id_s else None
        else:
            user_id = user.user_id

        return start, end, service.build_attendance_report(start=start, end=end, user_id=user_id)

    def _filename(start, end, ext: str) -> str:
        return f"attendance_report_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.{ext}"

    @app.route("/api/attendance/report", methods=["GET"], endpoint="api_attendance_report")
    @login_required
    def attendance_report():
        start, end, data = _build()
        return ok({"start": start.isoformat(), "end": end.isoformat(), "rows": data.rows, "summary": data.summary})

    @app.route("/api/attendance/report.csv", methods=["GET"], endpoint="api_attendance_report_csv")
    @login_required
    def attendance_report_csv():
        start, end, data = _build()
        return app.response_class(
            report_to_csv(data),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={_filename(start, end, 'csv')}"},
        )

    @app.route("/api/attendance/report.xlsx", methods=["GET"], endpoint="api_attendance_report_xlsx")
    @login_required
    def attendance_report_xlsx():
        start, end, data = _build()
        return send_file(
            report_to_xlsx(data),
            download_name=_filename(start, end, "xlsx"),
            as_attachment=True,
            mimetype=XLSX_MIMETYPE,
        )
