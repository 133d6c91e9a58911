from __future__ import annotations

import csv
import io
from datetime import timedelta

from flask import Flask, jsonify, request

from ..common.datetime_utils import utc_now
from ..common.validators import require_date
from ..core.constants import DEFAULT_REPORT_DAYS
from ..core.exceptions import ReconstructionError, StoreUnavailableError, ValidationError
from ..container import Container

CSV_FIELDS = [
    "date",
    "employee_id",
    "name",
    "email",
    "total_work_minutes",
    "total_break_minutes",
    "worked_hours",
    "is_late",
    "under_hours",
    "status_color",
]


def register(app: Flask, container: Container) -> None:
    def _fail(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    def _range_args():
        today = utc_now().date()
        start_s = request.args.get("start") or (today - timedelta(days=DEFAULT_REPORT_DAYS)).strftime("%Y-%m-%d")
        end_s = request.args.get("end") or today.strftime("%Y-%m-%d")
        return require_date(start_s, "start"), require_date(end_s, "end")

    @app.route("/api/employees/<int:employee_id>/summaries", methods=["GET"], endpoint="api_summaries")
    def api_summaries(employee_id: int):
        """Summaries for ?start=&end= or for a calendar month via ?year=&month=."""
        try:
            year = request.args.get("year", type=int)
            month = request.args.get("month", type=int)
            if year and month:
                items = container.summary_service.get_monthly_summaries(employee_id, year, month)
            else:
                start, end = _range_args()
                items = container.summary_service.get_summaries(employee_id, start, end)
        except ValidationError as e:
            return _fail(str(e), 400)
        except StoreUnavailableError:
            return _fail("Service temporarily unavailable, please retry later", 503)
        return jsonify({"success": True, "summaries": [s.to_dict() for s in items]}), 200

    @app.route("/api/employees/<int:employee_id>/summaries/<day>", methods=["GET"], endpoint="api_daily_summary")
    def api_daily_summary(employee_id: int, day: str):
        try:
            summary = container.summary_service.get_daily_summary(employee_id, require_date(day, "date"))
        except ValidationError as e:
            return _fail(str(e), 400)
        except StoreUnavailableError:
            return _fail("Service temporarily unavailable, please retry later", 503)
        if summary is None:
            return _fail("No report for this date", 404)
        return jsonify({"success": True, "summary": summary.to_dict()}), 200

    @app.route(
        "/api/admin/employees/<int:employee_id>/shifts/<int:log_id>/summary",
        methods=["POST"],
        endpoint="api_admin_resummarize",
    )
    def api_admin_resummarize(employee_id: int, log_id: int):
        """Recompute the summary of the shift closed by end_work ``log_id``."""
        try:
            summary = container.attendance_service.resummarize(employee_id, log_id)
        except ValidationError as e:
            return _fail(str(e), 404)
        except ReconstructionError as e:
            return _fail(str(e), 422)
        except StoreUnavailableError:
            return _fail("Service temporarily unavailable, please retry later", 503)
        return jsonify({"success": True, "summary": summary.to_dict()}), 200

    @app.route("/api/admin/summaries", methods=["GET"], endpoint="api_admin_summaries")
    def api_admin_summaries():
        try:
            start, end = _range_args()
            rows = container.report_service.get_all_employee_summaries(start=start, end=end)
        except ValidationError as e:
            return _fail(str(e), 400)
        except StoreUnavailableError:
            return _fail("Service temporarily unavailable, please retry later", 503)
        return jsonify({"success": True, "summaries": rows}), 200

    @app.route("/api/admin/report", methods=["GET"], endpoint="api_admin_report")
    def api_admin_report():
        try:
            start, end = _range_args()
            data = container.report_service.build_attendance_report(
                start=start,
                end=end,
                employee_id=request.args.get("employee_id", type=int),
            )
        except ValidationError as e:
            return _fail(str(e), 400)
        except StoreUnavailableError:
            return _fail("Service temporarily unavailable, please retry later", 503)
        return jsonify({"success": True, "rows": data.rows, "summary": data.summary}), 200

    @app.route("/api/admin/report.csv", methods=["GET"], endpoint="api_admin_report_csv")
    def api_admin_report_csv():
        try:
            start, end = _range_args()
            data = container.report_service.build_attendance_report(start=start, end=end)
        except ValidationError as e:
            return _fail(str(e), 400)
        except StoreUnavailableError:
            return _fail("Service temporarily unavailable, please retry later", 503)

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS, extrasaction="ignore")
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        filename = f"attendance_report_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
