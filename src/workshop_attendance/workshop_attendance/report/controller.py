from __future__ import annotations

import csv
import io
import logging

from flask import Flask, jsonify, render_template, request

from ..common.datetime_utils import local_today
from ..core.exceptions import BackendError, ValidationError
from ..container import Container
from .service import CSV_FIELDS, MonthlyReport, row_view

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _report_to_json(report: MonthlyReport) -> dict:
        return {
            "year": report.year,
            "month": report.month,
            "title": report.title,
            "today": report.today.isoformat(),
            "staff": [
                {
                    "staff_email": g.staff_email,
                    "staff_name": g.staff_name,
                    "late_total_minutes": g.late_total_minutes,
                    "absent_days": g.absent_days,
                    "rows": [row_view(r) for r in g.rows],
                }
                for g in report.groups
            ],
            "pages": [[g.staff_email for g in page] for page in report.pages],
            "mismatches": len(report.mismatches),
        }

    def _render_report(template: str, *, year, month, query=None):
        report = None
        error = None
        status = 200
        try:
            report = container.report_service.build_month_report(year=year, month=month, query=query)
        except ValidationError as e:
            error, status = str(e), 400
        except BackendError as e:
            error, status = f"Failed to load report: {e}", 502
        except Exception:
            logger.exception("monthly report failed")
            error, status = "Unexpected error while building the report", 500

        return (
            render_template(template, report=report, error=error, year=year, month=month, q=query or "", row_view=row_view),
            status,
        )

    @app.route("/report/monthly", methods=["GET"], endpoint="monthly_report")
    def monthly_report():
        today = local_today(container.tz)
        year = request.args.get("year") or today.year
        month = request.args.get("month") or today.month
        return _render_report("report/monthly.html", year=year, month=month, query=request.args.get("q"))

    @app.route("/report/monthly/print", methods=["GET"], endpoint="monthly_report_print")
    def monthly_report_print():
        # The print layout needs an explicit period; no current-month default here.
        return _render_report(
            "report/monthly_print.html",
            year=request.args.get("year"),
            month=request.args.get("month"),
        )

    @app.route("/api/report/monthly", methods=["GET"], endpoint="api_monthly_report")
    def api_monthly_report():
        try:
            report = container.report_service.build_month_report(
                year=request.args.get("year"),
                month=request.args.get("month"),
                query=request.args.get("q"),
            )
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except BackendError as e:
            return jsonify({"success": False, "message": str(e)}), 502
        return jsonify({"success": True, "report": _report_to_json(report)}), 200

    @app.route("/report/monthly.csv", methods=["GET"], endpoint="monthly_report_csv")
    def monthly_report_csv():
        try:
            report = container.report_service.build_month_report(
                year=request.args.get("year"),
                month=request.args.get("month"),
            )
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except BackendError as e:
            return jsonify({"success": False, "message": str(e)}), 502

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for row in container.report_service.export_rows(report):
            writer.writerow(row)

        filename = f"attendance_{report.year:04d}{report.month:02d}.csv"
        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
