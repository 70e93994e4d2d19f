from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.datetime_utils import local_today, parse_iso_date
from ..core.exceptions import BackendError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _parse_day(value: str):
        try:
            return parse_iso_date(value)
        except (TypeError, ValueError):
            raise ValidationError("Day must be YYYY-MM-DD")

    @app.route("/admin/overrides", methods=["GET", "POST"], endpoint="admin_overrides")
    def admin_overrides():
        today = local_today(container.tz)
        year = request.args.get("year") or today.year
        month = request.args.get("month") or today.month

        if request.method == "POST":
            try:
                container.override_service.set_status(
                    staff_email=request.form.get("staff_email", ""),
                    day=_parse_day(request.form.get("day", "")),
                    status=request.form.get("status", ""),
                    note=request.form.get("note") or None,
                )
                flash("Saved", "success")
                return redirect(url_for("admin_overrides", year=year, month=month))
            except (ValidationError, BackendError) as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("saving day status failed")
                flash("Unexpected error while saving day status", "danger")

        rows = []
        staff = []
        error = None
        try:
            rows = container.override_service.list_month(year=year, month=month)
            staff = container.staff_repo.list_roster()
        except (ValidationError, BackendError) as e:
            error = str(e)

        return render_template(
            "admin/overrides.html",
            rows=rows,
            staff=staff,
            year=year,
            month=month,
            today=today.isoformat(),
            error=error,
            active_page="admin_overrides",
        )

    @app.route("/admin/overrides/clear", methods=["POST"], endpoint="admin_overrides_clear")
    def admin_overrides_clear():
        try:
            day = _parse_day(request.form.get("day", ""))
            container.override_service.clear_status(staff_email=request.form.get("staff_email", ""), day=day)
            flash("Cleared", "success")
        except (ValidationError, BackendError) as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("clearing day status failed")
            flash("Unexpected error while clearing day status", "danger")

        return redirect(url_for("admin_overrides", year=request.args.get("year"), month=request.args.get("month")))
