from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..core.exceptions import BackendError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def _form_flag(name: str) -> bool:
    return (request.form.get(name) or "").strip().lower() in {"1", "true", "on", "yes"}


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/staff", methods=["GET", "POST"], endpoint="admin_staff")
    def admin_staff():
        if request.method == "POST":
            try:
                member = container.staff_service.add_staff(
                    email=request.form.get("email", ""),
                    name=request.form.get("name"),
                    is_admin=_form_flag("is_admin"),
                )
                flash(f"Added {member.email}", "success")
                return redirect(url_for("admin_staff"))
            except (ValidationError, BackendError) as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("adding staff failed")
                flash("Unexpected error while adding staff", "danger")

        staff = []
        error = None
        try:
            staff = container.staff_service.list_staff()
        except BackendError as e:
            error = str(e)
        return render_template("admin/staff.html", staff=staff, error=error, active_page="admin_staff")

    @app.route("/admin/staff/delete", methods=["POST"], endpoint="admin_staff_delete")
    def admin_staff_delete():
        try:
            container.staff_service.remove_staff(email=request.form.get("email", ""))
            flash("Removed", "success")
        except (ValidationError, BackendError) as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("removing staff failed")
            flash("Unexpected error while removing staff", "danger")
        return redirect(url_for("admin_staff"))

    @app.route("/admin/staff/role", methods=["POST"], endpoint="admin_staff_role")
    def admin_staff_role():
        try:
            container.staff_service.set_admin(email=request.form.get("email", ""), is_admin=_form_flag("is_admin"))
            flash("Role updated", "success")
        except (ValidationError, BackendError) as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("changing staff role failed")
            flash("Unexpected error while changing role", "danger")
        return redirect(url_for("admin_staff"))
