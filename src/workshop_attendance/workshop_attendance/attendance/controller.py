from __future__ import annotations

import logging

from flask import Flask, render_template

from ..core.exceptions import BackendError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/today", methods=["GET"], endpoint="today")
    def today():
        rows = []
        error = None
        try:
            rows = container.attendance_service.list_today_events()
        except BackendError as e:
            error = str(e)
        return render_template("today.html", rows=rows, error=error, active_page="today")
