from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask, redirect, url_for

from config import get_settings_module

from .container import build_container
from .attendance.controller import register as register_attendance
from .overrides.controller import register as register_overrides
from .report.controller import register as register_report
from .staff.controller import register as register_staff

logger = logging.getLogger(__name__)


def create_app(*, container=None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    backend_config = getattr(settings, "BACKEND_CONFIG")
    if container is None:
        container = build_container(
            backend_config=backend_config,
            local_timezone=getattr(settings, "LOCAL_TIMEZONE"),
            late_cutoff=getattr(settings, "LATE_CUTOFF"),
            attendance_source=getattr(settings, "ATTENDANCE_SOURCE", "rpc"),
        )
    logger.info(
        "settings=%s backend=%s tz=%s cutoff=%s",
        settings_module,
        backend_config.get("url"),
        container.tz.key,
        getattr(settings, "LATE_CUTOFF"),
    )

    register_report(app, container)
    register_attendance(app, container)
    register_overrides(app, container)
    register_staff(app, container)

    @app.route("/", endpoint="index")
    def index():
        return redirect(url_for("monthly_report"))

    return app
