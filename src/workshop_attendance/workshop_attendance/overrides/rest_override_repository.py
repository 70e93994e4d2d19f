from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..attendance.rest_attendance_repository import parse_override
from ..backend.connection import BackendConnection
from ..backend.rest_base import call_rpc, select_rows, to_text_or_none
from ..common.datetime_utils import parse_iso_date
from ..core.enums import DayOverride
from .model import DayStatusOverride
from .repository import OverrideRepository

logger = logging.getLogger(__name__)

DAY_STATUS_TABLE = "day_status"
SET_DAY_STATUS_RPC = "set_day_status"
CLEAR_DAY_STATUS_RPC = "clear_day_status"


class RestOverrideRepository(OverrideRepository):
    def __init__(self, conn_factory: BackendConnection):
        self._conn_factory = conn_factory

    def list_range(self, *, start: date, end: date) -> Sequence[DayStatusOverride]:
        rows = select_rows(
            self._conn_factory,
            DAY_STATUS_TABLE,
            params=[
                ("select", "staff_email,day,status,note"),
                ("day", f"gte.{start.isoformat()}"),
                ("day", f"lt.{end.isoformat()}"),
                ("order", "day.asc"),
            ],
        )
        out: list[DayStatusOverride] = []
        for r in rows:
            email = to_text_or_none(r.get("staff_email"))
            status = parse_override(r.get("status"))
            day_s = to_text_or_none(r.get("day"))
            # day_status may also hold ABSENT rows; only Offday/MC override the derivation.
            if not email or status is None or not day_s:
                continue
            try:
                day = parse_iso_date(day_s[:10])
            except ValueError:
                logger.warning("day_status row with invalid day skipped: %r", day_s)
                continue
            out.append(DayStatusOverride(staff_email=email, day=day, status=status, note=to_text_or_none(r.get("note"))))
        return out

    def set_status(self, *, staff_email: str, day: date, status: DayOverride, note: Optional[str] = None) -> None:
        call_rpc(
            self._conn_factory,
            SET_DAY_STATUS_RPC,
            {"p_email": staff_email, "p_day": day.isoformat(), "p_status": status.value, "p_note": note},
        )

    def clear_status(self, *, staff_email: str, day: date) -> None:
        call_rpc(self._conn_factory, CLEAR_DAY_STATUS_RPC, {"p_email": staff_email, "p_day": day.isoformat()})
