from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import month_local_bounds
from ..common.validators import require_month, require_non_empty, require_year
from ..core.enums import DayOverride
from ..core.exceptions import ValidationError
from .model import DayStatusOverride
from .repository import OverrideRepository

logger = logging.getLogger(__name__)


class OverrideService:
    """Use case: admin marks a staff day as Offday or MC (or clears it)."""

    def __init__(self, overrides: OverrideRepository):
        self._overrides = overrides

    def list_month(self, *, year: int, month: int) -> Sequence[DayStatusOverride]:
        start, end = month_local_bounds(require_year(year), require_month(month))
        return self._overrides.list_range(start=start, end=end)

    def set_status(self, *, staff_email: str, day: date, status: str, note: Optional[str] = None) -> DayStatusOverride:
        email = require_non_empty(staff_email, "Staff email").lower()
        try:
            override = DayOverride((status or "").strip().upper())
        except ValueError:
            raise ValidationError("Status must be OFFDAY or MC")

        note = note.strip() if note else None
        self._overrides.set_status(staff_email=email, day=day, status=override, note=note or None)
        logger.info("override set: %s %s -> %s", email, day.isoformat(), override.value)
        return DayStatusOverride(staff_email=email, day=day, status=override, note=note or None)

    def clear_status(self, *, staff_email: str, day: date) -> None:
        email = require_non_empty(staff_email, "Staff email").lower()
        self._overrides.clear_status(staff_email=email, day=day)
        logger.info("override cleared: %s %s", email, day.isoformat())
