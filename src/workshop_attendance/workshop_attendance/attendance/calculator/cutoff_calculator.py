from __future__ import annotations

from datetime import time
from typing import Optional

from ...common.datetime_utils import parse_clock
from ...core.enums import DayStatus
from ..model import AttendanceDay
from .base import LatenessCalculator


def minutes_late(check_in: Optional[time], cutoff: time) -> Optional[int]:
    if check_in is None:
        return None
    minutes = (check_in.hour * 60 + check_in.minute) - (cutoff.hour * 60 + cutoff.minute)
    return max(minutes, 0)


class CutoffLatenessCalculator(LatenessCalculator):
    """Standard rule: minutes after the cutoff, never below 0; PRESENT days only."""

    def __init__(self, cutoff: time | str):
        parsed = parse_clock(cutoff)
        if parsed is None:
            raise ValueError(f"Invalid cutoff time: {cutoff!r}")
        self._cutoff = parsed

    @property
    def cutoff(self) -> time:
        return self._cutoff

    def late_minutes(self, day: AttendanceDay, status: DayStatus) -> Optional[int]:
        if status != DayStatus.PRESENT:
            return None
        if day.late_minutes is not None:
            return day.late_minutes
        return minutes_late(day.check_in, self._cutoff)
