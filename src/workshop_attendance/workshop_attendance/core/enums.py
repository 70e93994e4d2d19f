from __future__ import annotations

from enum import Enum


class DayStatus(str, Enum):
    """Display status of one (staff, day) cell in the monthly report."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    OFFDAY = "OFFDAY"
    MC = "MC"
    PENDING = "PENDING"


class DayOverride(str, Enum):
    """Admin-entered day status; supersedes anything derived."""

    OFFDAY = "OFFDAY"
    MC = "MC"

    def as_status(self) -> DayStatus:
        return DayStatus(self.value)


class CheckAction(str, Enum):
    CHECK_IN = "Check-in"
    CHECK_OUT = "Check-out"


class AttendanceSource(str, Enum):
    """Where month rows come from: the aggregation RPC or raw event rows."""

    RPC = "rpc"
    EVENTS = "events"
