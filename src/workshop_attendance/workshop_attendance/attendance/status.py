from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Iterable

from ..core.enums import DayStatus
from .model import AttendanceDay

SUNDAY = 6


class StatusDeriver(ABC):
    """Decides the display status of one attendance day."""

    @abstractmethod
    def derive(self, day: AttendanceDay, *, today: date) -> DayStatus:
        raise NotImplementedError


class PrecedenceStatusDeriver(StatusDeriver):
    """Rules in fixed order, first match wins:

    1. admin override (OFFDAY / MC), even on Sundays and future days
    2. day after `today` -> PENDING
    3. Sunday -> OFFDAY
    4. no check-in -> ABSENT
    5. otherwise PRESENT
    """

    def derive(self, day: AttendanceDay, *, today: date) -> DayStatus:
        if day.override is not None:
            return day.override.as_status()
        if day.day > today:
            return DayStatus.PENDING
        if day.day.weekday() == SUNDAY:
            return DayStatus.OFFDAY
        if not day.has_check_in:
            return DayStatus.ABSENT
        return DayStatus.PRESENT


@dataclass(frozen=True)
class StatusMismatch:
    staff_email: str
    day: date
    backend_status: str
    derived: DayStatus


def find_status_mismatches(days: Iterable[AttendanceDay], deriver: StatusDeriver, *, today: date) -> list[StatusMismatch]:
    """Days whose precomputed backend status disagrees with the local derivation.

    PENDING days are skipped: the backend has no notion of them.
    """

    out: list[StatusMismatch] = []
    for d in days:
        if not d.backend_status:
            continue
        derived = deriver.derive(d, today=today)
        if derived == DayStatus.PENDING:
            continue
        if d.backend_status.strip().upper() != derived.value:
            out.append(StatusMismatch(staff_email=d.staff_email, day=d.day, backend_status=d.backend_status, derived=derived))
    return out
