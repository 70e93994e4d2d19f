from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...core.enums import DayStatus
from ..model import AttendanceDay


class LatenessCalculator(ABC):
    """Calculator interface (Strategy Pattern for lateness)."""

    @abstractmethod
    def late_minutes(self, day: AttendanceDay, status: DayStatus) -> Optional[int]:
        raise NotImplementedError
