from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import DayOverride
from .model import DayStatusOverride


class OverrideRepository(Protocol):
    def list_range(self, *, start: date, end: date) -> Sequence[DayStatusOverride]:
        """Overrides with start <= day < end, ordered by day."""

        raise NotImplementedError

    def set_status(self, *, staff_email: str, day: date, status: DayOverride, note: Optional[str] = None) -> None:
        raise NotImplementedError

    def clear_status(self, *, staff_email: str, day: date) -> None:
        raise NotImplementedError
