from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import DayOverride


@dataclass(frozen=True)
class DayStatusOverride:
    """Admin-entered Offday/MC for one staff on one day."""

    staff_email: str
    day: date
    status: DayOverride
    note: Optional[str] = None
