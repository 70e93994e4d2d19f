from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StaffMember:
    """Roster entry used for display-name resolution."""

    email: str
    name: str
    is_admin: bool = False
