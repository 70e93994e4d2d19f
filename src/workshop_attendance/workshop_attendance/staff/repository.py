from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import StaffMember


class StaffRepository(Protocol):
    def list_roster(self) -> Sequence[StaffMember]:
        raise NotImplementedError

    def add_staff(self, *, email: str, name: Optional[str], is_admin: bool) -> None:
        raise NotImplementedError

    def remove_staff(self, email: str) -> None:
        raise NotImplementedError

    def set_admin(self, email: str, is_admin: bool) -> None:
        raise NotImplementedError
