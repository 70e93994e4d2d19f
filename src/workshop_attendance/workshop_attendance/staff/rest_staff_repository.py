from __future__ import annotations

from typing import Optional, Sequence

from ..backend.connection import BackendConnection
from ..backend.rest_base import delete_rows, insert_rows, select_rows, to_text_or_none, update_rows
from .model import StaffMember
from .repository import StaffRepository

STAFF_TABLE = "staff"


class RestStaffRepository(StaffRepository):
    def __init__(self, conn_factory: BackendConnection):
        self._conn_factory = conn_factory

    def list_roster(self) -> Sequence[StaffMember]:
        rows = select_rows(
            self._conn_factory,
            STAFF_TABLE,
            params={"select": "name,email,is_admin", "order": "name.asc"},
        )
        out: list[StaffMember] = []
        for r in rows:
            email = to_text_or_none(r.get("email"))
            if not email:
                continue
            out.append(
                StaffMember(
                    email=email,
                    name=to_text_or_none(r.get("name")) or email,
                    is_admin=bool(r.get("is_admin", False)),
                )
            )
        return out

    def add_staff(self, *, email: str, name: Optional[str], is_admin: bool) -> None:
        insert_rows(self._conn_factory, STAFF_TABLE, [{"email": email, "name": name, "is_admin": bool(is_admin)}])

    def remove_staff(self, email: str) -> None:
        delete_rows(self._conn_factory, STAFF_TABLE, params={"email": f"eq.{email}"})

    def set_admin(self, email: str, is_admin: bool) -> None:
        update_rows(
            self._conn_factory,
            STAFF_TABLE,
            params={"email": f"eq.{email}"},
            values={"is_admin": bool(is_admin)},
        )
