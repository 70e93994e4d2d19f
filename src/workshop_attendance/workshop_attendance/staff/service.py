from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from .model import StaffMember
from .repository import StaffRepository

logger = logging.getLogger(__name__)


class StaffService:
    """Use case: admins maintain the staff roster and who holds the admin role."""

    def __init__(self, staff: StaffRepository):
        self._staff = staff

    def list_staff(self) -> Sequence[StaffMember]:
        return self._staff.list_roster()

    def add_staff(self, *, email: str, name: Optional[str] = None, is_admin: bool = False) -> StaffMember:
        email = self._normalize_email(email)
        name = (name or "").strip() or None
        self._staff.add_staff(email=email, name=name, is_admin=bool(is_admin))
        member = StaffMember(email=email, name=name or email, is_admin=bool(is_admin))
        logger.info("staff added: %s (admin=%s)", email, member.is_admin)
        return member

    def remove_staff(self, *, email: str) -> None:
        email = self._normalize_email(email)
        self._staff.remove_staff(email)
        logger.info("staff removed: %s", email)

    def set_admin(self, *, email: str, is_admin: bool) -> None:
        email = self._normalize_email(email)
        self._staff.set_admin(email, bool(is_admin))
        logger.info("staff role changed: %s admin=%s", email, bool(is_admin))

    @staticmethod
    def _normalize_email(email: str) -> str:
        email = require_non_empty(email, "Email").lower()
        if "@" not in email:
            raise ValidationError("Email is not valid")
        return email
