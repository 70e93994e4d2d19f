from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_year(value: Any) -> int:
    try:
        year = int(value)
    except (TypeError, ValueError):
        raise ValidationError("year is required (YYYY)")
    if year < 1000 or year > 9999:
        raise ValidationError("year must be a 4-digit number")
    return year


def require_month(value: Any) -> int:
    try:
        month = int(value)
    except (TypeError, ValueError):
        raise ValidationError("month is required (1-12)")
    if month < 1 or month > 12:
        raise ValidationError("month must be between 1 and 12")
    return month
