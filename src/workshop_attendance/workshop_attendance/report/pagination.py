from __future__ import annotations

from typing import Sequence, TypeVar

from ..core.constants import PRINT_PAGE_SIZE

T = TypeVar("T")


def paginate(items: Sequence[T], size: int = PRINT_PAGE_SIZE) -> list[tuple[T, ...]]:
    """Split into consecutive pages of `size`; the last page may be shorter."""
    if size < 1:
        raise ValueError("page size must be at least 1")
    return [tuple(items[i : i + size]) for i in range(0, len(items), size)]
