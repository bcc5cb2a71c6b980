"""Pagination helpers for journal listings."""

from typing import Generic, Sequence, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

MAX_LIMIT = 200


class Page(BaseModel, Generic[T]):
    items: list[T]
    limit: int
    offset: int
    total: int | None = None


def paginate(limit: int, offset: int, max_limit: int = MAX_LIMIT) -> tuple[int, int]:
    """Clamp limit/offset; return (limit, offset)."""
    limit = max(1, min(limit, max_limit))
    offset = max(0, offset)
    return limit, offset


def window(items: Sequence[T], limit: int, offset: int) -> list[T]:
    limit, offset = paginate(limit, offset)
    return list(items[offset:offset + limit])
