"""Cursor pagination shared by the listing endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Generic, Self, TypeVar

from bloxtrade.transport.errors import InvalidLimitError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable

ItemT = TypeVar("ItemT")


class Limit(IntEnum):
    """Page sizes the service accepts."""

    TEN = 10
    TWENTY_FIVE = 25
    FIFTY = 50
    HUNDRED = 100

    @classmethod
    def parse(cls, value: int) -> Self:
        """Accept a Limit or a plain int; anything outside the set is rejected locally."""
        if isinstance(value, bool):
            raise InvalidLimitError(f"Invalid page size {value!r}")
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(str(m.value) for m in cls)
            raise InvalidLimitError(f"Invalid page size {value!r}. Must be one of {allowed}.") from None


@dataclass(frozen=True)
class Page(Generic[ItemT]):
    """One page of results plus the opaque cursor for the next one.

    ``next_cursor`` alone decides whether more pages exist: the service may
    return an empty page that still has a successor.
    """

    items: list[ItemT]
    next_cursor: str | None = None

    @property
    def is_last(self) -> bool:
        return self.next_cursor is None


async def iterate_pages(
    fetch_page: Callable[[Limit, str | None], Awaitable[Page[ItemT]]],
    limit: Limit = Limit.TEN,
) -> AsyncIterator[Page[ItemT]]:
    """Yield pages from ``fetch_page`` until one comes back without a cursor."""
    cursor: str | None = None
    while True:
        page = await fetch_page(limit, cursor)
        yield page
        if page.is_last:
            return
        cursor = page.next_cursor
