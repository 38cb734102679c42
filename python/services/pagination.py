"""
Pagination over in-memory lists.

Used by the list pages (server-rendered and ListPage controllers) after
client-side filtering.

Usage:
    paginator = Paginator(exercises, page_size=12)
    paginator.next_page()
    paginator.current_page_items

    # Filter changed: go back to page 1
    paginator.set_items(filtered)
    paginator.reset_to_first_page()

Invariant: 1 <= current_page <= total_pages, total_pages >= 1.
"""

import math
from typing import Any, Generic, List, Optional, Sequence, Tuple, TypeVar

from core.exceptions import InvalidPageSizeError
from core.responses import PaginationMeta

T = TypeVar("T")


def count_pages(item_count: int, page_size: int) -> int:
    """total_pages = max(1, ceil(item_count / page_size))"""
    return max(1, math.ceil(item_count / page_size))


def _check_page_size(page_size: Any) -> int:
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size < 1:
        raise InvalidPageSizeError(page_size)
    return page_size


class Paginator(Generic[T]):
    """
    Page state over an ordered sequence.
    Only the page number is mutable state; slices are derived on read.
    """

    def __init__(self, items: Sequence[T] = (), page_size: int = 12, reset_key: Any = None):
        self.page_size = _check_page_size(page_size)
        self._items: List[T] = list(items)
        self._current_page = 1
        self._reset_key = reset_key

    # === Derived state ===

    @property
    def items(self) -> List[T]:
        return list(self._items)

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def total_pages(self) -> int:
        return count_pages(len(self._items), self.page_size)

    @property
    def current_page_items(self) -> List[T]:
        start = (self._current_page - 1) * self.page_size
        return self._items[start:start + self.page_size]

    @property
    def has_next(self) -> bool:
        return self._current_page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self._current_page > 1

    # === Navigation ===

    def next_page(self) -> None:
        """Advance one page; no-op on the last page."""
        if self._current_page < self.total_pages:
            self._current_page += 1

    def previous_page(self) -> None:
        """Go back one page; no-op on page 1."""
        if self._current_page > 1:
            self._current_page -= 1

    def set_page(self, page: int) -> int:
        """
        Jump to a page. Out-of-range numbers are clamped into
        [1, total_pages].

        Returns:
            The page actually selected
        """
        self._current_page = min(max(1, int(page)), self.total_pages)
        return self._current_page

    def reset_to_first_page(self) -> None:
        """Call whenever filter criteria change."""
        self._current_page = 1

    # === Inputs ===

    def set_items(self, items: Sequence[T]) -> None:
        """Replace the items; the page goes back to 1."""
        self._items = list(items)
        self.reset_to_first_page()

    def set_reset_key(self, key: Any) -> bool:
        """
        Reset to page 1 when `key` differs from the previous key
        (e.g. the current search term).

        Returns:
            True if the page was reset
        """
        if key == self._reset_key:
            return False
        self._reset_key = key
        self.reset_to_first_page()
        return True

    def pages(self) -> List[List[T]]:
        """All page slices in order."""
        return [
            self._items[start:start + self.page_size]
            for start in range(0, max(len(self._items), 1), self.page_size)
        ]

    def meta(self) -> PaginationMeta:
        return PaginationMeta.create(self._current_page, self.page_size, len(self._items))

    def __repr__(self) -> str:
        return (
            f"Paginator(page={self._current_page}/{self.total_pages}, "
            f"items={len(self._items)}, page_size={self.page_size})"
        )


def paginate(
    items: Sequence[T],
    page: int = 1,
    page_size: int = 20,
) -> Tuple[List[T], PaginationMeta]:
    """
    One-shot pagination for request handlers (`?page=&per_page=`).
    The page is clamped like Paginator.set_page.
    """
    paginator = Paginator(items, page_size=page_size)
    paginator.set_page(page)
    return paginator.current_page_items, paginator.meta()


def matches_search(item: Any, term: Optional[str], fields: Sequence[str] = ("name", "description")) -> bool:
    """
    Case-insensitive substring match over the given fields.
    Works with dicts and objects; an empty term matches everything.
    """
    if not term:
        return True
    needle = term.lower()
    for field in fields:
        value = item.get(field) if isinstance(item, dict) else getattr(item, field, None)
        if value and needle in str(value).lower():
            return True
    return False


def filter_items(items: Sequence[T], term: Optional[str], fields: Sequence[str] = ("name", "description")) -> List[T]:
    return [item for item in items if matches_search(item, term, fields)]
