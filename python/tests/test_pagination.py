"""Tests for the paginator and search filtering."""
import pytest

from core.exceptions import InvalidPageSizeError
from services.pagination import Paginator, count_pages, filter_items, matches_search, paginate


@pytest.fixture
def paginator() -> Paginator:
    """25 items, 12 per page."""
    return Paginator(list(range(1, 26)), page_size=12)


def test_total_pages(paginator: Paginator) -> None:
    """Test page count and last page slice."""
    assert paginator.total_pages == 3
    assert paginator.current_page == 1
    assert paginator.current_page_items == list(range(1, 13))

    paginator.set_page(3)
    assert paginator.current_page_items == [25]


@pytest.mark.parametrize(
    "item_count,page_size,expected",
    [(0, 12, 1), (1, 12, 1), (12, 12, 1), (13, 12, 2), (25, 12, 3), (100, 1, 100)],
)
def test_count_pages(item_count: int, page_size: int, expected: int) -> None:
    """Test max(1, ceil(n / size))."""
    assert count_pages(item_count, page_size) == expected


def test_empty_list_has_one_page() -> None:
    """Test an empty list shows one empty page."""
    paginator = Paginator([], page_size=12)
    assert paginator.total_pages == 1
    assert paginator.current_page == 1
    assert paginator.current_page_items == []
    assert not paginator.has_next
    assert not paginator.has_previous


def test_next_page_stops_at_last_page(paginator: Paginator) -> None:
    """Test next_page is a no-op on the last page."""
    paginator.next_page()
    paginator.next_page()
    assert paginator.current_page == 3
    assert not paginator.has_next

    paginator.next_page()
    assert paginator.current_page == 3


def test_previous_page_stops_at_first_page(paginator: Paginator) -> None:
    """Test previous_page is a no-op on page 1."""
    paginator.previous_page()
    assert paginator.current_page == 1

    paginator.set_page(2)
    paginator.previous_page()
    assert paginator.current_page == 1


@pytest.mark.parametrize("requested,expected", [(-5, 1), (0, 1), (2, 2), (3, 3), (99, 3)])
def test_set_page_clamps(paginator: Paginator, requested: int, expected: int) -> None:
    """Test out-of-range pages are clamped into [1, total_pages]."""
    assert paginator.set_page(requested) == expected
    assert paginator.current_page == expected


def test_set_items_resets_page(paginator: Paginator) -> None:
    """Test replacing the items goes back to page 1."""
    paginator.set_page(3)
    paginator.set_items(list(range(5)))
    assert paginator.current_page == 1
    assert paginator.total_pages == 1
    assert paginator.current_page_items == [0, 1, 2, 3, 4]


def test_reset_to_first_page(paginator: Paginator) -> None:
    """Test explicit reset after a filter change."""
    paginator.set_page(2)
    paginator.reset_to_first_page()
    assert paginator.current_page == 1


def test_set_reset_key_only_resets_on_change(paginator: Paginator) -> None:
    """Test the reset key behaves like a dependency list."""
    assert paginator.set_reset_key("squat") is True
    paginator.set_page(2)

    assert paginator.set_reset_key("squat") is False
    assert paginator.current_page == 2

    assert paginator.set_reset_key("press") is True
    assert paginator.current_page == 1


def test_pages_cover_every_item_once(paginator: Paginator) -> None:
    """Test concatenating all pages gives back the items in order."""
    pages = paginator.pages()
    assert len(pages) == paginator.total_pages
    assert [item for page in pages for item in page] == paginator.items
    assert all(len(page) <= paginator.page_size for page in pages)


def test_items_are_not_mutated() -> None:
    """Test the paginator copies its input."""
    source = [1, 2, 3]
    paginator = Paginator(source, page_size=2)
    paginator.items.append(4)
    source.append(5)
    assert paginator.items == [1, 2, 3]


@pytest.mark.parametrize("page_size", [0, -1, 1.5, "12", True, None])
def test_invalid_page_size(page_size) -> None:
    """Test page size must be a positive integer."""
    with pytest.raises(InvalidPageSizeError) as exc_info:
        Paginator([1, 2, 3], page_size=page_size)
    assert exc_info.value.status_code == 422


def test_meta(paginator: Paginator) -> None:
    """Test pagination metadata mirrors the paginator."""
    paginator.set_page(2)
    meta = paginator.meta()
    assert meta.page == 2
    assert meta.per_page == 12
    assert meta.total == 25
    assert meta.total_pages == 3
    assert meta.has_next
    assert meta.has_prev


def test_paginate() -> None:
    """Test one-shot pagination for handlers."""
    items, meta = paginate(list("abcdefg"), page=10, page_size=3)
    assert items == ["g"]
    assert meta.page == 3
    assert not meta.has_next


def test_matches_search_is_case_insensitive() -> None:
    """Test name and description are searched without case."""
    item = {"name": "Back Squat", "description": "Barbell on the traps"}
    assert matches_search(item, "squat")
    assert matches_search(item, "BARBELL")
    assert not matches_search(item, "deadlift")
    assert matches_search(item, "")
    assert matches_search(item, None)


def test_filter_items_with_objects() -> None:
    """Test filtering works on attribute-style items and missing fields."""

    class Item:
        def __init__(self, name, description=None):
            self.name = name
            self.description = description

    items = [Item("Bench Press"), Item("Drop set", "Reduce the load"), Item("Plank", "Core")]
    assert [i.name for i in filter_items(items, "load")] == ["Drop set"]
    assert [i.name for i in filter_items(items, "p")] == ["Bench Press", "Drop set", "Plank"]
    assert filter_items(items, "zzz") == []
