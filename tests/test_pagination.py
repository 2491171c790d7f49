"""Pagination over the filtered list."""
import pytest

from app.query.pagination import Paginator, page_slice, page_window, total_pages


def test_twenty_five_records_in_pages_of_ten():
    items = list(range(25))
    paginator = Paginator(page_size=10)
    assert paginator.total_pages(len(items)) == 3
    assert paginator.go_to(3, len(items))
    assert paginator.page_items(items) == [20, 21, 22, 23, 24]


def test_pages_concatenate_to_the_full_list():
    items = list(range(23))
    pages = [page_slice(items, page, 10) for page in range(1, total_pages(len(items), 10) + 1)]
    assert [item for page in pages for item in page] == items


def test_empty_list_has_no_pages():
    assert total_pages(0, 10) == 0
    assert Paginator().page_items([]) == []


def test_out_of_range_pages_are_rejected():
    paginator = Paginator(page_size=10)
    assert paginator.go_to(2, 25)
    assert not paginator.go_to(0, 25)
    assert not paginator.go_to(4, 25)
    assert paginator.current_page == 2


def test_page_size_change_resets_to_first_page():
    paginator = Paginator(page_size=10)
    paginator.go_to(3, 100)
    paginator.set_page_size(50)
    assert (paginator.page_size, paginator.current_page) == (50, 1)


def test_invalid_page_size():
    with pytest.raises(ValueError):
        Paginator(page_size=7)
    paginator = Paginator()
    with pytest.raises(ValueError):
        paginator.set_page_size(25)
    assert paginator.page_size == 10


def test_short_window_lists_every_page():
    assert page_window(1, 5) == [1, 2, 3, 4, 5]
    assert page_window(1, 0) == []


def test_window_with_gaps():
    assert page_window(1, 10) == [1, 2, 3, "...", 10]
    assert page_window(5, 10) == [1, "...", 3, 4, 5, 6, 7, "...", 10]
    assert page_window(10, 10) == [1, "...", 8, 9, 10]
