import pytest

from boilerplate.domain.pagination import (
    Paged,
    SortDirection,
    SortField,
    link_range,
    paginate,
    toggle_sort_direction,
)


# ============================================================================
# PAGINATE TESTS
# ============================================================================


def test_paginate_middle_page():
    window = paginate(total_rows=25, page_size=10, current_page=2)

    assert window.total_pages == 3
    assert window.has_previous
    assert window.has_next
    assert window.previous_page == 1
    assert window.next_page == 3
    assert window.first_page == 1
    assert window.last_page == 3


def test_paginate_first_and_last_pages():
    first = paginate(total_rows=20, page_size=10, current_page=1)
    assert not first.has_previous
    assert first.has_next

    last = paginate(total_rows=20, page_size=10, current_page=2)
    assert last.has_previous
    assert not last.has_next
    assert last.next_page is None


def test_paginate_past_last_page_points_back_to_last_page():
    window = paginate(total_rows=25, page_size=10, current_page=5)

    assert window.total_pages == 3
    assert window.has_previous
    assert not window.has_next
    assert window.previous_page == 3
    assert window.next_page is None

    empty = paginate(total_rows=0, page_size=10, current_page=4)
    assert not empty.has_next
    assert empty.previous_page is None


def test_paginate_no_rows():
    window = paginate(total_rows=0, page_size=10, current_page=1)

    assert window.total_pages == 0
    assert not window.has_previous
    assert not window.has_next
    assert window.first_page is None
    assert window.last_page is None


def test_paginate_rejects_non_positive_page_size():
    with pytest.raises(ValueError):
        paginate(total_rows=5, page_size=0, current_page=1)


def test_paged_total_pages_rounds_up():
    assert Paged(data=[], total_rows=3, current_page=1, page_size=2).total_pages == 2
    assert Paged(data=[], total_rows=4, current_page=1, page_size=2).total_pages == 2
    assert Paged(data=[], total_rows=0, current_page=1, page_size=2).total_pages == 0


# ============================================================================
# LINK RANGE TESTS
# ============================================================================


def test_link_range_shows_all_pages_when_few():
    assert link_range(total_pages=5, current_page=3, max_links=10) == (1, 5)
    assert link_range(total_pages=10, current_page=10, max_links=10) == (1, 10)


def test_link_range_centres_on_current_page():
    start, end = link_range(total_pages=20, current_page=10, max_links=10)

    assert end - start + 1 == 10
    assert start <= 10 <= end
    assert 1 <= start and end <= 20
    assert (start, end) == (5, 14)


@pytest.mark.parametrize(
    "current_page, expected",
    [
        (1, (1, 10)),
        (3, (1, 10)),
        (18, (11, 20)),
        (20, (11, 20)),
        (99, (11, 20)),
        (-4, (1, 10)),
    ],
)
def test_link_range_clamps_at_boundaries(current_page, expected):
    assert link_range(total_pages=20, current_page=current_page, max_links=10) == expected


def test_link_range_without_pages_is_empty():
    start, end = link_range(total_pages=0, current_page=1, max_links=10)
    assert list(range(start, end + 1)) == []


def test_link_range_rejects_non_positive_max_links():
    with pytest.raises(ValueError):
        link_range(total_pages=10, current_page=1, max_links=0)


# ============================================================================
# SORT TESTS
# ============================================================================


def test_toggle_sort_direction_same_column_flips():
    assert toggle_sort_direction("name", "name", "asc") is SortDirection.desc
    assert toggle_sort_direction("name", "name", "desc") is SortDirection.asc
    assert toggle_sort_direction(SortField.email, "EMAIL", SortDirection.desc) is SortDirection.asc


def test_toggle_sort_direction_new_column_starts_ascending():
    assert toggle_sort_direction("name", "email", "desc") is SortDirection.asc
    assert toggle_sort_direction("id", "name", "asc") is SortDirection.asc


def test_sort_parsing_falls_back_to_defaults():
    assert SortField.parse("Name") is SortField.name
    assert SortField.parse("password_hash") is SortField.id
    assert SortField.parse(None) is SortField.id
    assert SortDirection.parse("DESC") is SortDirection.desc
    assert SortDirection.parse("up") is SortDirection.asc
