"""Test page/limit handling and page metadata."""

import pytest

from vidtube import settings
from vidtube.errors import ValidationError
from vidtube.pagination import normalize_window, paginate


def fetcher(total_items: int):
    """Fake window fetcher over the integers 0..total_items-1."""
    data = list(range(total_items))
    calls = []

    def fetch(skip: int, limit: int):
        calls.append((skip, limit))
        return data[skip : skip + limit], len(data)

    fetch.calls = calls
    return fetch


def test_defaults_apply_when_missing():
    assert normalize_window(None, None) == (1, settings.DEFAULT_PAGE_LIMIT)
    assert normalize_window(None, None, default_limit=2) == (1, 2)


def test_limit_is_capped():
    assert normalize_window(1, settings.MAX_PAGE_LIMIT + 50) == (1, settings.MAX_PAGE_LIMIT)


@pytest.mark.parametrize("page,limit", [(0, 10), (-1, 10), (1, 0), (1, -5)])
def test_non_positive_values_are_rejected(page, limit):
    with pytest.raises(ValidationError):
        normalize_window(page, limit)


def test_page_metadata_middle_page():
    """25 items, 10 per page: page 2 of 3."""
    fetch = fetcher(25)
    result = paginate(fetch, page=2, limit=10)

    assert result.items == list(range(10, 20))
    assert result.total_items == 25
    assert result.total_pages == 3
    assert result.has_next is True
    assert result.has_prev is True
    assert fetch.calls == [(10, 10)]


def test_last_partial_page():
    result = paginate(fetcher(25), page=3, limit=10)

    assert result.items == [20, 21, 22, 23, 24]
    assert result.has_next is False
    assert result.has_prev is True


def test_page_past_the_end_is_empty():
    result = paginate(fetcher(25), page=7, limit=10)

    assert result.items == []
    assert result.total_items == 25
    assert result.total_pages == 3
    assert result.has_next is False


def test_empty_collection():
    result = paginate(fetcher(0), page=1, limit=10)

    assert result.items == []
    assert result.total_pages == 0
    assert result.has_next is False
    assert result.has_prev is False


def test_exact_multiple_has_no_extra_page():
    result = paginate(fetcher(20), page=2, limit=10)

    assert result.total_pages == 2
    assert result.has_next is False
