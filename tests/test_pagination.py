"""分页规划测试"""

import pytest

from hartisize.client import Page
from hartisize.pagination import page_count, paginate


@pytest.mark.parametrize("page_size", [1, 10, 100, 1000])
def test_page_count_zero_total(page_size):
    assert page_count(0, page_size) == 0


@pytest.mark.parametrize(
    "total, expected",
    [
        (1, 1),
        (50, 1),
        (100, 1),
        (101, 2),
        (150, 2),
        (200, 2),
        (250, 3),
        (1000, 10),
    ],
)
def test_page_count_boundaries(total, expected):
    assert page_count(total, 100) == expected


def test_page_count_rounds_half_to_even():
    # 0.9 + 0.6 = 1.5 -> 2，2.9 + 0.6 = 3.5 -> 4
    assert page_count(9, 10) == 2
    assert page_count(29, 10) == 4


@pytest.mark.parametrize("total, page_size", [(10, 0), (10, -1), (-1, 100)])
def test_page_count_rejects_invalid_input(total, page_size):
    with pytest.raises(ValueError):
        page_count(total, page_size)


class RecordingFetcher:
    def __init__(self, total):
        self.total = total
        self.pages = []

    def __call__(self, page, page_size):
        self.pages.append(page)
        start = (page - 1) * page_size
        items = [{"n": i} for i in range(start, min(start + page_size, self.total))]
        return Page(items=items, total_count=self.total)


def test_paginate_empty_result_issues_only_first_request():
    fetch = RecordingFetcher(0)

    assert list(paginate(fetch, 100)) == []
    assert fetch.pages == [1]


def test_paginate_walks_all_pages_in_order():
    fetch = RecordingFetcher(250)

    pages = list(paginate(fetch, 100))

    assert fetch.pages == [1, 2, 3]
    assert [len(page.items) for page in pages] == [100, 100, 50]


def test_paginate_is_lazy():
    fetch = RecordingFetcher(250)

    pages = paginate(fetch, 100)
    assert fetch.pages == []

    next(pages)
    assert fetch.pages == [1]


def test_paginate_propagates_errors():
    def fetch(page, page_size):
        if page == 2:
            raise RuntimeError("boom")
        return Page(items=[{}] * page_size, total_count=300)

    pages = paginate(fetch, 100)
    next(pages)
    with pytest.raises(RuntimeError, match="boom"):
        next(pages)
