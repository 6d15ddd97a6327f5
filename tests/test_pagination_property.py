"""
Property-based tests for pagination math and page-parameter clamping.
"""

import math

from hypothesis import given, settings, strategies as st

from lyrics_api.domain.pagination import PageParams
from lyrics_api.services.pagination import build_page, build_page_params, total_pages


@settings(max_examples=200)
@given(total=st.integers(min_value=0, max_value=10_000), limit=st.integers(min_value=1, max_value=500))
def test_total_pages_is_ceiling_of_total_over_limit(total: int, limit: int):
    assert total_pages(total, limit) == math.ceil(total / limit)


@settings(max_examples=100)
@given(
    raw_page=st.one_of(st.none(), st.text(max_size=6), st.integers(-100, 1000).map(str)),
    raw_limit=st.one_of(st.none(), st.text(max_size=6), st.integers(-100, 1000).map(str)),
)
def test_page_params_are_always_clamped(raw_page, raw_limit):
    params = build_page_params(raw_page, raw_limit, default_limit=20, max_limit=50)

    assert params.page >= 1
    assert 1 <= params.limit <= 50


def test_page_params_examples():
    assert build_page_params(None, None, default_limit=20, max_limit=50) == PageParams(page=1, limit=20)
    assert build_page_params("0", "500", default_limit=20, max_limit=50) == PageParams(page=1, limit=50)
    assert build_page_params("abc", "-3", default_limit=20, max_limit=50) == PageParams(page=1, limit=1)
    assert build_page_params(" 3 ", "10", default_limit=20, max_limit=50).offset == 20


def test_page_beyond_last_is_empty_not_an_error():
    page = build_page([], total=1, params=PageParams(page=2, limit=1))

    assert page.items == []
    assert page.total == 1
    assert page.page == 2
    assert page.total_pages == 1


def test_empty_result_has_zero_pages():
    assert total_pages(0, 20) == 0


def test_huge_page_is_clamped_to_a_bindable_offset():
    params = build_page_params("9" * 40, "50", default_limit=20, max_limit=50)

    assert params.page > 1
    assert params.offset <= 2**63 - 1
