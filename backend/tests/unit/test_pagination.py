"""Unit tests for the pagination calculator."""

import pytest

from app.application.services.pagination import (
    MAX_OFFSET,
    clamp_page,
    normalize_limit,
    normalize_page,
    page_window,
    paginate,
)
from app.domain.exceptions import ValidationError


def test_middle_page():
    info = paginate(3, 6, 20)
    assert (info.skip, info.take) == (12, 6)
    assert info.total_pages == 4
    assert info.has_next is True
    assert info.has_prev is True


def test_empty_result_set():
    info = paginate(1, 10, 0)
    assert (info.skip, info.take, info.total_pages) == (0, 10, 0)
    assert info.has_next is False
    assert info.has_prev is False


def test_last_page_has_no_next():
    info = paginate(4, 6, 20)
    assert info.has_next is False
    assert info.has_prev is True


def test_page_beyond_the_end_is_still_computed():
    info = paginate(10, 6, 20)
    assert info.skip == 54
    assert info.has_next is False


def test_huge_page_is_clamped_to_addressable_offset():
    info = paginate(10**20, 10, 0)
    assert info.skip <= MAX_OFFSET
    assert info.page == MAX_OFFSET // 10 + 1
    assert info.skip == (info.page - 1) * 10
    assert info.has_next is False


def test_clamp_page_bounds():
    assert clamp_page(0, 10) == 1
    assert clamp_page(-5, 10) == 1
    assert clamp_page(3, 10) == 3
    assert clamp_page(MAX_OFFSET, 1) == MAX_OFFSET


def test_zero_limit_is_rejected():
    with pytest.raises(ValidationError):
        page_window(1, 0)


@pytest.mark.parametrize(
    "raw, expected",
    [(None, 1), ("", 1), ("abc", 1), ("0", 1), ("-3", 1), ("7", 7), (2, 2), ("1" + "0" * 20, 10**20)],
)
def test_normalize_page(raw, expected):
    assert normalize_page(raw) == expected


def test_normalize_limit_falls_back_and_caps():
    assert normalize_limit(None, 10) == 10
    assert normalize_limit("0", 10) == 10
    assert normalize_limit("25", 10) == 25
    assert normalize_limit("500", 10, maximum=100) == 100
