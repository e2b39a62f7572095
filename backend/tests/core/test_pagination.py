"""Pagination Contract - limit/offset bounds and the result envelope.

Tests:
    - Defaults applied when limit/offset are absent
    - limit outside [1, max] and negative offset -> ValidationError naming the field
    - Envelope always has limit/offset/total/results; offset past total -> empty results
"""

import pytest

from brc20_api.core.errors import ValidationError
from brc20_api.core.pagination import (
    DEFAULT_API_LIMIT, MAX_API_LIMIT, PageWindow, build_envelope, normalize_page,
)


def test_defaults_when_absent():
    assert normalize_page(None, None) == PageWindow(limit=DEFAULT_API_LIMIT, offset=0)


def test_bounds_are_inclusive():
    assert normalize_page(1, 0).limit == 1
    assert normalize_page(MAX_API_LIMIT, 0).limit == MAX_API_LIMIT


@pytest.mark.parametrize("limit", [0, -1, MAX_API_LIMIT + 1])
def test_limit_out_of_range(limit):
    with pytest.raises(ValidationError) as exc_info:
        normalize_page(limit, 0)
    assert exc_info.value.field == "limit"
    assert exc_info.value.http_status == 400


def test_negative_offset():
    with pytest.raises(ValidationError) as exc_info:
        normalize_page(10, -1)
    assert exc_info.value.field == "offset"


def test_custom_max_limit():
    with pytest.raises(ValidationError):
        normalize_page(11, 0, default_limit=5, max_limit=10)
    assert normalize_page(None, None, default_limit=5, max_limit=10).limit == 5


def test_envelope_shape():
    envelope = build_envelope(PageWindow(2, 0), 3, ["a", "b"])
    assert envelope == {"limit": 2, "offset": 0, "total": 3, "results": ["a", "b"]}


def test_envelope_truncates_to_limit():
    envelope = build_envelope(PageWindow(2, 0), 5, ["a", "b", "c"])
    assert envelope["results"] == ["a", "b"]
    assert envelope["total"] == 5


def test_offset_past_total_is_empty_success():
    envelope = build_envelope(PageWindow(20, 100), 3, [])
    assert envelope == {"limit": 20, "offset": 100, "total": 3, "results": []}


def test_offset_equal_to_total_is_empty():
    assert build_envelope(PageWindow(5, 3), 3, ["stale"])["results"] == []
