"""
Unit Tests for pagination helpers
"""
from crowdfund.core.pagination import create_paginated_response, page_offset


def test_page_offset():
    assert page_offset(1, 20) == 0
    assert page_offset(3, 20) == 40
    assert page_offset(0, 20) == 0


def test_metadata_for_middle_page():
    page = create_paginated_response(["c", "d"], total=5, page=2, limit=2)

    assert page["pages"] == 3
    assert page["has_next"] is True
    assert page["has_prev"] is True


def test_metadata_for_empty_listing():
    page = create_paginated_response([], total=0, page=1, limit=20)

    assert page["pages"] == 0
    assert page["has_next"] is False
    assert page["has_prev"] is False
