"""
Tests for offset/limit windowing.
"""

from booking.entities import Pagination
from booking.pagination import paginate


class TestPaginate:
    items = [0, 1, 2, 3]

    def test_no_pagination_returns_everything(self):
        assert paginate(self.items) == [0, 1, 2, 3]
        assert paginate(self.items, Pagination()) == [0, 1, 2, 3]

    def test_offset_and_limit(self):
        assert paginate(self.items, Pagination(offset=1, limit=2)) == [1, 2]

    def test_limit_only(self):
        assert paginate(self.items, Pagination(limit=3)) == [0, 1, 2]

    def test_offset_only(self):
        assert paginate(self.items, Pagination(offset=2)) == [2, 3]

    def test_limit_clipped_to_length(self):
        assert paginate(self.items, Pagination(offset=3, limit=10)) == [3]

    def test_offset_past_end_is_empty(self):
        assert paginate(self.items, Pagination(offset=10)) == []

    def test_zero_limit_is_empty(self):
        assert paginate(self.items, Pagination(limit=0)) == []

    def test_accepts_iterators(self):
        assert paginate(iter(self.items), Pagination(offset=1, limit=1)) == [1]
