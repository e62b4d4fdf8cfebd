"""Tests for pagination results."""

import dataclasses

import pytest

from keyset_pager.result import PaginationResult


class TestPaginationResult:
    """Test PaginationResult predicates."""

    def test_defaults(self):
        result = PaginationResult()

        assert result.results_count == 0
        assert result.previous_cursor is None
        assert result.current_cursor is None
        assert result.next_cursor is None

    @pytest.mark.parametrize("count,previous,current,expected", [
        (2, None, None, True),
        (2, None, "abc", True),
        (2, "abc", "abc", False),
        (0, None, None, False),
        (0, None, "abc", True),
        (0, "abc", None, False),
    ])
    def test_is_first(self, count, previous, current, expected):
        """Test is_first truth table."""
        result = PaginationResult(count, previous, current, None)
        assert result.is_first() is expected

    @pytest.mark.parametrize("previous,following,expected", [
        (None, None, False),
        ("a", None, True),
        (None, "b", True),
        ("a", "b", True),
    ])
    def test_has_pages(self, previous, following, expected):
        """Test has_pages truth table."""
        result = PaginationResult(1, previous, None, following)
        assert result.has_pages() is expected

    def test_immutable(self):
        result = PaginationResult(1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.results_count = 2
