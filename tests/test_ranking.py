import pytest

from typestats.errors import InvalidArgumentError
from typestats.ranking import format_ranking, rank, top_n


class TestRank:
    def test_descending_by_count(self):
        counts = {"a": 1, "b": 3, "c": 2}
        assert rank(counts, 3) == [("b", 3), ("c", 2), ("a", 1)]

    def test_ties_broken_by_name(self):
        counts = {"zeta": 2, "alpha": 2, "mid": 5, "beta": 2}
        assert rank(counts, 4) == [("mid", 5), ("alpha", 2), ("beta", 2), ("zeta", 2)]

    def test_limit_truncates(self):
        counts = {"a": 1, "b": 2, "c": 3}
        assert rank(counts, 2) == [("c", 3), ("b", 2)]

    def test_limit_larger_than_mapping_returns_everything(self):
        counts = {"b": 1, "a": 1, "c": 9}
        assert rank(counts, 100) == [("c", 9), ("a", 1), ("b", 1)]

    def test_zero_limit(self):
        assert rank({"a": 1}, 0) == []

    def test_order_independent_of_insertion(self):
        forward = {"x": 1, "y": 1, "z": 1}
        backward = dict(reversed(list(forward.items())))
        assert rank(forward, 3) == rank(backward, 3)

    def test_negative_limit_rejected(self):
        with pytest.raises(InvalidArgumentError):
            rank({"a": 1}, -1)

    @pytest.mark.parametrize("limit", [1.5, "3", True, None])
    def test_non_integer_limit_rejected(self, limit):
        with pytest.raises(InvalidArgumentError):
            rank({"a": 1}, limit)


class TestFormat:
    def test_format_entries(self):
        assert (
            format_ranking([("pkg.A", 4), ("pkg.B", 1)])
            == "pkg.A (4 occurrences), pkg.B (1 occurrences)"
        )

    def test_format_empty(self):
        assert format_ranking([]) == ""

    def test_top_n_zero_is_empty_string(self):
        assert top_n({"a": 1, "b": 2}, 0) == ""

    def test_top_n(self):
        assert top_n({"a": 1, "b": 2}, 1) == "b (2 occurrences)"
