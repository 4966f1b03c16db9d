"""
Tests for top-products ranking.
"""
from supercart.domain.entities import Product
from supercart.domain.ranking import Criterion, parse_criterion, rank


def _p(pid, name, prices=None, popularity=0, rating=0):
    return Product(
        id=pid,
        name=name,
        category="General",
        prices=prices if prices is not None else {},
        popularity=popularity,
        rating=rating,
    )


A = _p(1, "Apples", {"x": 10, "y": 12})
B = _p(2, "Bread", {"x": 5, "y": 5})
C = _p(3, "Cheese", {})


class TestPriceCriteria:

    def test_cheapest_orders_by_min_price_and_skips_unpriced(self):
        assert rank([A, B, C], "cheapest", 10) == [B, A]

    def test_highest_different_orders_by_spread_descending(self):
        a = _p(1, "Apples", {"x": 10, "y": 20})
        b = _p(2, "Bread", {"x": 5, "y": 5})
        assert rank([a, b], "highest_different", 10) == [a, b]
        assert rank([b, a], "highest_different", 10) == [a, b]

    def test_highest_different_skips_unpriced(self):
        assert C not in rank([A, B, C], "highest_different", 10)

    def test_single_price_has_zero_spread(self):
        solo = _p(4, "Salt", {"x": 3})
        assert rank([solo, A], "highest_different", 10) == [A, solo]


class TestAttributeCriteria:

    def test_most_selected_descending_popularity(self):
        low = _p(1, "Low", popularity=1)
        high = _p(2, "High", popularity=9)
        assert rank([low, high], "most_selected", 10) == [high, low]

    def test_highest_rated_includes_unpriced_products(self):
        rated = _p(1, "Rated", rating=4.5)
        unpriced = _p(2, "Unpriced", prices={}, rating=5)
        assert rank([rated, unpriced], "highest_rated", 10) == [unpriced, rated]

    def test_ties_keep_input_order(self):
        first = _p(1, "Zeta", popularity=3)
        second = _p(2, "Alpha", popularity=3)
        third = _p(3, "Mid", popularity=3)
        assert rank([first, second, third], "most_selected", 10) == [first, second, third]

    def test_price_ties_keep_input_order(self):
        first = _p(1, "Zeta", {"x": 2})
        second = _p(2, "Alpha", {"y": 2})
        assert rank([first, second], "cheapest", 10) == [first, second]


class TestDefaultOrdering:

    def test_unknown_criterion_falls_back_to_name(self):
        products = [B, C, A]
        by_name = [A, B, C]
        assert rank(products, "not_a_real_criterion", 10) == by_name
        assert rank(products, "", 10) == by_name
        assert rank(products, None, 10) == by_name

    def test_criterion_match_is_case_sensitive(self):
        assert parse_criterion("Cheapest") is Criterion.NAME
        assert parse_criterion("cheapest") is Criterion.CHEAPEST

    def test_space_separated_spelling_is_not_a_criterion(self):
        assert parse_criterion("highest rated") is Criterion.NAME


class TestLimit:

    def test_limit_truncates(self):
        assert rank([A, B, C], "name", 2) == [A, B]

    def test_limit_larger_than_pool_returns_all_qualifying(self):
        assert rank([A, B, C], "cheapest", 50) == [B, A]

    def test_non_positive_limit_is_empty(self):
        assert rank([A, B], "cheapest", 0) == []
        assert rank([A, B], "name", -3) == []

    def test_result_size_bound_for_every_criterion(self):
        products = [A, B, C]
        for criterion in [c.value for c in Criterion] + ["bogus"]:
            for limit in range(-1, 5):
                needs_prices = criterion in ("cheapest", "highest_different")
                qualifying = 2 if needs_prices else 3
                assert len(rank(products, criterion, limit)) == max(0, min(limit, qualifying))


class TestPurity:

    def test_empty_input(self):
        for criterion in ["cheapest", "highest_different", "most_selected", "highest_rated", "x"]:
            assert rank([], criterion, 10) == []

    def test_repeated_calls_are_identical(self):
        products = [A, B, C, _p(4, "Dates", {"x": 7, "z": 1})]
        first = rank(products, "highest_different", 3)
        assert rank(products, "highest_different", 3) == first

    def test_input_is_not_reordered(self):
        products = [B, C, A]
        rank(products, "name", 10)
        assert products == [B, C, A]
