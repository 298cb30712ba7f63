"""
Tests for market.py — probability sum, margin and market width

Run with: pytest tests/test_market.py -v
"""

import pytest

from wagering.core.market import margin, market_width, prob_sum
from wagering.core.odds_math import Odds


def _american(*prices):
    return [Odds.from_american(p) for p in prices]


class TestMargin:
    """Test overround computation."""

    def test_standard_two_way(self):
        market = _american(-110, -110)
        assert prob_sum(market) == pytest.approx(1.047619, abs=1e-6)
        assert margin(market) == pytest.approx(0.047619, abs=1e-6)

    def test_fair_market(self):
        assert margin(_american(100, -100)) == pytest.approx(0.0)

    def test_three_way(self):
        market = [Odds.from_decimal(d) for d in (2.09, 3.59, 3.77)]
        assert margin(market) == pytest.approx(0.0222724, abs=1e-6)

    def test_accepts_generator(self):
        assert prob_sum(Odds.from_decimal(d) for d in (2.0, 2.0)) == pytest.approx(1.0)

    def test_empty_market(self):
        assert prob_sum([]) == 0.0


class TestMarketWidth:
    """Test the width heuristic for each sign combination."""

    def test_mixed_signs(self):
        assert market_width(*_american(-141, +123)) == pytest.approx(18.0)

    def test_both_negative(self):
        assert market_width(*_american(-110, -114)) == pytest.approx(24.0)

    def test_both_positive_is_negative(self):
        assert market_width(*_american(+150, +137)) == pytest.approx(-87.0)

    def test_order_independent(self):
        a, b = _american(-141, +123)
        assert market_width(a, b) == market_width(b, a)

    def test_heavy_favourite_against_even_money(self):
        assert market_width(*_american(-300, +100)) == pytest.approx(200.0)

    def test_width_from_decimal_quotes(self):
        # 1.5 is -200 on each side
        assert market_width(Odds.from_decimal(1.5), Odds.from_decimal(1.5)) == pytest.approx(200.0)

    def test_even_money_both_sides(self):
        assert market_width(*_american(+100, +100)) == pytest.approx(0.0)
