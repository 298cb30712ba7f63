"""
Tests for odds_math.py — Odds and Probability value types.

Run with: pytest tests/test_odds_math.py -v
"""

import pytest

from wagering.core.odds_math import (
    Odds,
    Probability,
    american_to_decimal,
    decimal_to_american,
    implied_probability,
)


AMERICAN_TO_DECIMAL = [
    (+9900.0, 100.0),
    (+300.0, 4.0),
    (+150.0, 2.5),
    (-110.0, 1.91),
    (-150.0, 1.67),
    (-300.0, 1.33),
    (-1000.0, 1.1),
]

DECIMAL_TO_AMERICAN = [
    (100.0, +9900.0),
    (4.0, +300.0),
    (2.5, +150.0),
    (1.91, -109.89),
    (1.67, -149.25),
    (1.33, -303.03),
    (1.1, -1000.0),
]


class TestConversion:
    """Test American ↔ decimal conversion."""

    @pytest.mark.parametrize("american,decimal", AMERICAN_TO_DECIMAL)
    def test_from_american(self, american, decimal):
        odds = Odds.from_american(american)
        assert odds.american == american
        assert odds.decimal == pytest.approx(decimal, abs=0.01)

    @pytest.mark.parametrize("decimal,american", DECIMAL_TO_AMERICAN)
    def test_from_decimal(self, decimal, american):
        odds = Odds.from_decimal(decimal)
        assert odds.decimal == decimal
        assert odds.american == pytest.approx(american, abs=0.01)

    def test_even_money(self):
        assert american_to_decimal(100) == pytest.approx(2.0)
        assert american_to_decimal(-100) == pytest.approx(2.0)
        assert decimal_to_american(2.0) == pytest.approx(100.0)

    def test_decimal_conversion_is_not_rounded(self):
        assert decimal_to_american(1.91) != round(decimal_to_american(1.91))

    def test_cross_basis_round_trip_within_tolerance(self):
        for american, _ in AMERICAN_TO_DECIMAL:
            via_decimal = Odds.from_decimal(Odds.from_american(american).decimal)
            assert via_decimal.american == pytest.approx(american, abs=0.01)

    def test_integer_input_accepted(self):
        assert Odds.from_american(-110).american == -110.0


class TestConversionErrors:
    """Degenerate prices are rejected at construction."""

    @pytest.mark.parametrize("decimal", [1.0, 0.5, 0.0, -2.0])
    def test_decimal_at_or_below_one(self, decimal):
        with pytest.raises(ValueError):
            Odds.from_decimal(decimal)

    @pytest.mark.parametrize("american", [0, 50, -99.5])
    def test_american_magnitude_below_100(self, american):
        with pytest.raises(ValueError):
            Odds.from_american(american)


class TestComparison:
    """Equality and ordering use decimal odds only."""

    def test_equals_across_constructors(self):
        a = Odds.from_american(150)
        b = Odds.from_decimal(2.5)
        assert a.equals(b)
        assert a == b
        assert hash(a) == hash(b)

    def test_longer_and_shorter(self):
        fav = Odds.from_american(-200)
        dog = Odds.from_american(+180)
        assert dog.longer(fav)
        assert fav.shorter(dog)
        assert not fav.longer(dog)
        assert fav < dog
        assert max(fav, dog) is dog

    def test_not_equal_to_other_types(self):
        assert Odds.from_decimal(2.0) != 2.0

    def test_immutable(self):
        odds = Odds.from_decimal(2.0)
        with pytest.raises(AttributeError):
            odds.decimal = 3.0


class TestProbability:
    """Test Probability construction and implied probability."""

    def test_from_percent(self):
        prob = Probability.from_percent(25.0)
        assert prob.decimal == pytest.approx(0.25)
        assert prob.percent == pytest.approx(25.0)

    def test_percent_tracks_decimal(self):
        prob = Probability.from_decimal(0.6)
        assert prob.percent == prob.decimal * 100.0

    @pytest.mark.parametrize("value", [-0.01, 1.01])
    def test_out_of_range(self, value):
        with pytest.raises(ValueError):
            Probability.from_decimal(value)

    def test_implied_probability_of_four(self):
        assert implied_probability(Odds.from_decimal(4.0)).percent == pytest.approx(25.0)

    def test_implied_probability_of_favourite(self):
        prob = Odds.from_decimal(1.91).implied_probability()
        assert prob.percent == pytest.approx(52.35, abs=0.01)

    def test_ordering(self):
        assert Probability(0.3) < Probability(0.4)
        assert Probability(0.5) == Probability.from_percent(50)
