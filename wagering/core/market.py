"""Whole-market quantities: implied-probability sum, overround and width.

A *market* is an ordered sequence of :class:`~wagering.core.odds_math.Odds`
quoting the mutually exclusive outcomes of one event (home/draw/away,
over/under, ...).  All functions here are pure.

Run tests with::

    pytest tests/test_market.py -v
"""

from __future__ import annotations

from typing import Final, Iterable

from wagering.core.odds_math import Odds, implied_probability

#: Combined magnitude of a fair two-way market quoted at -100 / +100.
_EVEN_MONEY_WIDTH: Final[float] = 200.0


def prob_sum(market: Iterable[Odds]) -> float:
    """Sum of the implied probabilities of every outcome in ``market``.

    Equals 1.0 for a fair market and exceeds 1.0 by the bookmaker margin
    for a real quote.
    """
    return sum(implied_probability(o).decimal for o in market)


def margin(market: Iterable[Odds]) -> float:
    """Overround (vig) of ``market`` in probability units.

    Examples::

        margin([Odds.from_american(-110), Odds.from_american(-110)])  →  0.0476
    """
    return prob_sum(market) - 1.0


def market_width(odds_a: Odds, odds_b: Odds) -> float:
    """Width between the two sides of a binary market, in American-odds units.

    Rules by sign of the two American prices:

    * both negative: ``|a| + |b| − 200``
    * both positive: ``−(a + b − 200)``.  Two plus-money sides therefore
      give a *negative* width; this is a house convention rather than an
      industry standard.
    * mixed: ``|a + b|``.  Some sources use ``||a| − |b||`` for this case;
      that variant is not used here.

    Larger positive values mean a wider (more heavily margined) market.

    Examples::

        market_width(Odds.from_american(-141), Odds.from_american(+123))  →  18.0
        market_width(Odds.from_american(-110), Odds.from_american(-114))  →  24.0
        market_width(Odds.from_american(+150), Odds.from_american(+137))  → -87.0
    """
    a = odds_a.american
    b = odds_b.american
    if a < 0 and b < 0:
        return abs(a) + abs(b) - _EVEN_MONEY_WIDTH
    if a > 0 and b > 0:
        return -(a + b - _EVEN_MONEY_WIDTH)
    return abs(a + b)
