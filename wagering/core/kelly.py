"""Kelly criterion sizing — the single source of truth for bet sizing math.

All functions here are **pure**: no I/O, no logging.
Import from this module; never reimplement Kelly locally.

Design decisions
----------------
* **Fractional Kelly** is expressed as a *multiplier* on full Kelly
  (``0.25`` = quarter Kelly) rather than a divisor.  The multiplier is not
  validated; values in ``(0, 1]`` are the norm.
* The result is clamped at zero.  A non-positive edge never produces a
  short-position recommendation.
* Probabilities are passed as :class:`~wagering.core.odds_math.Probability`
  so that ``0.6`` and ``60`` cannot be confused.

Run tests with::

    pytest tests/test_kelly.py -v
"""

from __future__ import annotations

from wagering.core.odds_math import Odds, Probability


def kelly_fraction(odds: Odds, prob: Probability, multiplier: float) -> float:
    """Compute the fraction of bankroll to stake on a win/loss outcome.

    The Kelly criterion maximises the expected logarithm of wealth.  With
    ``b`` the *profit* per unit staked (decimal odds minus the stake),
    ``p`` the win probability and ``q = 1 − p``, the closed-form solution
    (Kelly 1956) is::

        f*  =  (b · p − q) / b                                   (1)

    The fractional multiplier is applied to ``f*`` and the result is
    floored at zero.

    Args:
        odds: Odds being offered.
        prob: Estimated true probability of winning.
        multiplier: Fractional Kelly multiplier (1.0 = full Kelly).

    Returns:
        Fraction of bankroll, ``≥ 0``.

    Raises:
        ValueError: If the odds pay no profit (``decimal ≤ 1.0``), which
            leaves equation (1) undefined.

    Examples::

        kelly_fraction(Odds.from_decimal(2.0), Probability(0.6), 1.0)  →  0.20
        kelly_fraction(Odds.from_decimal(2.0), Probability(0.4), 1.0)  →  0.00
    """
    profit_per_unit = odds.decimal - 1.0
    if profit_per_unit <= 0.0:
        raise ValueError(
            f"Kelly fraction is undefined for decimal odds {odds.decimal!r}: "
            "the bet pays no profit."
        )
    win_prob = prob.decimal
    loss_prob = 1.0 - win_prob

    full_kelly = (profit_per_unit * win_prob - loss_prob) / profit_per_unit
    return max(multiplier * full_kelly, 0.0)


def kelly_stake(
    odds: Odds,
    prob: Probability,
    multiplier: float,
    bankroll: float,
) -> float:
    """Amount to wager given odds, win probability, multiplier and bankroll.

    Examples::

        # +200, 60% to win, quarter Kelly, 1000 bankroll
        kelly_stake(Odds.from_american(200), Probability.from_percent(60), 0.25, 1000)  →  100.0
    """
    return kelly_fraction(odds, prob, multiplier) * bankroll
