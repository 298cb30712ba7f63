"""Expected value of a wager, as a fraction of the amount staked."""

from __future__ import annotations

from wagering.core.odds_math import Odds, Probability, implied_probability


def expected_value(odds: Odds, prob: Probability) -> float:
    """Long-run expected return per unit staked on ``odds`` at ``prob``.

    A win returns the profit ``decimal − 1`` and a loss forfeits the stake::

        EV  =  p · (decimal − 1)  −  (1 − p)

    Positive values are the fractional gain per unit, negative values the
    fractional loss.  At the implied probability of ``odds`` the result is 0.

    Examples::

        expected_value(Odds.from_decimal(2.0), Probability(0.55))  →  0.10
        expected_value(Odds.from_american(-110), Probability(0.50))  → -0.0455
    """
    win_prob = prob.decimal
    return win_prob * (odds.decimal - 1.0) - (1.0 - win_prob)


def expected_value_from_odds(odds: Odds, true_odds: Odds) -> float:
    """Expected value of ``odds`` when the fair price is believed to be ``true_odds``.

    ``true_odds`` is converted to its implied (break-even) probability and
    passed to :func:`expected_value`.
    """
    return expected_value(odds, implied_probability(true_odds))
