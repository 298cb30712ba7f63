"""Core mathematics for the wagering toolkit.

This package contains pure, sport-agnostic building blocks:

- ``odds_math``      — ``Odds`` / ``Probability`` value types and conversion
- ``kelly``          — Kelly criterion stake sizing
- ``expected_value`` — expected return per unit staked
- ``market``         — probability sum, overround and market width
- ``averaging``      — streaming average of odds
- ``solver``         — generic fixed-point solver for parametric de-vigging
- ``devig``          — the six margin-removal methods
- ``display``        — display formats for odds

Nothing in this package reads configuration or configures logging.
Apart from ``averaging.AverageOdds`` every type here is immutable.
"""

from wagering.core.averaging import AverageOdds
from wagering.core.devig import (
    NormalizationMethod,
    additive,
    equal_margin,
    logarithmic,
    margin_proportional_to_odds,
    normalize,
    odds_ratio,
    shin,
    true_probabilities,
)
from wagering.core.display import DisplayFormat, UnknownFormatError, format_odds
from wagering.core.expected_value import expected_value, expected_value_from_odds
from wagering.core.kelly import kelly_fraction, kelly_stake
from wagering.core.market import margin, market_width, prob_sum
from wagering.core.odds_math import (
    Odds,
    Probability,
    american_to_decimal,
    decimal_to_american,
    implied_probability,
)
from wagering.core.solver import ConvergenceError, SolverResult, solve_fixed_point

__all__ = [
    "AverageOdds",
    "ConvergenceError",
    "DisplayFormat",
    "NormalizationMethod",
    "Odds",
    "Probability",
    "SolverResult",
    "UnknownFormatError",
    "additive",
    "american_to_decimal",
    "decimal_to_american",
    "equal_margin",
    "expected_value",
    "expected_value_from_odds",
    "format_odds",
    "implied_probability",
    "kelly_fraction",
    "kelly_stake",
    "logarithmic",
    "margin",
    "margin_proportional_to_odds",
    "market_width",
    "normalize",
    "odds_ratio",
    "prob_sum",
    "shin",
    "solve_fixed_point",
    "true_probabilities",
]
