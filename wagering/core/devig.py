"""Margin removal ("de-vigging") — six ways to recover true odds.

Each normalizer takes the quoted odds of one market (the mutually
exclusive, nominally exhaustive outcomes of one event) and returns the same
number of *true* odds, in the same order, whose implied probabilities sum
to 1.

Closed-form methods:

* :func:`equal_margin` — scale every price by the market's probability sum.
  Relative probabilities are preserved exactly.
* :func:`additive` — subtract an equal share of the margin from every
  outcome's implied probability.
* :func:`margin_proportional_to_odds` — remove margin in proportion to each
  outcome's own price, so favourites absorb relatively more of it.
  Algebraically it lands on the same prices as :func:`additive`.

Parametric methods, solved with
:func:`~wagering.core.solver.solve_fixed_point`:

* :func:`shin` — Shin (1993) insider-trading model, parameter ``z``.
* :func:`odds_ratio` — constant odds ratio between true and implied
  probability (Cheung 2015).
* :func:`logarithmic` — true probability is the implied probability raised
  to a common power.

The parametric methods differ only in their transform; each is built by a
``*_transform`` factory returning ``c ↦ array of probabilities`` so new
schemes can reuse the same solver.

Example::

    market = [Odds.from_decimal(d) for d in (2.09, 3.59, 3.77)]
    shin(market)  → [2.1264, 3.6836, 3.8723]

Run tests with::

    pytest tests/test_devig.py -v
"""

from __future__ import annotations

import enum
import logging
from typing import Callable, Final, Iterable, List, Sequence

import numpy as np

from wagering.core.market import margin, prob_sum
from wagering.core.odds_math import Odds, Probability
from wagering.core.solver import (
    DEFAULT_MAX_ITER,
    DEFAULT_TOLERANCE,
    Transform,
    solve_fixed_point,
)

logger = logging.getLogger(__name__)

#: A market needs at least this many outcomes to have a margin to remove.
_MIN_OUTCOMES: Final[int] = 2

#: Starting parameter for the Shin solve (no insider trading).
_SHIN_INITIAL: Final[float] = 0.0

#: Starting parameter for the odds-ratio and logarithmic solves (identity).
_IDENTITY_INITIAL: Final[float] = 1.0


class NormalizationMethod(str, enum.Enum):
    """Closed set of margin-removal methods understood by :func:`normalize`."""

    EQUAL_MARGIN = "equal_margin"
    ADDITIVE = "additive"
    MPTO = "mpto"
    SHIN = "shin"
    ODDS_RATIO = "odds_ratio"
    LOGARITHMIC = "logarithmic"

    @property
    def iterative(self) -> bool:
        return self in _ITERATIVE_METHODS


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _as_market(odds: Iterable[Odds]) -> List[Odds]:
    market = list(odds)
    if len(market) < _MIN_OUTCOMES:
        raise ValueError(
            f"A market needs at least {_MIN_OUTCOMES} outcomes to normalize, "
            f"got {len(market)}."
        )
    return market


def _implied_array(market: Sequence[Odds]) -> np.ndarray:
    return np.array([1.0 / o.decimal for o in market], dtype=float)


def _from_probabilities(probabilities: Iterable[float]) -> List[Odds]:
    true_odds = []
    for p in probabilities:
        if not p > 0.0:
            raise ValueError(
                f"Margin removal produced a non-positive probability {p!r}; "
                "the market margin is too large for this method."
            )
        true_odds.append(Odds.from_decimal(1.0 / float(p)))
    return true_odds


# ---------------------------------------------------------------------------
# Closed-form methods
# ---------------------------------------------------------------------------


def equal_margin(odds: Iterable[Odds]) -> List[Odds]:
    """Scale every price by the market's total implied probability."""
    market = _as_market(odds)
    total = prob_sum(market)
    return [Odds.from_decimal(o.decimal * total) for o in market]


def additive(odds: Iterable[Odds]) -> List[Odds]:
    """Remove ``margin / n`` from every outcome's implied probability.

    Raises:
        ValueError: If a long shot's probability is smaller than its share
            of the margin.
    """
    market = _as_market(odds)
    share = margin(market) / len(market)
    return _from_probabilities(1.0 / o.decimal - share for o in market)


def margin_proportional_to_odds(odds: Iterable[Odds]) -> List[Odds]:
    """Remove margin in proportion to each outcome's own price::

        true_i  =  n · decimal_i / (n − margin · decimal_i)

    Raises:
        ValueError: If ``margin · decimal_i ≥ n`` for some outcome.
    """
    market = _as_market(odds)
    n = float(len(market))
    m = margin(market)
    true_odds = []
    for o in market:
        denominator = n - m * o.decimal
        if denominator <= 0.0:
            raise ValueError(
                f"Cannot remove a margin of {m:.4f} from decimal odds "
                f"{o.decimal!r} in a {len(market)}-outcome market."
            )
        true_odds.append(Odds.from_decimal(n * o.decimal / denominator))
    return true_odds


# ---------------------------------------------------------------------------
# Parametric transforms
# ---------------------------------------------------------------------------


def shin_transform(implied: np.ndarray, overround: float) -> Transform:
    """Shin (1993) true probability for insider fraction ``z``::

        p_i(z)  =  (√(z² + 4(1 − z) · π_i² / Π) − z) / (2(1 − z))

    where ``π_i`` are the raw implied probabilities and ``Π`` their sum,
    fixed from the quoted market.
    """
    scaled = implied ** 2 / overround

    def transform(z: float) -> np.ndarray:
        return (np.sqrt(z * z + 4.0 * (1.0 - z) * scaled) - z) / (2.0 * (1.0 - z))

    return transform


def odds_ratio_transform(implied: np.ndarray) -> Transform:
    """True probability with a constant odds ratio ``c`` to the implied one::

        p_i(c)  =  π_i / (c + (1 − c) · π_i)
    """

    def transform(c: float) -> np.ndarray:
        return implied / (c + (1.0 - c) * implied)

    return transform


def logarithmic_transform(implied: np.ndarray) -> Transform:
    """True probability as a common power of the implied one: ``p_i(c) = π_i ** c``."""

    def transform(c: float) -> np.ndarray:
        return implied ** c

    return transform


def _solve_market(
    market: Sequence[Odds],
    transform: Transform,
    initial: float,
    tolerance: float,
    max_iter: int,
) -> List[Odds]:
    result = solve_fixed_point(
        transform, initial, tolerance=tolerance, max_iter=max_iter
    )
    return _from_probabilities(result.probabilities)


# ---------------------------------------------------------------------------
# Parametric methods
# ---------------------------------------------------------------------------


def shin(
    odds: Iterable[Odds],
    *,
    tolerance: float = DEFAULT_TOLERANCE,
    max_iter: int = DEFAULT_MAX_ITER,
) -> List[Odds]:
    """True odds under the Shin model, solving for the insider fraction ``z``.

    Unlike the closed-form Shin recurrences there is no singularity for
    two-outcome markets.

    Raises:
        ConvergenceError: If ``z`` is not found within ``max_iter`` steps.
    """
    market = _as_market(odds)
    implied = _implied_array(market)
    transform = shin_transform(implied, float(implied.sum()))
    return _solve_market(market, transform, _SHIN_INITIAL, tolerance, max_iter)


def odds_ratio(
    odds: Iterable[Odds],
    *,
    tolerance: float = DEFAULT_TOLERANCE,
    max_iter: int = DEFAULT_MAX_ITER,
) -> List[Odds]:
    """True odds under a constant odds ratio between quoted and true prices.

    Raises:
        ConvergenceError: If the ratio is not found within ``max_iter`` steps.
    """
    market = _as_market(odds)
    transform = odds_ratio_transform(_implied_array(market))
    return _solve_market(market, transform, _IDENTITY_INITIAL, tolerance, max_iter)


def logarithmic(
    odds: Iterable[Odds],
    *,
    tolerance: float = DEFAULT_TOLERANCE,
    max_iter: int = DEFAULT_MAX_ITER,
) -> List[Odds]:
    """True odds as implied probabilities raised to a common power.

    Raises:
        ConvergenceError: If the exponent is not found within ``max_iter`` steps.
    """
    market = _as_market(odds)
    transform = logarithmic_transform(_implied_array(market))
    return _solve_market(market, transform, _IDENTITY_INITIAL, tolerance, max_iter)


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

_METHODS: Final[dict[NormalizationMethod, Callable[..., List[Odds]]]] = {
    NormalizationMethod.EQUAL_MARGIN: equal_margin,
    NormalizationMethod.ADDITIVE: additive,
    NormalizationMethod.MPTO: margin_proportional_to_odds,
    NormalizationMethod.SHIN: shin,
    NormalizationMethod.ODDS_RATIO: odds_ratio,
    NormalizationMethod.LOGARITHMIC: logarithmic,
}

_ITERATIVE_METHODS: Final[frozenset[NormalizationMethod]] = frozenset(
    {
        NormalizationMethod.SHIN,
        NormalizationMethod.ODDS_RATIO,
        NormalizationMethod.LOGARITHMIC,
    }
)


def normalize(
    odds: Iterable[Odds],
    method: NormalizationMethod | str = NormalizationMethod.EQUAL_MARGIN,
    *,
    tolerance: float = DEFAULT_TOLERANCE,
    max_iter: int = DEFAULT_MAX_ITER,
) -> List[Odds]:
    """Remove the margin from ``odds`` with the chosen method.

    Args:
        odds: Quoted odds of one market, at least two outcomes.
        method: A :class:`NormalizationMethod` or its string value.
        tolerance: Solver tolerance (parametric methods only).
        max_iter: Solver iteration budget (parametric methods only).

    Returns:
        True odds, index aligned with ``odds``.

    Raises:
        ValueError: For an unknown method or a degenerate market.
        ConvergenceError: If a parametric method fails to converge.
    """
    method = NormalizationMethod(method)
    market = _as_market(odds)
    logger.debug(
        "Normalizing %d-outcome market (margin=%.6f) with %s",
        len(market), margin(market), method.value,
    )
    func = _METHODS[method]
    if method.iterative:
        return func(market, tolerance=tolerance, max_iter=max_iter)
    return func(market)


def true_probabilities(
    odds: Iterable[Odds],
    method: NormalizationMethod | str = NormalizationMethod.EQUAL_MARGIN,
    **kwargs,
) -> List[Probability]:
    """Like :func:`normalize` but returns the true probabilities."""
    return [o.implied_probability() for o in normalize(odds, method, **kwargs)]
