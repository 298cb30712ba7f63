"""Fundamental odds mathematics — the odds and probability value types.

Every function here is **pure**: no I/O, no logging, no side effects.
Import from this module; never reimplement conversions locally.

The two value types exposed are:

1. :class:`Odds` — an immutable price held in both decimal and American
   form.
2. :class:`Probability` — an immutable probability held as a decimal with
   a derived percent view.

Design decisions
----------------
* An :class:`Odds` is constructed from exactly one *primary* format via
  :meth:`Odds.from_american` or :meth:`Odds.from_decimal`.  The primary
  value is stored bit-exact; the other format is computed and may carry
  minor rounding skew, so round trips through the opposite constructor are
  only equal within tolerance.
* Equality, hashing and ordering of :class:`Odds` use the decimal value
  only.  "Longer" odds pay more and are therefore less likely.
* :class:`Probability` removes the ambiguity between passing ``0.6`` and
  ``60`` around as a bare float.  ``percent`` is derived from ``decimal``
  on access so the two can never drift apart.

Run tests with::

    pytest tests/test_odds_math.py -v
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Final

# ---------------------------------------------------------------------------
# Module-level constants
# ---------------------------------------------------------------------------

#: American-odds magnitude floor.  Prices between -100 and +100 are not
#: representable American odds.
_MIN_ODDS_MAGNITUDE: Final[float] = 100.0

#: Decimal odds at or below this value pay nothing (or less than the stake)
#: and have no American representation.
_MIN_DECIMAL_ODDS: Final[float] = 1.0

#: Decimal odds at which the American sign flips from favourite to underdog.
_EVEN_MONEY_DECIMAL: Final[float] = 2.0


# ---------------------------------------------------------------------------
# Odds conversion
# ---------------------------------------------------------------------------


def american_to_decimal(american: int | float) -> float:
    """Convert American odds to decimal (European) format.

    Decimal odds represent the total payout per unit staked, **including**
    the return of the stake itself.  Examples::

        american_to_decimal(-110) → 1.9091   (risk 110 to win 100)
        american_to_decimal(+150) → 2.5000   (risk 100 to win 150)

    Args:
        american: American odds.  Sign convention: negative = favourite
            (risk more than you win), positive = underdog (win more than
            you risk).

    Returns:
        Decimal odds > 1.0.

    Raises:
        ValueError: If ``|american| < 100``, which is not a representable
            American odds value.
    """
    if abs(american) < _MIN_ODDS_MAGNITUDE:
        raise ValueError(
            f"Invalid American odds {american!r}: magnitude must be ≥ 100."
        )
    if american > 0:
        return american / 100.0 + 1.0
    # Negative: dividing by a negative price yields the positive offset
    return 1.0 - 100.0 / american


def decimal_to_american(decimal_odds: float) -> float:
    """Convert decimal odds to American odds.

    Inverse of :func:`american_to_decimal`.  Unlike a display conversion the
    result is **not** rounded; ``decimal_to_american(1.91)`` is ``-109.89``.

    Args:
        decimal_odds: Decimal (European) odds > 1.0.

    Returns:
        American odds.  Values ≥ 2.0 are returned as positive (underdog);
        values < 2.0 are returned as negative (favourite).

    Raises:
        ValueError: If ``decimal_odds ≤ 1.0``; even money minus the stake
            has no American representation.
    """
    if not decimal_odds > _MIN_DECIMAL_ODDS:
        raise ValueError(
            f"Decimal odds {decimal_odds!r} must be > 1.0 (a bet must pay "
            "more than the stake)."
        )
    if decimal_odds >= _EVEN_MONEY_DECIMAL:
        return (decimal_odds - 1.0) * 100.0
    # Favourite: decimal < 2.0 → negative American
    return -100.0 / (decimal_odds - 1.0)


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------


@total_ordering
@dataclass(frozen=True, eq=False)
class Odds:
    """An immutable price held in both decimal and American form.

    Build instances with :meth:`from_american` or :meth:`from_decimal`
    rather than the raw constructor, which performs no conversion.

    Attributes:
        decimal: Multiplicative payout factor including the stake (> 1.0).
        american: Signed American price.
    """

    decimal: float
    american: float

    @classmethod
    def from_american(cls, american: int | float) -> Odds:
        """Construct odds from an American price, held exactly."""
        american = float(american)
        return cls(decimal=american_to_decimal(american), american=american)

    @classmethod
    def from_decimal(cls, decimal_odds: float) -> Odds:
        """Construct odds from a decimal price, held exactly."""
        decimal_odds = float(decimal_odds)
        return cls(decimal=decimal_odds, american=decimal_to_american(decimal_odds))

    def implied_probability(self) -> Probability:
        """Break-even probability of these odds (see :func:`implied_probability`)."""
        return implied_probability(self)

    def equals(self, other: Odds) -> bool:
        return self.decimal == other.decimal

    def longer(self, other: Odds) -> bool:
        """True when these odds pay more (are less likely) than ``other``."""
        return self.decimal > other.decimal

    def shorter(self, other: Odds) -> bool:
        """True when these odds pay less (are more likely) than ``other``."""
        return self.decimal < other.decimal

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Odds):
            return NotImplemented
        return self.equals(other)

    def __lt__(self, other: Odds) -> bool:
        if not isinstance(other, Odds):
            return NotImplemented
        return self.shorter(other)

    def __hash__(self) -> int:
        return hash(self.decimal)


@total_ordering
@dataclass(frozen=True, eq=False)
class Probability:
    """An immutable probability in ``[0, 1]`` with a derived percent view.

    Attributes:
        decimal: Probability as a fraction.
    """

    decimal: float

    def __post_init__(self) -> None:
        if not (0.0 <= self.decimal <= 1.0):
            raise ValueError(
                f"Probability must be in [0, 1], got {self.decimal!r}."
            )

    @classmethod
    def from_decimal(cls, decimal: float) -> Probability:
        return cls(float(decimal))

    @classmethod
    def from_percent(cls, percent: float) -> Probability:
        return cls(float(percent) / 100.0)

    @property
    def percent(self) -> float:
        return self.decimal * 100.0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Probability):
            return NotImplemented
        return self.decimal == other.decimal

    def __lt__(self, other: Probability) -> bool:
        if not isinstance(other, Probability):
            return NotImplemented
        return self.decimal < other.decimal

    def __hash__(self) -> int:
        return hash(self.decimal)


def implied_probability(odds: Odds) -> Probability:
    """Raw implied probability of the given odds (vig-inclusive).

    This is the bookmaker's *stated* probability and is equivalent to the
    break-even probability: the true probability at which a bet on these
    odds has exactly zero expected value.  For true (no-vig) probabilities
    use :mod:`wagering.core.devig`.

    Examples::

        implied_probability(Odds.from_decimal(4.0))  → 25.00 %
        implied_probability(Odds.from_decimal(1.91)) → 52.36 %
    """
    return Probability(1.0 / odds.decimal)
