"""Streaming average of odds.

:class:`AverageOdds` keeps only a running sum of decimal odds and a count,
so it can report the mean of everything accumulated so far, or the mean
with some already-accumulated prices taken back out, in constant time and
without storing the individual observations.

The accumulator is **not** thread-safe.  Concurrent calls to
:meth:`AverageOdds.accumulate` need external locking; read-only queries on
an accumulator that is no longer being written are safe to share.
"""

from __future__ import annotations

from wagering.core.odds_math import Odds


class AverageOdds:
    """Running mean of decimal odds.

    Typical usage::

        avg = AverageOdds()
        avg.accumulate(*book_prices)
        consensus = avg.average()
        # Consensus of the other books, excluding one book's price:
        others = avg.average_without(book_prices[0], 1)
    """

    def __init__(self) -> None:
        self._sum = 0.0
        self._count = 0

    @property
    def count(self) -> int:
        return self._count

    @property
    def total(self) -> float:
        """Sum of the decimal odds accumulated so far."""
        return self._sum

    def accumulate(self, *odds: Odds) -> None:
        """Add one or more odds to the running sum."""
        for o in odds:
            self._sum += o.decimal
            self._count += 1

    def average(self) -> Odds:
        """Mean of all accumulated odds.

        Raises:
            ValueError: If nothing has been accumulated.
        """
        if self._count == 0:
            raise ValueError("Cannot average an empty AverageOdds: nothing accumulated.")
        return Odds.from_decimal(self._sum / self._count)

    def average_without(self, odds: Odds, count: int) -> Odds:
        """Mean of the accumulated odds with ``count`` copies of ``odds`` removed.

        The accumulator itself is not modified.  The caller is responsible
        for ``odds`` having actually been accumulated ``count`` times; this
        cannot be checked because individual observations are not kept.

        Raises:
            ValueError: If ``count`` is negative or would leave no
                observations to average.
        """
        if count < 0:
            raise ValueError(f"count must be ≥ 0, got {count!r}.")
        remaining = self._count - count
        if remaining <= 0:
            raise ValueError(
                f"Cannot remove {count} odds from an AverageOdds holding "
                f"{self._count}: no observations would remain."
            )
        return Odds.from_decimal((self._sum - odds.decimal * count) / remaining)

    def __repr__(self) -> str:
        return f"AverageOdds(count={self._count}, total={self._sum!r})"
