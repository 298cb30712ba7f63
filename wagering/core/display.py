"""Display formats for odds.

Only two formats exist and the set is closed:

* ``american`` — explicit sign, two decimal places (``+150.00``, ``-110.00``)
* ``decimal``  — two decimal places, no sign (``1.91``)

:meth:`DisplayFormat.parse` is the single entry point for turning a
user-supplied tag into a format; anything else raises
:class:`UnknownFormatError`.
"""

from __future__ import annotations

import enum

from wagering.core.odds_math import Odds


class UnknownFormatError(ValueError):
    """Raised for a format tag other than ``american`` or ``decimal``."""

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(
            f"Unknown odds format {tag!r}; expected one of "
            f"{', '.join(repr(f.value) for f in DisplayFormat)}."
        )


class DisplayFormat(str, enum.Enum):
    AMERICAN = "american"
    DECIMAL = "decimal"

    @classmethod
    def parse(cls, tag: str | DisplayFormat) -> DisplayFormat:
        """Resolve a tag (case-insensitive, surrounding whitespace ignored)."""
        if isinstance(tag, cls):
            return tag
        try:
            return cls(str(tag).strip().lower())
        except ValueError:
            raise UnknownFormatError(str(tag)) from None

    def odds_from(self, price: float) -> Odds:
        """Build :class:`Odds` from a price expressed in this format."""
        if self is DisplayFormat.AMERICAN:
            return Odds.from_american(price)
        return Odds.from_decimal(price)


def format_odds(odds: Odds, fmt: DisplayFormat | str = DisplayFormat.AMERICAN) -> str:
    """Render ``odds`` in the given display format.

    Examples::

        format_odds(Odds.from_american(150))            → "+150.00"
        format_odds(Odds.from_decimal(1.91), "decimal") → "1.91"
    """
    fmt = DisplayFormat.parse(fmt)
    if fmt is DisplayFormat.AMERICAN:
        return f"{odds.american:+.2f}"
    return f"{odds.decimal:.2f}"
