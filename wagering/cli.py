"""
wagering — command-line front end for the odds toolkit.

Usage
-----
  wagering convert -110 --from american      # both formats + implied prob
  wagering devig 2.09 3.59 3.77 --format decimal --method shin
  wagering kelly +200 --prob 60 --multiplier 0.25 --bankroll 1000
  wagering ev 1.95 --prob 55 --format decimal
  wagering width -141 +123

Prices are read in ``--format`` (``--from`` for ``convert``), which
defaults to ``WAGERING_DISPLAY_FORMAT``.  Probabilities are given in
percent.  Defaults for the method, Kelly multiplier and solver come from
:class:`~wagering.config.WageringConfig`.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from wagering.config import WageringConfig
from wagering.core.devig import NormalizationMethod, normalize
from wagering.core.display import DisplayFormat, format_odds
from wagering.core.expected_value import expected_value
from wagering.core.kelly import kelly_fraction, kelly_stake
from wagering.core.market import margin, market_width
from wagering.core.odds_math import Odds, Probability
from wagering.core.solver import ConvergenceError

logger = logging.getLogger(__name__)

#: Exit status for rejected input or a failed solve.
EXIT_INVALID = 2


def _parse_prices(values: Sequence[float], fmt: DisplayFormat) -> List[Odds]:
    return [fmt.odds_from(v) for v in values]


def _cmd_convert(args: argparse.Namespace, cfg: WageringConfig) -> None:
    odds = DisplayFormat.parse(args.source or cfg.display_format).odds_from(args.price)
    prob = odds.implied_probability()
    print(f"American: {format_odds(odds, DisplayFormat.AMERICAN)}")
    print(f"Decimal:  {format_odds(odds, DisplayFormat.DECIMAL)}")
    print(f"Implied:  {prob.percent:.2f}%")


def _cmd_devig(args: argparse.Namespace, cfg: WageringConfig) -> None:
    fmt = DisplayFormat.parse(args.format or cfg.display_format)
    method = NormalizationMethod(args.method or cfg.default_method)
    market = _parse_prices(args.prices, fmt)
    true_odds = normalize(
        market,
        method,
        tolerance=cfg.solver_tolerance,
        max_iter=cfg.solver_max_iter,
    )
    print(f"Method: {method.value}   Margin: {margin(market) * 100:.2f}%")
    for quoted, fair in zip(market, true_odds):
        print(
            f"  {format_odds(quoted, fmt):>10}  →  {format_odds(fair, fmt):>10}"
            f"  ({fair.implied_probability().percent:6.2f}%)"
        )


def _cmd_kelly(args: argparse.Namespace, cfg: WageringConfig) -> None:
    fmt = DisplayFormat.parse(args.format or cfg.display_format)
    odds = fmt.odds_from(args.price)
    prob = Probability.from_percent(args.prob)
    multiplier = cfg.kelly_multiplier if args.multiplier is None else args.multiplier
    fraction = kelly_fraction(odds, prob, multiplier)
    print(f"Kelly fraction: {fraction:.4f}")
    if args.bankroll is not None:
        stake = kelly_stake(odds, prob, multiplier, args.bankroll)
        print(f"Stake:          {stake:.2f}")


def _cmd_ev(args: argparse.Namespace, cfg: WageringConfig) -> None:
    fmt = DisplayFormat.parse(args.format or cfg.display_format)
    odds = fmt.odds_from(args.price)
    ev = expected_value(odds, Probability.from_percent(args.prob))
    print(f"Expected value: {ev * 100:+.2f}%")


def _cmd_width(args: argparse.Namespace, cfg: WageringConfig) -> None:
    width = market_width(Odds.from_american(args.a), Odds.from_american(args.b))
    print(f"Market width: {width:.1f}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wagering",
        description="Odds conversion, stake sizing and margin removal.",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    formats = [f.value for f in DisplayFormat]

    p = sub.add_parser("convert", help="Show a price in both formats.")
    p.add_argument("price", type=float)
    p.add_argument("--from", dest="source", choices=formats)
    p.set_defaults(func=_cmd_convert)

    p = sub.add_parser("devig", help="Remove the margin from a market.")
    p.add_argument("prices", type=float, nargs="+")
    p.add_argument("--method", choices=[m.value for m in NormalizationMethod])
    p.add_argument("--format", choices=formats)
    p.set_defaults(func=_cmd_devig)

    p = sub.add_parser("kelly", help="Kelly criterion stake sizing.")
    p.add_argument("price", type=float)
    p.add_argument("--prob", type=float, required=True, help="Win probability in percent.")
    p.add_argument("--multiplier", type=float, help="Fractional Kelly multiplier.")
    p.add_argument("--bankroll", type=float)
    p.add_argument("--format", choices=formats)
    p.set_defaults(func=_cmd_kelly)

    p = sub.add_parser("ev", help="Expected value per unit staked.")
    p.add_argument("price", type=float)
    p.add_argument("--prob", type=float, required=True, help="Win probability in percent.")
    p.add_argument("--format", choices=formats)
    p.set_defaults(func=_cmd_ev)

    p = sub.add_parser("width", help="Market width of two American prices.")
    p.add_argument("a", type=float)
    p.add_argument("b", type=float)
    p.set_defaults(func=_cmd_width)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = WageringConfig.from_env()
    except ValueError as exc:
        print(f"❌ Configuration error: {exc}", file=sys.stderr)
        return EXIT_INVALID

    logging.basicConfig(level=cfg.log_level)
    logger.debug("Running %s with %s", args.command, cfg)

    try:
        args.func(args, cfg)
    except (ValueError, ConvergenceError) as exc:
        print(f"❌ {exc}", file=sys.stderr)
        return EXIT_INVALID
    return 0


if __name__ == "__main__":
    sys.exit(main())
