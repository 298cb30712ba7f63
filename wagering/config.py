"""Runtime configuration — every tunable default in one place.

:class:`WageringConfig` is a frozen dataclass of defaults.  The CLI builds
one with :meth:`WageringConfig.from_env`, which loads a ``.env`` file from
the working directory (if present) and then reads:

=============================  ==================  ==========================
Variable                       Default             Field
=============================  ==================  ==========================
``WAGERING_SOLVER_TOLERANCE``  ``1e-12``           ``solver_tolerance``
``WAGERING_SOLVER_MAX_ITER``   ``1000``            ``solver_max_iter``
``WAGERING_DEFAULT_METHOD``    ``equal_margin``    ``default_method``
``WAGERING_DISPLAY_FORMAT``    ``american``        ``display_format``
``WAGERING_KELLY_MULTIPLIER``  ``1.0``             ``kelly_multiplier``
``WAGERING_LOG_LEVEL``         ``WARNING``         ``log_level``
=============================  ==================  ==========================

Override a single field in code with :func:`dataclasses.replace`::

    cfg = replace(WageringConfig.from_env(), kelly_multiplier=0.25)
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from typing import Callable, TypeVar

from dotenv import find_dotenv, load_dotenv

from wagering.core.devig import NormalizationMethod
from wagering.core.display import DisplayFormat
from wagering.core.solver import DEFAULT_MAX_ITER, DEFAULT_TOLERANCE

T = TypeVar("T")


def _env(name: str, default: T, parse: Callable[[str], T]) -> T:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return parse(raw.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid value {raw!r} for {name}: {exc}") from exc


def _log_level(raw: str) -> str:
    level = raw.upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"unknown log level {raw!r}")
    return level


@dataclass(frozen=True)
class WageringConfig:
    """Immutable bundle of runtime defaults.

    Attributes:
        solver_tolerance: Convergence tolerance of the fixed-point solver.
        solver_max_iter: Iteration budget of the fixed-point solver.
        default_method: Margin-removal method used when none is given.
        display_format: Format for printing and parsing prices.
        kelly_multiplier: Fractional Kelly multiplier used when none is given.
        log_level: Root logging level name for the CLI.
    """

    solver_tolerance: float = DEFAULT_TOLERANCE
    solver_max_iter: int = DEFAULT_MAX_ITER
    default_method: NormalizationMethod = NormalizationMethod.EQUAL_MARGIN
    display_format: DisplayFormat = DisplayFormat.AMERICAN
    kelly_multiplier: float = 1.0
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if not math.isfinite(self.solver_tolerance) or self.solver_tolerance <= 0.0:
            raise ValueError(
                f"solver_tolerance must be finite and > 0, got {self.solver_tolerance!r}."
            )
        if self.solver_max_iter < 1:
            raise ValueError(
                f"solver_max_iter must be ≥ 1, got {self.solver_max_iter!r}."
            )

    @classmethod
    def from_env(
        cls,
        *,
        dotenv: bool = True,
        dotenv_path: str | os.PathLike | None = None,
    ) -> WageringConfig:
        """Build a config from ``WAGERING_*`` environment variables.

        Args:
            dotenv: Load a ``.env`` file first.  Existing environment
                variables take precedence over the file.
            dotenv_path: Explicit ``.env`` location.  When omitted the
                working directory and its parents are searched.

        Raises:
            ValueError: If a variable is set to a malformed value.
        """
        if dotenv:
            load_dotenv(dotenv_path or find_dotenv(usecwd=True))
        defaults = cls()
        return cls(
            solver_tolerance=_env(
                "WAGERING_SOLVER_TOLERANCE", defaults.solver_tolerance, float
            ),
            solver_max_iter=_env(
                "WAGERING_SOLVER_MAX_ITER", defaults.solver_max_iter, int
            ),
            default_method=_env(
                "WAGERING_DEFAULT_METHOD",
                defaults.default_method,
                lambda raw: NormalizationMethod(raw.lower()),
            ),
            display_format=_env(
                "WAGERING_DISPLAY_FORMAT", defaults.display_format, DisplayFormat.parse
            ),
            kelly_multiplier=_env(
                "WAGERING_KELLY_MULTIPLIER", defaults.kelly_multiplier, float
            ),
            log_level=_env("WAGERING_LOG_LEVEL", defaults.log_level, _log_level),
        )
