"""Generic fixed-point solver for parametric margin removal.

Several de-vigging schemes share one shape: a family of probability
transforms ``f(o, c)`` indexed by a scalar ``c``, where the right ``c`` is
the one that makes the adjusted probabilities sum to exactly 1.  This
module solves for that ``c`` once, for any transform; a new scheme only has
to supply its transform (see :mod:`wagering.core.devig`).

Algorithm
---------
Successive substitution on the residual ``r(c) = 1 − Σ f(o_i, c)``, with
each step scaled by the local slope of the residual::

    c_{k+1}  =  c_k − r(c_k) / r'(c_k)

``r'`` is estimated by a finite difference at every step.  A plain unit
step (``c_{k+1} = c_k − r(c_k)``) only contracts while ``r'`` lies in
``(0, 2)``, and for Shin or logarithmic de-vigging the slope grows with the
number of outcomes, so an unscaled step diverges on race-sized fields.

A step that leaves the finite domain of the transform, or fails to shrink
``|r|``, is halved until it does.  The solve stops when ``|r| < tolerance``
or after ``max_iter`` steps.  No general convergence proof is claimed,
which is why exhausting the budget raises :class:`ConvergenceError`
instead of returning a best-effort value.

Run tests with::

    pytest tests/test_solver.py -v
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Final, Tuple

import numpy as np

logger = logging.getLogger(__name__)

#: Convergence tolerance on ``|1 − Σ f|``.
DEFAULT_TOLERANCE: Final[float] = 1e-12

#: Iteration budget.  Bounds every solve, so the solver always terminates.
DEFAULT_MAX_ITER: Final[int] = 1000

#: Relative finite-difference width for the slope estimate.
_SLOPE_STEP: Final[float] = 1e-6

#: Maximum number of times one step is halved before the solve gives up.
_MAX_HALVINGS: Final[int] = 60

#: A transform maps the parameter ``c`` to one adjusted probability per outcome.
Transform = Callable[[float], np.ndarray]


class ConvergenceError(ArithmeticError):
    """Raised when the solver exhausts its budget or leaves the finite domain.

    Attributes:
        parameter: Last parameter value reached.
        residual: ``1 − Σ f`` at that parameter (may be ``nan``).
        iterations: Number of steps taken.
    """

    def __init__(self, parameter: float, residual: float, iterations: int) -> None:
        self.parameter = parameter
        self.residual = residual
        self.iterations = iterations
        super().__init__(
            f"Fixed-point solve did not converge after {iterations} iterations "
            f"(parameter={parameter!r}, residual={residual!r})."
        )


@dataclass(frozen=True)
class SolverResult:
    """Outcome of a converged solve.

    Attributes:
        parameter: Parameter ``c`` at which the probabilities sum to 1.
        probabilities: Adjusted probabilities at ``parameter``, index
            aligned with the transform's outcomes.
        iterations: Steps taken to converge (0 when the start value was
            already within tolerance).
        residual: Final ``1 − Σ f``.
    """

    parameter: float
    probabilities: np.ndarray
    iterations: int
    residual: float


def _evaluate(transform: Transform, parameter: float) -> Tuple[np.ndarray, float]:
    with np.errstate(invalid="ignore", divide="ignore", over="ignore"):
        probabilities = np.asarray(transform(parameter), dtype=float)
    return probabilities, 1.0 - float(probabilities.sum())


def _slope(transform: Transform, parameter: float, residual: float) -> float:
    """Finite-difference ``dr/dc``, falling back to a backward difference."""
    h = _SLOPE_STEP * max(1.0, abs(parameter))
    for offset in (h, -h):
        _, shifted = _evaluate(transform, parameter + offset)
        slope = (shifted - residual) / offset
        if math.isfinite(slope) and slope != 0.0:
            return slope
    return math.nan


def solve_fixed_point(
    transform: Transform,
    initial: float,
    *,
    tolerance: float = DEFAULT_TOLERANCE,
    max_iter: int = DEFAULT_MAX_ITER,
) -> SolverResult:
    """Find ``c`` such that ``transform(c)`` sums to 1.

    Args:
        transform: Maps a parameter to an array of adjusted probabilities.
        initial: Starting parameter ``c₀``.
        tolerance: Stop once ``|1 − Σ transform(c)| < tolerance``.  Must be
            finite and positive.
        max_iter: Maximum number of update steps.

    Returns:
        A :class:`SolverResult` for the converged parameter.

    Raises:
        ValueError: If ``tolerance`` is not a finite positive number or
            ``max_iter`` is negative.
        ConvergenceError: If ``max_iter`` steps do not reach ``tolerance``,
            the start value produces non-finite probabilities, or no step
            from the current parameter reduces the residual.
    """
    if not math.isfinite(tolerance) or tolerance <= 0.0:
        raise ValueError(f"tolerance must be finite and > 0, got {tolerance!r}.")
    if max_iter < 0:
        raise ValueError(f"max_iter must be ≥ 0, got {max_iter!r}.")

    parameter = float(initial)
    probabilities, residual = _evaluate(transform, parameter)
    if not math.isfinite(residual):
        logger.warning(
            "Fixed-point solve started outside the finite domain (parameter=%r)",
            parameter,
        )
        raise ConvergenceError(parameter, residual, 0)

    for iteration in range(max_iter + 1):
        if abs(residual) < tolerance:
            logger.debug(
                "Fixed-point solve converged in %d iterations (parameter=%.12g)",
                iteration, parameter,
            )
            return SolverResult(
                parameter=parameter,
                probabilities=probabilities,
                iterations=iteration,
                residual=residual,
            )
        if iteration == max_iter:
            break

        slope = _slope(transform, parameter, residual)
        if not math.isfinite(slope):
            logger.warning(
                "Fixed-point solve found no usable slope at iteration %d (parameter=%r)",
                iteration, parameter,
            )
            raise ConvergenceError(parameter, residual, iteration)

        step = residual / slope
        for _ in range(_MAX_HALVINGS):
            trial = parameter - step
            trial_probabilities, trial_residual = _evaluate(transform, trial)
            if math.isfinite(trial_residual) and abs(trial_residual) < abs(residual):
                break
            step /= 2.0
        else:
            logger.warning(
                "Fixed-point solve stalled at iteration %d (parameter=%r, residual=%r)",
                iteration, parameter, residual,
            )
            raise ConvergenceError(parameter, residual, iteration)

        parameter = trial
        probabilities = trial_probabilities
        residual = trial_residual

    logger.warning(
        "Fixed-point solve hit the %d-iteration budget (parameter=%r, residual=%r)",
        max_iter, parameter, residual,
    )
    raise ConvergenceError(parameter, residual, max_iter)
