"""Constrained minimisation of the Rosenbrock function with COBYLA."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from scipy.optimize import minimize as _scipy_minimize

from astrolens.numeric import sqr

LOWER_BOUND = -10.0
UPPER_BOUND = 10.0
DEFAULT_START = (1.234, 5.678)
XTOL = 1e-8


class OptimizationError(RuntimeError):
    """Raised when the optimiser does not finish successfully."""


def rosenbrock(x: Sequence[float]) -> float:
    """(1 - x0)^2 + 100 (x1 - x0^2)^2."""
    return sqr(1 - x[0]) + 100 * sqr(x[1] - x[0] * x[0])


def upper_constraint(x: Sequence[float]) -> float:
    """Inequality constraint, satisfied when non-positive: 5 - x1."""
    return 5 - x[1]


def minimize(start: Sequence[float] = DEFAULT_START) -> tuple[list[float], float]:
    """Minimise ``rosenbrock`` in the box [-10, 10]^2 subject to x1 >= 5.

    Returns the minimiser and the minimum value.
    """
    if len(start) != 2:
        raise ValueError(f"expected a two-dimensional start point, got {len(start)} values")
    constraints = [{"type": "ineq", "fun": lambda x: -upper_constraint(x)}]
    for i in range(2):
        constraints.append({"type": "ineq", "fun": lambda x, i=i: x[i] - LOWER_BOUND})
        constraints.append({"type": "ineq", "fun": lambda x, i=i: UPPER_BOUND - x[i]})
    result = _scipy_minimize(
        rosenbrock,
        list(start),
        method="COBYLA",
        constraints=constraints,
        tol=XTOL,
        options={"maxiter": 20000},
    )
    if not result.success:
        raise OptimizationError(str(result.message))
    point = [float(v) for v in result.x]
    return point, float(result.fun)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the minimisation from the default start point and print the result."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.parse_args(argv)
    try:
        point, fmin = minimize(DEFAULT_START)
    except OptimizationError as exc:
        print(f"optimisation failed: {exc}")
        return 0
    print(f"found minimum at f({point[0]:g},{point[1]:g}) = {fmin:.10g}")
    return 0