"""Scalar helpers for the radial distortion polynomial."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

logger = logging.getLogger(__name__)

NUMCOEF = 3
LOWER_LIMIT = 0.6
UPPER_LIMIT = 1.4


def sqr(x: float) -> float:
    """Return x squared."""
    return x * x


def _round_half_away(value: float) -> float:
    magnitude = abs(value)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return math.copysign(whole, value)


def round_coefficients(coef: Sequence[float]) -> list[float]:
    """Round every coefficient to eight decimal places, halves away from zero."""
    return [_round_half_away(c * 1e8) / 1e8 for c in coef]


def binpow(x: float, n: int) -> float:
    """Raise x to a non-negative integer power by repeated squaring."""
    if n < 0:
        raise ValueError(f"exponent must be non-negative, got {n}")
    if n == 0:
        return 1.0
    if n % 2:
        return binpow(x, n - 1) * x
    return sqr(binpow(x, n // 2))


def _check(coef: Sequence[float]) -> None:
    if len(coef) < NUMCOEF:
        raise ValueError(f"expected {NUMCOEF} coefficients, got {len(coef)}")


def func(r: float, coef: Sequence[float]) -> float:
    """Distorted radius: c2*r^3 + c1*r^2 + c0*r."""
    _check(coef)
    return coef[2] * binpow(r, 3) + coef[1] * r * r + coef[0] * r


def cont_test_sign(r_max: float, coef: Sequence[float]) -> float:
    """Smallest derivative of ``func`` on [0, r_max]; negative means non-monotonic.

    When the derivative at zero is already negative, that value is returned.
    """
    _check(coef)
    c0, c1, c2 = coef[0], coef[1], coef[2]
    if c0 < 0:
        logger.warning("derivative at zero is negative: c0 = %s", c0)
        return c0
    if c2 == 0:
        if c1 >= 0:
            return c0
        return 2 * c1 * r_max + c0
    if c2 > 0:
        vertex = min(max(-c1 / (3 * c2), 0.0), r_max)
        return 3 * c2 * vertex * vertex + 2 * c1 * vertex + c0
    return min(c0, 3 * c2 * r_max * r_max + 2 * c1 * r_max + c0)