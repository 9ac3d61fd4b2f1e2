import math

import pytest

from astrolens.numeric import (
    binpow,
    cont_test_sign,
    func,
    round_coefficients,
    sqr,
)


@pytest.mark.parametrize("x", [0.0, 1.5, -2.25, 7.0])
def test_sqr_matches_power(x):
    assert sqr(x) == pytest.approx(x**2)
    assert sqr(-x) == sqr(x)


@pytest.mark.parametrize("x", [0.5, 1.0, 2.0, -3.0, 1.1])
@pytest.mark.parametrize("n", [0, 1, 2, 3, 5, 8, 13])
def test_binpow_matches_builtin_power(x, n):
    assert binpow(x, n) == pytest.approx(x**n)


def test_binpow_zero_exponent_is_one_even_for_zero_base():
    assert binpow(0.0, 0) == 1.0


def test_binpow_rejects_negative_exponent():
    with pytest.raises(ValueError):
        binpow(2.0, -1)


def test_round_coefficients_keeps_short_values():
    values = [0.5, -1.25, 3.0]
    assert round_coefficients(values) == values


def test_round_coefficients_is_close_and_idempotent():
    values = [0.123456789123, -9.87654321987, 1e-3 / 7]
    rounded = round_coefficients(values)
    assert len(rounded) == len(values)
    for original, result in zip(values, rounded):
        assert abs(original - result) <= 5e-9 + 1e-15
    assert round_coefficients(rounded) == rounded


def test_round_coefficients_is_symmetric_and_does_not_mutate():
    values = [0.333333333333, 2.718281828459]
    copy = list(values)
    positive = round_coefficients(values)
    negative = round_coefficients([-v for v in values])
    assert negative == [-v for v in positive]
    assert values == copy


def test_func_at_zero_is_zero():
    assert func(0.0, [1.3, -0.2, 0.7]) == 0.0


def test_func_identity_coefficients():
    assert func(12.5, [1.0, 0.0, 0.0]) == 12.5


def test_func_cubic_term_uses_binpow():
    assert func(3.5, [0.0, 0.0, 1.0]) == pytest.approx(binpow(3.5, 3))


def test_func_is_linear_in_coefficients():
    a = [0.9, 0.01, -0.002]
    b = [0.2, -0.03, 0.004]
    both = [x + y for x, y in zip(a, b)]
    for r in (1.0, 4.0, 37.5):
        assert func(r, both) == pytest.approx(func(r, a) + func(r, b))


def test_func_rejects_short_coefficients():
    with pytest.raises(ValueError):
        func(1.0, [1.0, 2.0])


def test_cont_test_sign_negative_c0_is_returned():
    assert cont_test_sign(100.0, [-0.25, 1.0, 1.0]) == -0.25


def test_cont_test_sign_linear_increasing_returns_c0():
    assert cont_test_sign(50.0, [0.75, 0.1, 0.0]) == 0.75


def _numeric_min_derivative(r_max, coef, steps=20000):
    h = 1e-4
    points = (r_max * k / steps for k in range(steps + 1))
    return min((func(r + h, coef) - func(r - h, coef)) / (2 * h) for r in points)


@pytest.mark.parametrize(
    "coef",
    [
        [1.0, -0.03, 0.0004],
        [1.0, 0.5, 0.002],
        [0.8, 0.01, -0.0001],
        [1.0, 0.0, 0.0],
        [1.2, -0.004, 0.0],
        [0.0, 0.0, 0.001],
    ],
)
def test_cont_test_sign_is_minimum_derivative(coef):
    r_max = 60.0
    expected = _numeric_min_derivative(r_max, coef)
    assert cont_test_sign(r_max, coef) == pytest.approx(expected, rel=1e-4, abs=1e-4)


def test_cont_test_sign_detects_non_monotonic_polynomial():
    assert cont_test_sign(100.0, [1.0, -0.05, 0.0]) < 0
    assert math.isfinite(cont_test_sign(100.0, [1.0, -0.05, 0.0001]))