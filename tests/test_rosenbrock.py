import pytest

from astrolens.rosenbrock import main, minimize, rosenbrock, upper_constraint


def test_rosenbrock_global_minimum():
    assert rosenbrock([1.0, 1.0]) == 0.0


def test_rosenbrock_nonnegative():
    for point in ([0.0, 0.0], [-1.5, 2.0], [3.0, -4.0]):
        assert rosenbrock(point) >= 0.0


def test_upper_constraint_sign():
    assert upper_constraint([0.0, 6.0]) < 0
    assert upper_constraint([0.0, 4.0]) > 0
    assert upper_constraint([0.0, 5.0]) == 0


def test_minimize_respects_constraints():
    point, fmin = minimize([1.234, 5.678])
    assert point[1] >= 5 - 1e-6
    assert all(-10 - 1e-6 <= v <= 10 + 1e-6 for v in point)
    assert fmin == pytest.approx(rosenbrock(point))


def test_minimize_improves_on_start():
    start = [1.234, 5.678]
    _, fmin = minimize(start)
    assert fmin < rosenbrock(start)


def test_minimize_lands_on_constraint_boundary():
    point, _ = minimize([1.234, 5.678])
    assert point[1] == pytest.approx(5.0, abs=1e-4)
    assert point[0] ** 2 == pytest.approx(5.0, abs=0.1)


def test_minimize_rejects_wrong_dimension():
    with pytest.raises(ValueError):
        minimize([1.0, 2.0, 3.0])


def test_main_prints_result(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert out.startswith("found minimum at f(")