"""Tests for the backtracking line search."""

import numpy as np
import pytest

from globroot.core.errors import ErrorKind, InvalidDescentDirectionError
from globroot.core.problem import as_vector_function
from globroot.solvers.line_search import BacktrackingLineSearch
from globroot.solvers.merit import MeritFunction

ALPHA = 1e-4


def _line_search(fn, n=1, **kwargs):
    merit = MeritFunction(as_vector_function(fn), n)
    return BacktrackingLineSearch(merit, **kwargs), merit


def _start(merit, x):
    x = np.asarray(x, dtype=float)
    f, fvec = merit.evaluate(x)
    return x, f, fvec


def test_full_newton_step_accepted():
    """On a linear residual the full step lands on the root."""
    search, merit = _line_search(lambda x: [x[0] - 1.0])
    x_old, f_old, fvec_old = _start(merit, [3.0])

    result = search.search(x_old, f_old, fvec_old, np.array([2.0]), np.array([-2.0]), 100.0)

    assert not result.check
    assert result.step_scale == 1.0
    assert result.x == pytest.approx([1.0])
    assert result.f == pytest.approx(0.0)
    assert result.nfev == 1


def test_quadratic_backtrack():
    """Overshooting step is cut back by the quadratic model."""
    search, merit = _line_search(lambda x: [x[0]])
    x_old, f_old, fvec_old = _start(merit, [1.0])
    g, p = np.array([1.0]), np.array([-10.0])

    result = search.search(x_old, f_old, fvec_old, g, p, 1e3)

    assert not result.check
    assert result.step_scale == pytest.approx(0.1)
    assert result.x == pytest.approx([0.0], abs=1e-12)
    assert result.nfev == 2


def test_cubic_backtrack():
    """Second rejection switches to the cubic model."""
    search, merit = _line_search(lambda x: [x[0]])
    x_old, f_old, fvec_old = _start(merit, [1.0])
    g, p = np.array([1.0]), np.array([-100.0])

    result = search.search(x_old, f_old, fvec_old, g, p, 1e3)

    assert not result.check
    assert result.nfev == 3
    assert result.step_scale == pytest.approx(0.01)
    assert abs(result.x[0]) < 1e-6


def test_direction_capped_at_step_max():
    search, merit = _line_search(lambda x: [x[0]])
    x_old, f_old, fvec_old = _start(merit, [1.0])
    p = np.array([-10.0])

    result = search.search(x_old, f_old, fvec_old, np.array([1.0]), p, 1.0)

    assert result.step_scale == 1.0
    assert result.x == pytest.approx([0.0])
    # caller's direction is not rescaled in place
    assert p[0] == -10.0


def test_ascent_direction_rejected():
    search, merit = _line_search(lambda x: [x[0]])
    x_old, f_old, fvec_old = _start(merit, [1.0])

    with pytest.raises(InvalidDescentDirectionError) as info:
        search.search(x_old, f_old, fvec_old, np.array([1.0]), np.array([1.0]), 10.0)

    assert info.value.kind == ErrorKind.INVALID_DESCENT_DIRECTION
    assert merit.nfev == 1


def test_zero_slope_rejected():
    search, merit = _line_search(lambda x: [x[0], x[1]], n=2)
    x_old, f_old, fvec_old = _start(merit, [1.0, 0.0])

    with pytest.raises(InvalidDescentDirectionError):
        search.search(
            x_old, f_old, fvec_old, np.array([1.0, 0.0]), np.array([0.0, 1.0]), 10.0
        )


def test_cubic_step_degenerate_model_halves():
    """Trial values exactly on the slope line give a = b = 0; the step is halved."""
    # f_old = 1, slope = -1, trials f(1) = 0 and f(0.5) = 0.5
    tmplam = BacktrackingLineSearch._cubic_step(0.5, 1.0, 0.5, 0.0, 1.0, -1.0)

    assert tmplam == 0.25


def test_no_progress_sets_check_and_keeps_old_point():
    """When nothing decreases f, x_old and its residual come back with check set."""
    search, merit = _line_search(lambda x: [x[0]])
    x_old, f_old, fvec_old = _start(merit, [0.0])

    # the gradient claims descent along -x, but f grows in both directions
    result = search.search(x_old, f_old, fvec_old, np.array([1.0]), np.array([-1.0]), 10.0)

    assert result.check
    assert result.step_scale == 0.0
    assert np.array_equal(result.x, x_old)
    assert result.f == f_old
    assert result.fvec is fvec_old
    assert result.x is not x_old


def test_overflowing_trial_points_are_rejected():
    """Non-finite merit values shrink the step instead of poisoning the models."""
    search, merit = _line_search(lambda x: [np.exp(x[0]) - 1.0])
    x_old, f_old, fvec_old = _start(merit, [-1.0])
    g = np.array([np.exp(-1.0) * fvec_old[0]])

    with np.errstate(over="ignore", invalid="ignore"):
        result = search.search(x_old, f_old, fvec_old, g, np.array([1000.0]), 1e4)

    assert not result.check
    assert np.isfinite(result.f)
    assert result.f < f_old


def _circle_line(x):
    return np.array([x[0] ** 2 + x[1] ** 2 - 4.0, x[0] - x[1]])


def _circle_line_jacobian(x):
    return np.array([[2.0 * x[0], 2.0 * x[1]], [1.0, -1.0]])


@pytest.mark.parametrize(
    "start",
    [[3.0, 1.0], [10.0, -4.0], [0.3, -2.0], [-5.0, 0.5], [50.0, 40.0]],
)
def test_sufficient_decrease_holds(start):
    """Every accepted step satisfies f_new <= f_old + alpha*lambda*slope."""
    search, merit = _line_search(_circle_line, n=2, alpha=ALPHA)
    x_old, f_old, fvec_old = _start(merit, start)
    J = _circle_line_jacobian(x_old)
    g = J.T @ fvec_old
    p = np.linalg.solve(J, -fvec_old)
    step_max = 100.0 * max(np.linalg.norm(x_old), 2.0)

    result = search.search(x_old, f_old, fvec_old, g, p, step_max)

    assert not result.check
    scale = min(1.0, step_max / np.linalg.norm(p))
    slope = float(g @ (p * scale))
    assert result.f <= f_old + ALPHA * result.step_scale * slope
    assert result.f < f_old
    assert np.allclose(result.fvec, _circle_line(result.x))
