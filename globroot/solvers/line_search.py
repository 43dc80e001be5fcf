"""Backtracking line search with a sufficient-decrease condition."""

from dataclasses import dataclass
import math
import numpy as np
from numpy.typing import NDArray

from globroot.core.errors import InvalidDescentDirectionError
from globroot.logging import get_logger
from globroot.solvers.merit import MeritFunction
from globroot.utils.norms import relative_step

logger = get_logger(__name__)


@dataclass
class LineSearchResult:
    """Outcome of one line search along a Newton direction."""

    x: NDArray          # (n,) accepted point, x_old when check is set
    f: float            # merit value at x
    fvec: NDArray       # (n,) F(x)
    step_scale: float   # lambda of the accepted step, 0 when check is set
    check: bool         # no acceptable step was found
    nfev: int           # merit evaluations spent


class BacktrackingLineSearch:
    """
    Finds lambda in (0, 1] with f(x_old + lambda*p) <= f_old + alpha*lambda*slope.

    The full step is tried first. A rejected step is replaced by the minimizer
    of a quadratic model of f along p on the first backtrack, and of a cubic
    model through the two most recent trial points afterwards, kept within
    [0.1, 0.5] of the previous lambda.
    """

    def __init__(
        self,
        merit: MeritFunction,
        alpha: float = 1.0e-4,
        min_step_tol: float = 1.0e-30,
    ):
        """
        Args:
            merit: Merit function evaluated at trial points
            alpha: Sufficient-decrease constant
            min_step_tol: Relative step below which no progress is possible
        """
        self.merit = merit
        self.alpha = alpha
        self.min_step_tol = min_step_tol

    def search(
        self,
        x_old: NDArray,
        f_old: float,
        fvec_old: NDArray,
        gradient: NDArray,
        direction: NDArray,
        step_max: float,
    ) -> LineSearchResult:
        """
        Backtrack along ``direction`` from ``x_old``.

        Args:
            x_old: Current point (n,)
            f_old: Merit value at x_old
            fvec_old: F(x_old), returned unchanged when no step is accepted
            gradient: Merit-function gradient at x_old (n,)
            direction: Search direction (n,), not modified
            step_max: Cap on the Euclidean length of the step

        Returns:
            LineSearchResult with the accepted point and its residual

        Raises:
            InvalidDescentDirectionError: If gradient . direction >= 0
        """
        p = np.array(direction, dtype=float)
        norm = float(np.linalg.norm(p))
        if norm > step_max:
            p *= step_max / norm

        slope = float(np.dot(gradient, p))
        if not slope < 0.0:
            raise InvalidDescentDirectionError(
                f"Roundoff problem in line search: slope {slope:.3e} is not negative"
            )

        alamin = self.min_step_tol / relative_step(p, x_old)
        alam = 1.0
        alam2 = 0.0
        f2 = 0.0
        nfev = 0

        while True:
            x = x_old + alam * p
            f, fvec = self.merit.evaluate(x)
            nfev += 1

            if alam < alamin:
                logger.debug("Step scale %.3e fell below %.3e", alam, alamin)
                return LineSearchResult(
                    x=x_old.copy(),
                    f=f_old,
                    fvec=fvec_old,
                    step_scale=0.0,
                    check=True,
                    nfev=nfev,
                )
            if f <= f_old + self.alpha * alam * slope:
                return LineSearchResult(
                    x=x, f=f, fvec=fvec, step_scale=alam, check=False, nfev=nfev
                )

            if nfev == 1 and math.isfinite(f):
                tmplam = -slope / (2.0 * (f - f_old - slope))
            elif math.isfinite(f) and math.isfinite(f2):
                tmplam = self._cubic_step(alam, alam2, f, f2, f_old, slope)
            else:
                # overflow in F: no model to fit, halve the step
                tmplam = 0.5 * alam
            tmplam = min(tmplam, 0.5 * alam)

            logger.debug("Rejected lambda=%.3e (f=%.6e), next %.3e", alam, f, tmplam)
            alam2 = alam
            f2 = f
            alam = max(tmplam, 0.1 * alam)

    @staticmethod
    def _cubic_step(
        alam: float, alam2: float, f: float, f2: float, f_old: float, slope: float
    ) -> float:
        """Minimizer of the cubic through the last two trial points."""
        rhs1 = f - f_old - alam * slope
        rhs2 = f2 - f_old - alam2 * slope
        a = (rhs1 / (alam * alam) - rhs2 / (alam2 * alam2)) / (alam - alam2)
        b = (-alam2 * rhs1 / (alam * alam) + alam * rhs2 / (alam2 * alam2)) / (
            alam - alam2
        )
        if a == 0.0:
            if b == 0.0:
                return 0.5 * alam
            return -slope / (2.0 * b)
        disc = b * b - 3.0 * a * slope
        if disc < 0.0:
            return 0.5 * alam
        if b <= 0.0:
            return (-b + math.sqrt(disc)) / (3.0 * a)
        return -slope / (b + math.sqrt(disc))
