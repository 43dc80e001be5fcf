"""Merit function turning F(x) = 0 into a minimization problem."""

import numpy as np
from numpy.typing import NDArray

from globroot.core.problem import VectorFunction, evaluate_residual


class MeritFunction:
    """
    f(x) = 0.5 * |F(x)|^2, returned together with the residual F(x).

    The residual is part of the return value rather than hidden state, so a
    caller always holds the residual belonging to the point it evaluated.
    """

    def __init__(self, func: VectorFunction, n: int):
        """
        Args:
            func: System whose root is sought
            n: Number of unknowns
        """
        self.func = func
        self.n = n
        self.nfev = 0

    def evaluate(self, x: NDArray) -> tuple[float, NDArray]:
        """
        Evaluate the merit function.

        Args:
            x: Point (n,)

        Returns:
            f: 0.5 * sum(F_i(x)^2)
            fvec: F(x), shape (n,)
        """
        fvec = evaluate_residual(self.func, x, self.n)
        self.nfev += 1
        return 0.5 * float(np.dot(fvec, fvec)), fvec

    def __call__(self, x: NDArray) -> tuple[float, NDArray]:
        return self.evaluate(x)
