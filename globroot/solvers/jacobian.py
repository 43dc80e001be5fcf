"""Finite-difference Jacobian estimation."""

import numpy as np
from numpy.typing import NDArray

from globroot.core.problem import VectorFunction, evaluate_residual


class ForwardDifferenceJacobian:
    """
    Forward-difference approximation of dF_i/dx_j.

    Each call costs n evaluations of F, O(n^2) work for the differences,
    and is followed in the driver by an O(n^3) linear solve.
    """

    def __init__(self, func: VectorFunction, eps: float = 1.0e-8):
        """
        Args:
            func: System to differentiate
            eps: Relative perturbation of each coordinate
        """
        self.func = func
        self.eps = eps
        self.nfev = 0
        self.njev = 0

    def estimate(self, x: NDArray, fvec: NDArray) -> NDArray:
        """
        Estimate the Jacobian at x.

        Args:
            x: Point (n,)
            fvec: F(x), already computed by the caller

        Returns:
            Jacobian (n, n), column j holds dF/dx_j
        """
        n = x.shape[0]
        df = np.empty((n, n))
        xh = np.array(x, dtype=float)

        for j in range(n):
            temp = xh[j]
            h = self.eps * abs(temp)
            if h == 0.0:
                h = self.eps
            xh[j] = temp + h
            # divide by the perturbation actually representable in x
            h = xh[j] - temp
            f = evaluate_residual(self.func, xh.copy(), n)
            xh[j] = temp
            df[:, j] = (f - fvec) / h

        self.nfev += n
        self.njev += 1
        return df

    def __call__(self, x: NDArray, fvec: NDArray) -> NDArray:
        return self.estimate(x, fvec)
