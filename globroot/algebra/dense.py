"""Dense linear solvers using NumPy/SciPy."""

from typing import Optional
import warnings
import numpy as np
import scipy.linalg
from numpy.typing import NDArray


def _check_finite(A: NDArray) -> None:
    """Raise LinAlgError for a matrix holding inf or NaN."""
    if not np.all(np.isfinite(A)):
        raise np.linalg.LinAlgError("Non-finite matrix")


def _check_pivots(pivots: NDArray, rcond: Optional[float]) -> None:
    """Raise LinAlgError when a pivot is zero or negligible."""
    magnitude = np.abs(pivots)
    if rcond is None:
        rcond = pivots.shape[0] * np.finfo(float).eps
    largest = magnitude.max() if magnitude.size else 0.0
    if largest == 0.0 or magnitude.min() <= rcond * largest:
        raise np.linalg.LinAlgError("Singular matrix")


def _store(b: NDArray, x: NDArray) -> None:
    if not np.all(np.isfinite(x)):
        raise np.linalg.LinAlgError("Non-finite solution of linear system")
    b[:] = x


class LUSolver:
    """LU decomposition with partial pivoting (scipy.linalg.lu_factor)."""

    def __init__(self, rcond: Optional[float] = None):
        """
        Args:
            rcond: Relative pivot threshold below which A counts as singular.
                Defaults to n * machine epsilon.
        """
        self.rcond = rcond

    def solve(self, A: NDArray, b: NDArray) -> None:
        """Overwrite b with the solution of Ax = b."""
        _check_finite(A)
        with warnings.catch_warnings():
            # exactly singular input is reported through the pivot check
            warnings.simplefilter("ignore", scipy.linalg.LinAlgWarning)
            lu, piv = scipy.linalg.lu_factor(A)
        _check_pivots(np.diag(lu), self.rcond)
        _store(b, scipy.linalg.lu_solve((lu, piv), b))


class QRSolver:
    """Householder QR (scipy.linalg.qr) followed by a triangular solve."""

    def __init__(self, rcond: Optional[float] = None):
        self.rcond = rcond

    def solve(self, A: NDArray, b: NDArray) -> None:
        """Overwrite b with the solution of Ax = b."""
        _check_finite(A)
        Q, R = scipy.linalg.qr(A)
        _check_pivots(np.diag(R), self.rcond)
        _store(b, scipy.linalg.solve_triangular(R, Q.T @ b))
