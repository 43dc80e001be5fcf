"""Linear solver protocol."""

from typing import Protocol
from numpy.typing import NDArray


class LinearSolver(Protocol):
    """
    Protocol for the dense linear solve used by the Newton driver.
    Allows swapping between LU, QR or any other factorization.
    """

    def solve(self, A: NDArray, b: NDArray) -> None:
        """
        Solve linear system Ax = b in place.

        Args:
            A: Square system matrix (n, n)
            b: Right-hand side (n,), overwritten with the solution

        Raises:
            numpy.linalg.LinAlgError: If A is singular or numerically so
        """
        ...
