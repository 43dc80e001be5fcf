"""
Globroot: globally convergent Newton root finding for nonlinear systems.

Given F: R^n -> R^n and an initial guess, the solver combines:
- Newton steps from a forward-difference Jacobian and a dense linear solve
- A backtracking line search that decreases 0.5*|F(x)|^2 at every step
- Stopping tests that tell a true root from a spurious minimum of |F|
"""

__version__ = "0.1.0"

from globroot.core.problem import VectorFunction
from globroot.core.options import NewtonOptions
from globroot.core.status import SolveStatus
from globroot.core.result import RootResult
from globroot.core.errors import (
    ErrorKind,
    RootFindingError,
    InvalidDescentDirectionError,
    SingularJacobianError,
    MaxIterationsExceededError,
)
from globroot.algebra import LinearSolver, LUSolver, QRSolver
from globroot.solvers.newton import NewtonSolver, newt

__all__ = [
    "VectorFunction",
    "NewtonOptions",
    "SolveStatus",
    "RootResult",
    "ErrorKind",
    "RootFindingError",
    "InvalidDescentDirectionError",
    "SingularJacobianError",
    "MaxIterationsExceededError",
    "LinearSolver",
    "LUSolver",
    "QRSolver",
    "NewtonSolver",
    "newt",
]
