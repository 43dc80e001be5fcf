"""Linear algebra backend abstractions."""

from globroot.algebra.protocols import LinearSolver
from globroot.algebra.dense import LUSolver, QRSolver

__all__ = [
    "LinearSolver",
    "LUSolver",
    "QRSolver",
]
