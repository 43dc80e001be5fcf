"""Root-finding components and the Newton driver."""

from globroot.solvers.merit import MeritFunction
from globroot.solvers.jacobian import ForwardDifferenceJacobian
from globroot.solvers.line_search import BacktrackingLineSearch, LineSearchResult
from globroot.solvers.newton import NewtonSolver, newt

__all__ = [
    "MeritFunction",
    "ForwardDifferenceJacobian",
    "BacktrackingLineSearch",
    "LineSearchResult",
    "NewtonSolver",
    "newt",
]
