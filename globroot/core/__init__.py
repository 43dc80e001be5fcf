"""Core types for the root finder."""

from globroot.core.problem import (
    VectorFunction,
    CallableFunction,
    as_vector_function,
)
from globroot.core.options import NewtonOptions
from globroot.core.status import SolveStatus
from globroot.core.errors import (
    ErrorKind,
    RootFindingError,
    InvalidDescentDirectionError,
    SingularJacobianError,
    MaxIterationsExceededError,
)
from globroot.core.result import RootResult

__all__ = [
    "VectorFunction",
    "CallableFunction",
    "as_vector_function",
    "NewtonOptions",
    "SolveStatus",
    "ErrorKind",
    "RootFindingError",
    "InvalidDescentDirectionError",
    "SingularJacobianError",
    "MaxIterationsExceededError",
    "RootResult",
]
