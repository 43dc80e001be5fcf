"""Fatal root-finding failures."""

from enum import Enum, auto
from typing import Optional


class ErrorKind(Enum):
    """Closed set of fatal failure kinds."""
    INVALID_DESCENT_DIRECTION = auto()
    SINGULAR_JACOBIAN = auto()
    MAX_ITERATIONS_EXCEEDED = auto()


class RootFindingError(RuntimeError):
    """
    Unrecoverable failure of a single solve attempt.

    Carries the failure kind together with the outer iteration at which it
    happened and the max-abs residual at that point, when known.
    """

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        iteration: Optional[int] = None,
        residual_norm: Optional[float] = None,
    ):
        details = []
        if iteration is not None:
            details.append(f"iteration={iteration}")
        if residual_norm is not None:
            details.append(f"max|F|={residual_norm:.3e}")
        if details:
            message = f"{message} ({', '.join(details)})"
        super().__init__(message)
        self.iteration = iteration
        self.residual_norm = residual_norm


class InvalidDescentDirectionError(RootFindingError):
    """Gradient and search direction do not form a descent pair."""

    kind = ErrorKind.INVALID_DESCENT_DIRECTION


class SingularJacobianError(RootFindingError):
    """The linear solve of the Newton system failed."""

    kind = ErrorKind.SINGULAR_JACOBIAN


class MaxIterationsExceededError(RootFindingError):
    """Iteration limit reached without meeting any stopping test."""

    kind = ErrorKind.MAX_ITERATIONS_EXCEEDED
