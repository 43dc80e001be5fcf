"""Termination status of a root-finding run."""

from enum import Enum, auto


class SolveStatus(Enum):
    """How the Newton driver stopped without raising."""
    CONVERGED = auto()          # max|F| below tolerance
    STALLED_MINIMUM = auto()    # local minimum of |F| that is not a root
    LINE_SEARCH_STUCK = auto()  # no progress along p, gradient not small
    NO_PROGRESS = auto()        # relative change in x below tolerance
    CANCELLED = auto()          # stopped by the user callback
