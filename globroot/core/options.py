"""Solver configuration."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NewtonOptions:
    """Tolerances and limits for the globally convergent Newton solver."""

    max_iterations: int = 200   # MAXITS
    tolf: float = 1.0e-8        # max|F| for convergence
    tolmin: float = 1.0e-12     # scaled gradient for a spurious minimum
    tolx: float = 1.0e-30       # relative step for no progress
    step_max_scale: float = 100.0
    alpha: float = 1.0e-4       # sufficient-decrease constant
    fd_step: float = 1.0e-8     # relative finite-difference step
    min_step_tol: float = 1.0e-30  # floor for the smallest line-search scale

    def __post_init__(self):
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        if not 0.0 < self.alpha < 1.0:
            raise ValueError("alpha must lie in (0, 1)")
        for name in (
            "tolf", "tolmin", "tolx", "step_max_scale", "fd_step", "min_step_tol"
        ):
            if not getattr(self, name) > 0.0:
                raise ValueError(f"{name} must be positive")
