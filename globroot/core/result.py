"""Result container returned by the Newton driver."""

from dataclasses import dataclass, field
import numpy as np
from numpy.typing import NDArray

from globroot.core.status import SolveStatus


@dataclass
class RootResult:
    """Final state of a root-finding run."""

    x: NDArray                      # (n,) estimated root
    fvec: NDArray                   # (n,) F(x)
    f: float                        # 0.5 * |F(x)|^2
    status: SolveStatus
    iterations: int                 # outer Newton rounds performed
    nfev: int                       # evaluations of F
    njev: int                       # finite-difference Jacobians
    history: list[float] = field(default_factory=list)  # accepted merit values

    @property
    def residual_norm(self) -> float:
        """Max-abs component of the final residual."""
        return float(np.max(np.abs(self.fvec))) if self.fvec.size else 0.0

    @property
    def success(self) -> bool:
        return self.status in (SolveStatus.CONVERGED, SolveStatus.NO_PROGRESS)

    @property
    def check(self) -> bool:
        """True when x is a stationary point of |F| that is not a root."""
        return self.status == SolveStatus.STALLED_MINIMUM
