"""Scale-aware vector measures used by the stopping tests."""

import numpy as np
from numpy.typing import NDArray


def max_abs(v: NDArray) -> float:
    """Infinity norm, 0 for an empty vector."""
    return float(np.max(np.abs(v))) if v.size else 0.0


def relative_change(x: NDArray, x_old: NDArray) -> float:
    """
    Largest change in x relative to its own magnitude.

    Components with |x_i| < 1 are measured absolutely.

    Args:
        x: New point (n,)
        x_old: Previous point (n,)

    Returns:
        max_i |x_i - x_old_i| / max(|x_i|, 1)
    """
    return max_abs(np.abs(x - x_old) / np.maximum(np.abs(x), 1.0))


def relative_step(p: NDArray, x: NDArray) -> float:
    """max_i |p_i| / max(|x_i|, 1): the step p measured against x."""
    return max_abs(np.abs(p) / np.maximum(np.abs(x), 1.0))


def scaled_gradient(g: NDArray, x: NDArray, f: float) -> float:
    """
    Gradient of the merit function normalized by the scale of x and f.

    Used to tell a spurious minimum of |F| (small value) from a line
    search that merely failed.

    Args:
        g: Merit-function gradient (n,)
        x: Current point (n,)
        f: Merit value at x

    Returns:
        max_i |g_i| * max(|x_i|, 1) / max(f, n/2)
    """
    den = max(f, 0.5 * x.shape[0])
    return max_abs(np.abs(g) * np.maximum(np.abs(x), 1.0)) / den
