"""Problem definition protocols."""

from typing import Protocol, Callable, Sequence, Union, runtime_checkable
import numpy as np
from numpy.typing import NDArray


@runtime_checkable
class VectorFunction(Protocol):
    """User-supplied system F: R^n -> R^n whose root is sought."""

    def evaluate(self, x: NDArray) -> Sequence[float]:
        """
        Evaluate the residual F(x).

        Args:
            x: Point of shape (n,)

        Returns:
            Residual of length n
        """
        ...


class CallableFunction:
    """Adapts a plain callable ``F(x) -> sequence`` to :class:`VectorFunction`."""

    def __init__(self, fn: Callable[[NDArray], Sequence[float]]):
        self.fn = fn

    def evaluate(self, x: NDArray) -> Sequence[float]:
        return self.fn(x)


ProblemLike = Union[VectorFunction, Callable[[NDArray], Sequence[float]]]


def as_vector_function(func: ProblemLike) -> VectorFunction:
    """
    Normalize a problem to an object with ``evaluate``.

    Args:
        func: VectorFunction or plain callable

    Returns:
        VectorFunction wrapping ``func``
    """
    if isinstance(func, VectorFunction):
        return func
    if callable(func):
        return CallableFunction(func)
    raise TypeError(
        f"Expected an object with evaluate(x) or a callable, got {type(func).__name__}"
    )


def evaluate_residual(func: VectorFunction, x: NDArray, n: int) -> NDArray:
    """Evaluate ``func`` at ``x`` and check it returns a length-n vector."""
    fvec = np.asarray(func.evaluate(x), dtype=float).reshape(-1)
    if fvec.shape[0] != n:
        raise ValueError(f"F(x) must return {n} values, got {fvec.shape[0]}")
    return fvec
