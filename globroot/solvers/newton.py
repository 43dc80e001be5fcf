"""Globally convergent Newton driver for nonlinear systems."""

from typing import Callable, Optional, Any
import numpy as np
from numpy.typing import NDArray

from globroot.algebra.dense import LUSolver
from globroot.algebra.protocols import LinearSolver
from globroot.core.errors import (
    InvalidDescentDirectionError,
    MaxIterationsExceededError,
    SingularJacobianError,
)
from globroot.core.options import NewtonOptions
from globroot.core.problem import ProblemLike, as_vector_function
from globroot.core.result import RootResult
from globroot.core.status import SolveStatus
from globroot.logging import get_logger
from globroot.solvers.jacobian import ForwardDifferenceJacobian
from globroot.solvers.line_search import BacktrackingLineSearch
from globroot.solvers.merit import MeritFunction
from globroot.utils.norms import max_abs, relative_change, scaled_gradient

logger = get_logger(__name__)

Callback = Callable[[int, NDArray, float], Optional[bool]]


class NewtonSolver:
    """
    Newton's method with a finite-difference Jacobian and a backtracking
    line search on f = 0.5*|F|^2.

    Each outer iteration costs n + 1 evaluations of F plus one per
    line-search trial, and one dense linear solve.
    """

    def __init__(
        self,
        options: Optional[NewtonOptions] = None,
        linear_solver: Optional[LinearSolver] = None,
    ):
        """
        Args:
            options: Tolerances and limits (defaults if not provided)
            linear_solver: Dense solver for the Newton system (LU if not provided)
        """
        self.options = options if options is not None else NewtonOptions()
        self.linear_solver = linear_solver if linear_solver is not None else LUSolver()

    def solve(
        self,
        x0: Any,
        func: ProblemLike,
        callback: Optional[Callback] = None,
    ) -> RootResult:
        """
        Find x with F(x) = 0 starting from x0.

        Args:
            x0: Initial guess of length n. A float ndarray or a list is
                overwritten with the final estimate.
            func: Object with evaluate(x) or a plain callable returning F(x)
            callback: Called as callback(iteration, x, f) after every round
                that did not stop; returning True cancels the solve.

        Returns:
            RootResult; inspect ``status`` (or ``check``) before trusting x

        Raises:
            SingularJacobianError: If the Newton system cannot be solved
            InvalidDescentDirectionError: If the Newton step is not a descent
                direction for the merit function
            MaxIterationsExceededError: If no stopping test is met in time
        """
        opts = self.options
        x = np.array(x0, dtype=float).reshape(-1)
        n = x.shape[0]
        if n == 0:
            raise ValueError("Initial guess must contain at least one value")

        problem = as_vector_function(func)
        merit = MeritFunction(problem, n)
        jacobian = ForwardDifferenceJacobian(problem, eps=opts.fd_step)
        line_search = BacktrackingLineSearch(
            merit, alpha=opts.alpha, min_step_tol=opts.min_step_tol
        )

        def finish(status: SolveStatus, iterations: int) -> RootResult:
            return RootResult(
                x=x.copy(),
                fvec=fvec.copy(),
                f=f,
                status=status,
                iterations=iterations,
                nfev=merit.nfev + jacobian.nfev,
                njev=jacobian.njev,
                history=history,
            )

        try:
            f, fvec = merit.evaluate(x)
            history = [f]
            if max_abs(fvec) < 0.01 * opts.tolf:
                logger.info("Initial guess already satisfies max|F| < %.1e", 0.01 * opts.tolf)
                return finish(SolveStatus.CONVERGED, 0)

            step_max = opts.step_max_scale * max(float(np.linalg.norm(x)), float(n))

            for its in range(1, opts.max_iterations + 1):
                fjac = jacobian.estimate(x, fvec)
                g = fjac.T @ fvec
                x_old, f_old, fvec_old = x, f, fvec

                p = -fvec
                try:
                    self.linear_solver.solve(fjac, p)
                except np.linalg.LinAlgError as exc:
                    raise SingularJacobianError(
                        f"Newton system could not be solved: {exc}",
                        iteration=its,
                        residual_norm=max_abs(fvec_old),
                    ) from exc

                try:
                    step = line_search.search(x_old, f_old, fvec_old, g, p, step_max)
                except InvalidDescentDirectionError as exc:
                    raise InvalidDescentDirectionError(
                        str(exc), iteration=its, residual_norm=max_abs(fvec_old)
                    ) from exc
                x, f, fvec = step.x, step.f, step.fvec
                if not step.check:
                    history.append(f)

                test = max_abs(fvec)
                logger.debug(
                    "iter %d: f=%.6e max|F|=%.3e lambda=%.3e",
                    its, f, test, step.step_scale,
                )
                if test < opts.tolf:
                    logger.info("Converged after %d iterations (max|F|=%.3e)", its, test)
                    return finish(SolveStatus.CONVERGED, its)

                if step.check:
                    if scaled_gradient(g, x, f) < opts.tolmin:
                        logger.warning(
                            "Stalled at a local minimum of |F| (max|F|=%.3e)", test
                        )
                        return finish(SolveStatus.STALLED_MINIMUM, its)
                    logger.warning(
                        "Line search made no progress (max|F|=%.3e); "
                        "retry from another initial guess", test
                    )
                    return finish(SolveStatus.LINE_SEARCH_STUCK, its)

                if relative_change(x, x_old) < opts.tolx:
                    logger.info("x stopped changing after %d iterations", its)
                    return finish(SolveStatus.NO_PROGRESS, its)

                if callback is not None and callback(its, x.copy(), f):
                    logger.info("Cancelled by callback after %d iterations", its)
                    return finish(SolveStatus.CANCELLED, its)

            raise MaxIterationsExceededError(
                "Maximum iterations exceeded without convergence",
                iteration=opts.max_iterations,
                residual_norm=max_abs(fvec),
            )
        finally:
            _write_back(x0, x)


def _write_back(target: Any, x: NDArray) -> None:
    """Copy the final estimate into the caller's guess when it is mutable."""
    if isinstance(target, np.ndarray):
        if (
            np.issubdtype(target.dtype, np.floating)
            and target.flags.writeable
            and target.size == x.size
        ):
            target[...] = x.reshape(target.shape)
    elif isinstance(target, list) and len(target) == x.size:
        target[:] = x.tolist()


def newt(
    x: Any,
    func: ProblemLike,
    options: Optional[NewtonOptions] = None,
    linear_solver: Optional[LinearSolver] = None,
    callback: Optional[Callback] = None,
) -> RootResult:
    """
    Solve F(x) = 0 from the initial guess x.

    Example:
        >>> result = newt([6.0], lambda x: [x[0] ** 2 - 2.0])
        >>> round(result.x[0], 8)
        1.41421356

    Args:
        x: Initial guess, overwritten with the root when mutable
        func: Object with evaluate(x) or a plain callable returning F(x)
        options: Tolerances and limits
        linear_solver: Dense solver for the Newton system
        callback: Cooperative cancellation hook, see NewtonSolver.solve

    Returns:
        RootResult
    """
    solver = NewtonSolver(options=options, linear_solver=linear_solver)
    return solver.solve(x, func, callback=callback)
