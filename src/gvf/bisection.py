from enum import Enum
import numpy as np

MAX_ITERATIONS = 200

class Convergence(Enum):
    """Stopping rules understood by bisect()."""
    ABSOLUTE = 'absolute'    # next midpoint moves by less than tolerance
    RELATIVE = 'relative'    # next midpoint moves by less than tolerance * current trial
    RESIDUAL = 'residual'    # |residual(trial)| below tolerance

class NonConvergenceError(RuntimeError):
    """Raised when a bisection search exceeds its iteration cap."""
    def __init__(self, lower: float, upper: float, iterations: int):
        self.lower, self.upper, self.iterations = lower, upper, iterations
        super().__init__(
            f"Bisection did not converge in {iterations} iterations (bracket [{lower:.6g}, {upper:.6g}])."
        )

def bisect(residual,
           lower: float,
           upper: float,
           tolerance: float,
           convergence: Convergence = Convergence.ABSOLUTE,
           decreasing: bool = False,
           max_iterations: int = MAX_ITERATIONS) -> float:
    """
    Halving search for a root of a monotonic residual function.

    The trial value is always the midpoint of the current bracket. For an
    increasing residual, a negative value raises the lower bound and any
    other value (zero or NaN included) lowers the upper bound. For a
    decreasing residual the roles are swapped.

    Parameters
    ----------
    residual : callable
        f(x) -> float.
    lower, upper : float
        Initial bracket.
    tolerance : float
        Tolerance, interpreted according to `convergence`.
    convergence : Convergence
        ABSOLUTE and RESIDUAL return the last trial value,
        RELATIVE returns the next midpoint.
    decreasing : bool
        Whether the residual decreases across the bracket.
    max_iterations : int
        Iteration cap.

    Returns
    -------
    float
        The converged value.

    Raises
    ------
    NonConvergenceError
        If the cap is reached first.

    """
    x = 0.5 * (lower + upper)

    for _ in range(max_iterations):
        r = residual(x)

        if (r < 0) != decreasing:
            lower = x
        else:
            upper = x

        mid = 0.5 * (lower + upper)

        if convergence is Convergence.ABSOLUTE:
            if np.abs(mid - x) < tolerance:
                return x

        elif convergence is Convergence.RELATIVE:
            if np.abs((mid - x) / x) < tolerance:
                return mid

        elif convergence is Convergence.RESIDUAL:
            if np.abs(r) < tolerance:
                return x

        else:
            raise ValueError("Invalid convergence criterion.")

        x = mid

    raise NonConvergenceError(lower=lower, upper=upper, iterations=max_iterations)
