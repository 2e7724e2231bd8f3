"""IRR by Newton-Raphson using scipy.

Pure functions. No I/O.
"""

import logging
import math
import warnings
from decimal import Decimal, ROUND_HALF_UP

from scipy.optimize import newton

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")

IRR_INITIAL_GUESS = 0.10
IRR_TOLERANCE = 0.0001
IRR_MAX_ITERATIONS = 100
# Rates outside [-100%, 1000%] are treated as divergence
IRR_LOWER_BOUND = -1.0
IRR_UPPER_BOUND = 10.0


def compute_irr(cash_flows: list[Decimal]) -> Decimal:
    """IRR of a vector of annual cash flows, in %.

    cash_flows[0] is the (negative) equity invested, cash_flows[-1]
    includes exit proceeds. Returns 0 when the iteration does not
    converge, leaves the bounds, or overflows.
    """
    if len(cash_flows) < 2:
        return Decimal("0")

    cf = [float(c) for c in cash_flows]

    def npv(rate: float) -> float:
        return sum(c / (1 + rate) ** t for t, c in enumerate(cf))

    def npv_prime(rate: float) -> float:
        return sum(-t * c / (1 + rate) ** (t + 1) for t, c in enumerate(cf) if t)

    try:
        # Failure is reported through the logger below, not as a RuntimeWarning
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", RuntimeWarning)
            rate, info = newton(
                npv,
                IRR_INITIAL_GUESS,
                fprime=npv_prime,
                tol=IRR_TOLERANCE,
                maxiter=IRR_MAX_ITERATIONS,
                full_output=True,
                disp=False,
            )
    except (OverflowError, ZeroDivisionError) as e:
        logger.warning("IRR iteration failed numerically, using 0: %s", e)
        return Decimal("0")

    rate = float(rate)
    if not info.converged or not math.isfinite(rate):
        logger.warning("IRR did not converge in %d iterations, using 0", IRR_MAX_ITERATIONS)
        return Decimal("0")
    if not IRR_LOWER_BOUND <= rate <= IRR_UPPER_BOUND:
        logger.warning("IRR %.4f outside [%s, %s], using 0", rate, IRR_LOWER_BOUND, IRR_UPPER_BOUND)
        return Decimal("0")

    return (Decimal(str(rate)) * 100).quantize(TWO_PLACES, ROUND_HALF_UP)
