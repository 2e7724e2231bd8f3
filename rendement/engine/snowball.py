"""Debt snowball: month-by-month payoff of property loans.

Every unpaid loan accrues interest and receives its own required payment.
The surplus pool (extra cash, each property's positive net cashflow, and
the freed payment of paid-off properties that carry themselves) is spent
on one target loan at a time, in an order fixed at the start of the run;
leftover cascades to the next target within the same month.

Pure functions. No I/O.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from rendement.config import settings
from rendement.models.snowball import SnowballImpact, SnowballProperty, SnowballResult

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")

STRATEGIES = ("smallest", "highest_interest")


def _payoff_order(properties: list[SnowballProperty], strategy: str) -> list[int]:
    """Order in which loans receive surplus, fixed for the whole run.

    Ranked on opening balance (or rate), ties to the earlier input. A loan
    added later never reshuffles the order of the others.
    """
    if strategy == "highest_interest":
        return sorted(range(len(properties)), key=lambda i: (-properties[i].interest_rate, i))
    return sorted(range(len(properties)), key=lambda i: (max(ZERO, properties[i].debt), i))


def _pick_target(order: list[int], balances: list[Decimal]) -> int | None:
    return next((i for i in order if balances[i] > 0), None)


def simulate_snowball(
    properties: list[SnowballProperty],
    extra_monthly_cash: Decimal = ZERO,
    strategy: str = "smallest",
    max_months: int | None = None,
) -> list[SnowballResult]:
    """Months until each loan is paid off, in input order.

    Loans still open after `max_months` (default from settings) are
    reported with that month count and paid_off=False.
    """
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown snowball strategy: {strategy!r}")
    cap = max_months if max_months is not None else settings.snowball_max_months
    order = _payoff_order(properties, strategy)

    balances = [max(ZERO, p.debt) for p in properties]
    payoff_month: list[int | None] = [0 if b == 0 else None for b in balances]
    base_pool = max(ZERO, extra_monthly_cash) + sum(
        (p.net_cashflow for p in properties if p.net_cashflow > 0), ZERO
    )

    month = 0
    while month < cap and any(m is None for m in payoff_month):
        month += 1

        freed = sum(
            (p.monthly_payment for p, m in zip(properties, payoff_month)
             if m is not None and p.net_cashflow > 0),
            ZERO,
        )
        pool = base_pool + freed

        for i, p in enumerate(properties):
            if balances[i] <= 0:
                continue
            interest = (balances[i] * p.interest_rate / 100 / 12).quantize(TWO_PLACES, ROUND_HALF_UP)
            balances[i] += interest
            balances[i] -= min(max(ZERO, p.monthly_payment), balances[i])

        while pool > 0:
            target = _pick_target(order, balances)
            if target is None:
                break
            paid = min(pool, balances[target])
            balances[target] -= paid
            pool -= paid

        for i, b in enumerate(balances):
            if b <= 0 and payoff_month[i] is None:
                payoff_month[i] = month

    still_open = [p.id for p, m in zip(properties, payoff_month) if m is None]
    if still_open:
        logger.warning("Snowball stopped after %d months with open loans: %s", cap, still_open)

    return [
        SnowballResult(
            id=p.id,
            name=p.name,
            months_to_payoff=m if m is not None else cap,
            paid_off=m is not None,
        )
        for p, m in zip(properties, payoff_month)
    ]


def months_to_debt_free(results: list[SnowballResult]) -> int:
    return max((r.months_to_payoff for r in results), default=0)


def snowball_impact(
    existing: list[SnowballProperty],
    candidate: SnowballProperty,
    extra_monthly_cash: Decimal = ZERO,
    strategy: str = "smallest",
) -> SnowballImpact:
    """How buying `candidate` moves the date the whole portfolio is debt-free."""
    without = simulate_snowball(existing, extra_monthly_cash, strategy)
    with_candidate = simulate_snowball([*existing, candidate], extra_monthly_cash, strategy)
    months_without = months_to_debt_free(without)
    months_with = months_to_debt_free(with_candidate)
    return SnowballImpact(
        months_without=months_without,
        months_with=months_with,
        months_saved=months_without - months_with,
        candidate_is_profitable=candidate.net_cashflow > 0,
        results_without=without,
        results_with=with_candidate,
    )
