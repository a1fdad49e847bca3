from __future__ import annotations

import logging
import math
from datetime import date
from typing import List, Optional

import numpy as np
from dateutil.relativedelta import relativedelta

from decisionsim.core.costs import decision_cost
from decisionsim.core.returns import investment_return, make_rng
from decisionsim.models import DecisionBase, UserProfile
from decisionsim.schemas.projection import MonthRecord, ProjectionResult, ProjectionSummary

logger = logging.getLogger(__name__)

DEFAULT_HORIZON_MONTHS = 60


class ProjectionInputError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from the floor (2.5 -> 3), unlike round()'s banker's rounding."""
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def savings_rate(income: float, expenses: float) -> float:
    """Share of income left after expenses, in percent. Zero income gives 0.0."""
    if income == 0:
        return 0.0
    return (income - expenses) / income * 100


def project(
    decision: DecisionBase,
    profile: UserProfile,
    months: int = DEFAULT_HORIZON_MONTHS,
    rng: Optional[np.random.Generator] = None,
    start_date: Optional[date] = None,
) -> ProjectionResult:
    """
    Simulate months 0..months (inclusive) of living with `decision`.

    Order of operations (per month):
      1) income = profile.monthlyIncome (flat, no raises).
      2) expenses = profile.monthlyExpenses + decision cost for the month.
      3) investment return on the balance carried in from last month.
      4) balance += income - expenses + return.

    Month 0 already applies that month's flows, so balance[0] is not the
    starting savings. Records carry display-rounded values; the running
    totals and the summary are computed at full precision.
    """
    if months < 1:
        raise ProjectionInputError([f"months must be at least 1, got {months}"])

    rng = rng if rng is not None else make_rng()
    start = start_date or date.today()

    balance = float(profile.currentSavings)
    total_income = 0.0
    total_expenses = 0.0
    total_return = 0.0

    records: List[MonthRecord] = []
    for month in range(months + 1):
        income = profile.monthlyIncome
        cost = decision_cost(decision, month)
        expenses = profile.monthlyExpenses + cost
        gain = investment_return(decision, month, balance, rng)

        balance += income - expenses + gain
        total_income += income
        total_expenses += expenses
        total_return += gain

        records.append(
            MonthRecord(
                month=month,
                date=start + relativedelta(months=month),
                balance=round_half_up(balance),
                income=round_half_up(income, 2),
                expenses=round_half_up(expenses, 2),
                decisionCost=round_half_up(cost, 2),
                investmentReturn=round_half_up(gain),
                savingsRate=round_half_up(savings_rate(income, expenses), 1),
                cumulativeIncome=round_half_up(total_income),
                cumulativeExpenses=round_half_up(total_expenses),
                cumulativeInvestmentReturn=round_half_up(total_return),
            )
        )

    net_change = balance - profile.currentSavings
    summary = ProjectionSummary(
        finalBalance=round_half_up(balance, 2),
        totalCost=round_half_up(total_expenses, 2),
        totalIncome=round_half_up(total_income, 2),
        totalInvestmentReturn=round_half_up(total_return, 2),
        netChange=round_half_up(net_change, 2),
        # averaged over the requested horizon, not the months+1 samples
        avgMonthlySavings=round_half_up(net_change / months, 2),
    )

    logger.debug(
        "projected %s decision %r over %d months: final balance %.2f",
        decision.type,
        decision.name,
        months,
        summary.finalBalance,
    )
    return ProjectionResult(monthlyData=records, summary=summary)


__all__ = [
    "DEFAULT_HORIZON_MONTHS",
    "ProjectionInputError",
    "round_half_up",
    "savings_rate",
    "project",
]
