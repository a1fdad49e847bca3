"""Break-even estimate for business decisions."""

from __future__ import annotations

import math
from typing import Optional

from decisionsim.models import BusinessDecision, DecisionBase


def break_even_month(decision: DecisionBase) -> Optional[int]:
    """Months of profit needed to earn back the initial investment.

    None for non-business decisions and for businesses that never turn a
    monthly profit.
    """
    if not isinstance(decision, BusinessDecision):
        return None

    data = decision.data
    monthly_profit = data.monthlyRevenue - data.monthlyExpenses
    if monthly_profit <= 0:
        return None
    return math.ceil(data.initialInvestment / monthly_profit)


__all__ = ["break_even_month"]
