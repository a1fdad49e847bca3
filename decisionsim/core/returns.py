"""Investment return model: noisy monthly growth for investment decisions."""

from __future__ import annotations

from typing import Dict, Optional

import numpy as np

from decisionsim.models import DecisionBase, InvestmentDecision

# amplitude of the multiplicative noise applied to the expected monthly return
VOLATILITY: Dict[str, float] = {
    "low": 0.05,
    "medium": 0.15,
    "high": 0.30,
}


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Build the generator used for return noise; None seeds from OS entropy."""
    return np.random.default_rng(seed)


def investment_return(
    decision: DecisionBase,
    month: int,
    current_balance: float,
    rng: np.random.Generator,
) -> float:
    """
    Return earned in `month` on `current_balance` (the balance before this month's flows).

    expected = balance * annualReturn / 100 / 12
    noise    = U[-0.5, 0.5) * volatility(riskLevel)
    result   = expected * (1 + noise)

    Non-investment decisions earn nothing and draw nothing from `rng`.
    """
    if not isinstance(decision, InvestmentDecision):
        return 0.0

    data = decision.data
    monthly_rate = data.annualReturn / 100 / 12
    noise = (rng.random() - 0.5) * VOLATILITY[data.riskLevel]
    return current_balance * monthly_rate * (1 + noise)


__all__ = ["VOLATILITY", "make_rng", "investment_return"]
