from __future__ import annotations

from datetime import date
from typing import Optional

import numpy as np

from decisionsim.core.projection import DEFAULT_HORIZON_MONTHS, project
from decisionsim.core.returns import make_rng
from decisionsim.models import DecisionBase, UserProfile
from decisionsim.schemas.projection import ComparisonDifference, ComparisonResult


def compare(
    decision_a: DecisionBase,
    decision_b: DecisionBase,
    profile: UserProfile,
    months: int = DEFAULT_HORIZON_MONTHS,
    rng: Optional[np.random.Generator] = None,
    start_date: Optional[date] = None,
) -> ComparisonResult:
    """
    Project both decisions against the same profile and horizon.

    The runs share nothing but `rng`, which they draw from in turn, so any
    investment noise in A is independent of the noise in B.
    """
    rng = rng if rng is not None else make_rng()
    start = start_date or date.today()

    result_a = project(decision_a, profile, months, rng=rng, start_date=start)
    result_b = project(decision_b, profile, months, rng=rng, start_date=start)

    a, b = result_a.summary, result_b.summary
    return ComparisonResult(
        resultA=result_a,
        resultB=result_b,
        difference=ComparisonDifference(
            finalBalance=a.finalBalance - b.finalBalance,
            totalCost=a.totalCost - b.totalCost,
            netChange=a.netChange - b.netChange,
        ),
    )


__all__ = ["compare"]
