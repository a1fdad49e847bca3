"""Rule-based advice drawn from a finished projection."""

from __future__ import annotations

from typing import List

from decisionsim.core.projection import round_half_up
from decisionsim.models import CarDecision, DecisionBase, InvestmentDecision, UserProfile
from decisionsim.schemas.advice import Recommendation
from decisionsim.schemas.projection import ProjectionResult

LOW_SAVINGS_RATE_PCT = 10.0
DEPLETION_SHARE = 0.5
LONG_CAR_LOAN_MONTHS = 48


def recommend(
    decision: DecisionBase,
    profile: UserProfile,
    projection: ProjectionResult,
) -> List[Recommendation]:
    """
    Evaluate every rule in a fixed order and return all that fire, in that order:

      1) average monthly savings rate under 10%      -> warning
      2) final balance under half of current savings -> warning
      3) investment with a positive total return     -> success
      4) car loan longer than 48 months              -> info
    """
    recommendations: List[Recommendation] = []
    months = projection.monthlyData
    summary = projection.summary

    avg_rate = sum(m.savingsRate for m in months) / len(months) if months else 0.0
    if avg_rate < LOW_SAVINGS_RATE_PCT:
        recommendations.append(
            Recommendation(
                type="warning",
                title="Low savings rate",
                description=(
                    "This decision could sharply reduce how much you are able to save. "
                    "Consider postponing it or cutting its costs."
                ),
                priority="high",
            )
        )

    if summary.finalBalance < profile.currentSavings * DEPLETION_SHARE:
        recommendations.append(
            Recommendation(
                type="warning",
                title="Large savings depletion",
                description=(
                    "This decision would use up more than half of your savings. "
                    "Make sure you have an emergency plan in place."
                ),
                priority="high",
            )
        )

    if isinstance(decision, InvestmentDecision) and summary.totalInvestmentReturn > 0:
        amount = int(round_half_up(summary.totalInvestmentReturn))
        recommendations.append(
            Recommendation(
                type="success",
                title="Good investment opportunity",
                description=f"The expected return on this investment is {amount:,}.",
                priority="medium",
            )
        )

    if isinstance(decision, CarDecision) and decision.data.loanMonths > LONG_CAR_LOAN_MONTHS:
        recommendations.append(
            Recommendation(
                type="info",
                title="Long loan term",
                description=(
                    "Try shortening the loan to save on interest. "
                    "A higher monthly payment could save you a lot."
                ),
                priority="low",
            )
        )

    return recommendations


__all__ = ["recommend"]
