"""Static risk scoring of a decision against the saver's cushion."""

from __future__ import annotations

import logging
import math
from typing import Dict, Optional, Tuple

from decisionsim.core.projection import round_half_up
from decisionsim.models import DecisionBase, InvestmentDecision, UserProfile
from decisionsim.schemas.advice import RiskAssessment, RiskFactor

logger = logging.getLogger(__name__)

DECISION_TYPE_LABELS: Dict[str, str] = {
    "car": "Car purchase",
    "investment": "Investment",
    "travel": "Travel",
    "property": "Property purchase",
    "education": "Education",
    "business": "Business venture",
}

MAX_SCORE = 10


def decision_type_label(decision_type: str) -> str:
    return DECISION_TYPE_LABELS.get(decision_type, decision_type)


def _data_field(decision: DecisionBase, name: str) -> Optional[float]:
    data = decision.data
    if isinstance(data, dict):
        # free-form data of an unrecognised type; only plain numbers count
        value = data.get(name)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            return None
        return value
    return getattr(data, name, None) if data is not None else None


def cost_ratio(decision: DecisionBase, profile: UserProfile) -> Optional[float]:
    """
    Price as a percentage of current savings.

    0.0 when the decision has no price. None when there is a price but no
    savings at all: the ratio is unbounded.
    """
    price = _data_field(decision, "price")
    if not price:
        return 0.0
    if profile.currentSavings == 0:
        logger.debug("cost ratio undefined for %r: no savings", decision.name)
        return None
    return price / profile.currentSavings * 100


def _base_level(ratio: Optional[float]) -> Tuple[str, int]:
    if ratio is None or ratio > 80:
        return "high", 8
    if ratio > 50:
        return "medium", 5
    return "low", 2


def assess(decision: DecisionBase, profile: UserProfile) -> RiskAssessment:
    """
    Score a decision 0..10 without simulating it.

    The level comes from the cost ratio alone (>80 high, >50 medium, else low).
    Later score adjustments (+3 for a high-risk investment, +2 for a loan over
    60 months) raise the score but leave the level as set by the ratio.
    """
    ratio = cost_ratio(decision, profile)
    level, score = _base_level(ratio)

    if isinstance(decision, InvestmentDecision) and decision.data.riskLevel == "high":
        score += 3

    loan_months = _data_field(decision, "loanMonths")
    if loan_months and loan_months > 60:
        score += 2

    # TODO: re-derive level from the adjusted score once product confirms that
    # a capped score of 10 should never report "low".
    score = min(MAX_SCORE, score)

    commitment = loan_months or _data_field(decision, "duration") or 0
    factors = [
        RiskFactor(
            name="Cost to savings ratio",
            value="n/a" if ratio is None else f"{int(round_half_up(ratio))}%",
        ),
        RiskFactor(name="Commitment duration", value=f"{int(commitment)} months"),
        RiskFactor(name="Decision type", value=decision_type_label(decision.type)),
    ]
    return RiskAssessment(level=level, score=score, factors=factors)


__all__ = [
    "DECISION_TYPE_LABELS",
    "MAX_SCORE",
    "decision_type_label",
    "cost_ratio",
    "assess",
]
