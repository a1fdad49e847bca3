"""Decision cost model: what a decision takes out of the budget in a given month."""

from __future__ import annotations

import logging

from decisionsim.models import (
    BusinessDecision,
    CarDecision,
    DecisionBase,
    EducationDecision,
    InstallmentData,
    InvestmentDecision,
    LoanData,
    PropertyDecision,
    TravelDecision,
)

logger = logging.getLogger(__name__)


def amortized_payment(principal: float, annual_rate_pct: float, months: int) -> float:
    """
    Constant monthly payment that repays `principal` over `months` at a fixed rate:

        P = L * r(1+r)^n / ((1+r)^n - 1),   r = annual_rate_pct / 100 / 12

    Zero-rate loans are repaid in equal slices (L / n); a zero-length loan is due at once.
    """
    if principal <= 0:
        return 0.0
    if months <= 0:
        logger.debug("zero-length loan; whole principal %.2f due immediately", principal)
        return float(principal)

    r = annual_rate_pct / 100 / 12
    if r == 0:
        return principal / months

    growth = (1 + r) ** months
    return principal * (r * growth) / (growth - 1)


def _loan_instalment(data: LoanData, month: int) -> float:
    if 1 <= month <= data.loanMonths:
        return amortized_payment(data.financed, data.interestRate, data.loanMonths)
    return 0.0


def _installment_cost(data: InstallmentData, month: int) -> float:
    if data.pays_in_installments:
        return data.monthlyPayment if month < data.duration else 0.0
    return data.totalCost if month == 0 else 0.0


def car_cost(decision: CarDecision, month: int) -> float:
    data = decision.data
    # month 0 is only the down payment; upkeep starts at month 1
    if month == 0:
        return data.downPayment
    insurance = data.insurance if month % 12 == 0 else 0.0
    return _loan_instalment(data, month) + data.monthlyMaintenance + insurance


def property_cost(decision: PropertyDecision, month: int) -> float:
    data = decision.data
    if month == 0:
        return data.downPayment
    return _loan_instalment(data, month) + data.monthlyFees


def investment_cost(decision: InvestmentDecision, month: int) -> float:
    data = decision.data
    if month == 0:
        return data.principal
    return data.monthlyContribution


def travel_cost(decision: TravelDecision, month: int) -> float:
    return _installment_cost(decision.data, month)


def education_cost(decision: EducationDecision, month: int) -> float:
    return _installment_cost(decision.data, month)


def business_cost(decision: BusinessDecision, month: int) -> float:
    # revenue is not netted off here; see break_even_month() for profitability
    data = decision.data
    if month == 0:
        return data.initialInvestment
    return data.monthlyExpenses


def decision_cost(decision: DecisionBase, month: int) -> float:
    """
    Cash the decision costs in `month` (0-indexed). Pure function of its inputs.

    Decisions of a type outside the known six cost nothing.
    """
    if isinstance(decision, CarDecision):
        return car_cost(decision, month)
    elif isinstance(decision, InvestmentDecision):
        return investment_cost(decision, month)
    elif isinstance(decision, TravelDecision):
        return travel_cost(decision, month)
    elif isinstance(decision, PropertyDecision):
        return property_cost(decision, month)
    elif isinstance(decision, EducationDecision):
        return education_cost(decision, month)
    elif isinstance(decision, BusinessDecision):
        return business_cost(decision, month)
    return 0.0


__all__ = [
    "amortized_payment",
    "car_cost",
    "property_cost",
    "investment_cost",
    "travel_cost",
    "education_cost",
    "business_cost",
    "decision_cost",
]
