"""Data contracts for projection results."""

import datetime as dt
from typing import List

from pydantic import BaseModel, Field


class MonthRecord(BaseModel):
    """One simulated month. Balances and running totals are whole currency units."""

    month: int = Field(..., ge=0)
    date: dt.date
    balance: float
    income: float
    expenses: float = Field(..., description="Base living expenses plus the decision cost.")
    decisionCost: float
    investmentReturn: float
    savingsRate: float = Field(..., description="(income - expenses) / income, in percent.")
    cumulativeIncome: float
    cumulativeExpenses: float
    cumulativeInvestmentReturn: float


class ProjectionSummary(BaseModel):
    finalBalance: float
    totalCost: float
    totalIncome: float
    totalInvestmentReturn: float
    netChange: float
    avgMonthlySavings: float


class ProjectionResult(BaseModel):
    """Month-by-month balance series plus its summary."""

    monthlyData: List[MonthRecord]
    summary: ProjectionSummary


class ComparisonDifference(BaseModel):
    """Summary deltas, always A minus B."""

    finalBalance: float
    totalCost: float
    netChange: float


class ComparisonResult(BaseModel):
    resultA: ProjectionResult
    resultB: ProjectionResult
    difference: ComparisonDifference
