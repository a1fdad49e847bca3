from __future__ import annotations

from datetime import date

from decisionsim.core.projection import project, round_half_up
from decisionsim.core.recommendations import recommend
from decisionsim.core.returns import make_rng
from decisionsim.models import UserProfile, parse_decision
from decisionsim.schemas.projection import MonthRecord, ProjectionResult, ProjectionSummary


def fake_projection(savings_rates, final_balance, total_return=0.0) -> ProjectionResult:
    records = [
        MonthRecord(
            month=i,
            date=date(2024, 1, 1),
            balance=final_balance,
            income=1000,
            expenses=1000,
            decisionCost=0,
            investmentReturn=0,
            savingsRate=rate,
            cumulativeIncome=0,
            cumulativeExpenses=0,
            cumulativeInvestmentReturn=0,
        )
        for i, rate in enumerate(savings_rates)
    ]
    return ProjectionResult(
        monthlyData=records,
        summary=ProjectionSummary(
            finalBalance=final_balance,
            totalCost=0,
            totalIncome=0,
            totalInvestmentReturn=total_return,
            netChange=0,
            avgMonthlySavings=0,
        ),
    )


PROFILE = UserProfile(currentSavings=100000, monthlyIncome=10000, monthlyExpenses=9500)


def test_low_savings_warning_precedes_investment_success():
    decision = parse_decision(
        {
            "name": "Fund",
            "type": "investment",
            "data": {"initialAmount": 5000, "monthlyContribution": 200, "annualReturn": 9, "riskLevel": "medium"},
        }
    )
    impact = project(decision, PROFILE, rng=make_rng(5), start_date=date(2024, 1, 1))
    recommendations = recommend(decision, PROFILE, impact)

    titles = [r.title for r in recommendations]
    assert titles == ["Low savings rate", "Good investment opportunity"]
    assert recommendations[0].type == "warning"
    assert recommendations[0].priority == "high"
    assert recommendations[1].type == "success"
    amount = int(round_half_up(impact.summary.totalInvestmentReturn))
    assert f"{amount:,}" in recommendations[1].description


def test_savings_rate_threshold_uses_average_over_all_months():
    decision = parse_decision({"name": "Trip", "type": "travel", "data": {"totalCost": 0}})

    # mean of [0, 20] is exactly 10: not low
    assert recommend(decision, PROFILE, fake_projection([0, 20], 200000)) == []
    titles = [r.title for r in recommend(decision, PROFILE, fake_projection([0, 19.8], 200000))]
    assert titles == ["Low savings rate"]


def test_depletion_warning_below_half_of_savings():
    decision = parse_decision({"name": "Trip", "type": "travel", "data": {"totalCost": 0}})

    assert recommend(decision, PROFILE, fake_projection([50], 50000)) == []
    result = recommend(decision, PROFILE, fake_projection([50], 49999))
    assert [r.title for r in result] == ["Large savings depletion"]


def test_long_car_loan_note_and_rule_order():
    decision = parse_decision(
        {
            "name": "SUV",
            "type": "car",
            "data": {"price": 90000, "downPayment": 10000, "loanMonths": 60, "interestRate": 7},
        }
    )
    result = recommend(decision, PROFILE, fake_projection([5], 1000))

    assert [(r.type, r.title) for r in result] == [
        ("warning", "Low savings rate"),
        ("warning", "Large savings depletion"),
        ("info", "Long loan term"),
    ]
    assert result[-1].priority == "low"


def test_car_loan_of_exactly_48_months_is_fine():
    decision = parse_decision(
        {
            "name": "Hatch",
            "type": "car",
            "data": {"price": 20000, "downPayment": 0, "loanMonths": 48},
        }
    )
    assert recommend(decision, PROFILE, fake_projection([50], 200000)) == []


def test_negative_investment_return_gets_no_praise():
    decision = parse_decision(
        {"name": "Bad fund", "type": "investment", "data": {"initialAmount": 100, "annualReturn": -5}}
    )
    assert recommend(decision, PROFILE, fake_projection([50], 200000, total_return=-120.0)) == []
