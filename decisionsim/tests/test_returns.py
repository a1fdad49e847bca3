from __future__ import annotations

from math import isclose

import numpy as np

from decisionsim.core.returns import VOLATILITY, investment_return, make_rng
from decisionsim.models import parse_decision


def investment(risk_level: str, annual_return: float = 12.0):
    return parse_decision(
        {
            "name": "Fund",
            "type": "investment",
            "data": {"initialAmount": 1000, "annualReturn": annual_return, "riskLevel": risk_level},
        }
    )


def test_non_investment_decisions_earn_nothing_and_leave_rng_untouched():
    decision = parse_decision({"name": "Trip", "type": "travel", "data": {"totalCost": 500}})
    rng = make_rng(1)
    reference = make_rng(1)

    assert investment_return(decision, 5, 100000.0, rng) == 0
    assert rng.random() == reference.random()


def test_return_stays_within_volatility_band():
    for level, volatility in VOLATILITY.items():
        decision = investment(level)
        rng = make_rng(3)
        expected = 100000.0 * 12.0 / 100 / 12  # 1000 per month before noise
        for month in range(200):
            value = investment_return(decision, month, 100000.0, rng)
            assert expected * (1 - volatility / 2) <= value < expected * (1 + volatility / 2)


def test_same_seed_same_draws():
    decision = investment("high")
    a = [investment_return(decision, m, 50000.0, make_rng(42)) for m in range(5)]
    b = [investment_return(decision, m, 50000.0, make_rng(42)) for m in range(5)]
    assert a == b


def test_noise_factor_matches_uniform_draw():
    decision = investment("medium")
    draw = np.random.default_rng(9).random()

    value = investment_return(decision, 0, 24000.0, make_rng(9))
    assert isclose(value, 24000.0 * 0.01 * (1 + (draw - 0.5) * 0.15), rel_tol=1e-12)


def test_zero_balance_or_rate_earns_nothing():
    assert investment_return(investment("high"), 1, 0.0, make_rng(0)) == 0
    assert investment_return(investment("low", annual_return=0), 1, 5000.0, make_rng(0)) == 0
