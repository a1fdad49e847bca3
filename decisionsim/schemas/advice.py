"""Pydantic schemas for risk assessments and recommendations."""

from typing import List, Literal

from pydantic import BaseModel, Field


class RiskFactor(BaseModel):
    name: str
    value: str


class RiskAssessment(BaseModel):
    level: Literal["low", "medium", "high"]
    score: int = Field(..., ge=0, le=10)
    factors: List[RiskFactor]


class Recommendation(BaseModel):
    type: Literal["warning", "success", "info"]
    title: str
    description: str
    priority: Literal["low", "medium", "high"]
