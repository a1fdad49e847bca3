"""Request and response bodies for the JSON API."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from decisionsim.models import Decision, UserProfile
from decisionsim.schemas.advice import Recommendation, RiskAssessment
from decisionsim.schemas.projection import ProjectionResult


class HealthResponse(BaseModel):
    status: str


class ProjectionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    decision: Decision
    profile: UserProfile
    months: Optional[int] = Field(default=None, ge=1, description="Horizon; server default when omitted.")


class RiskRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    decision: Decision
    profile: UserProfile


class CompareRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    decisionA: Decision
    decisionB: Decision
    profile: UserProfile
    months: Optional[int] = Field(default=None, ge=1)


class DecisionUpdate(BaseModel):
    """Partial edit of a stored decision. Only the keys sent are applied."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, min_length=1)
    type: Optional[str] = None
    data: Optional[Dict[str, Any]] = None


class SavedComparisonRequest(BaseModel):
    """Compare two stored decisions against the stored profile."""

    model_config = ConfigDict(extra="forbid")

    decisionAId: str
    decisionBId: str
    months: Optional[int] = Field(default=None, ge=1)


class AnalysisResponse(BaseModel):
    impact: ProjectionResult
    risk: RiskAssessment
    recommendations: List[Recommendation]
    breakEvenMonth: Optional[int] = None


class ProfileResponse(BaseModel):
    profile: UserProfile
    warnings: List[str] = []
