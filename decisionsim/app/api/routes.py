"""HTTP routes for the Flask API."""

import json
import logging
from http import HTTPStatus
from typing import Any, Dict, Optional

import numpy as np
from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from decisionsim.core.breakeven import break_even_month
from decisionsim.core.comparison import compare
from decisionsim.core.projection import ProjectionInputError, project
from decisionsim.core.recommendations import recommend
from decisionsim.core.returns import make_rng
from decisionsim.core.risk import assess
from decisionsim.domain.store import ProfileRequiredError, RecordNotFoundError, RecordStore
from decisionsim.models import DecisionBase, UserProfile, parse_decision, profile_warnings
from decisionsim.schemas.requests import (
    AnalysisResponse,
    CompareRequest,
    DecisionUpdate,
    HealthResponse,
    ProfileResponse,
    ProjectionRequest,
    RiskRequest,
    SavedComparisonRequest,
)

logger = logging.getLogger(__name__)

STORE_EXTENSION = "decisionsim.store"

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": json.loads(exc.json())}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(ProjectionInputError)
def _handle_projection_error(exc: ProjectionInputError):
    return jsonify({"error": exc.errors}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(RecordNotFoundError)
def _handle_not_found(exc: RecordNotFoundError):
    return jsonify({"error": exc.args[0]}), HTTPStatus.NOT_FOUND


@api_bp.errorhandler(ProfileRequiredError)
def _handle_missing_profile(exc: ProfileRequiredError):
    return jsonify({"error": str(exc)}), HTTPStatus.CONFLICT


def _store() -> RecordStore:
    return current_app.extensions[STORE_EXTENSION]


def _rng() -> np.random.Generator:
    return make_rng(current_app.config["RANDOM_SEED"])


def _horizon(months: Optional[int]) -> int:
    if months is None:
        return current_app.config["DEFAULT_HORIZON_MONTHS"]
    limit = current_app.config["MAX_HORIZON_MONTHS"]
    if months > limit:
        raise ProjectionInputError([f"months must be at most {limit}, got {months}"])
    return months


def _json_body() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


def _analyse(decision: DecisionBase, profile: UserProfile, months: int) -> AnalysisResponse:
    impact = project(decision, profile, months, rng=_rng())
    return AnalysisResponse(
        impact=impact,
        risk=assess(decision, profile),
        recommendations=recommend(decision, profile, impact),
        breakEvenMonth=break_even_month(decision),
    )


@api_bp.get("/health")
def health() -> Any:
    """Health-check endpoint."""
    return jsonify(HealthResponse(status="ok").model_dump())


# ---------- stateless simulation ----------


@api_bp.post("/projection")
def projection() -> Any:
    payload = ProjectionRequest.model_validate(_json_body())
    result = project(payload.decision, payload.profile, _horizon(payload.months), rng=_rng())
    return jsonify(result.model_dump(mode="json"))


@api_bp.post("/risk")
def risk() -> Any:
    payload = RiskRequest.model_validate(_json_body())
    return jsonify(assess(payload.decision, payload.profile).model_dump())


@api_bp.post("/analysis")
def analysis() -> Any:
    """Projection, risk, advice, and break-even for one unsaved decision."""
    payload = ProjectionRequest.model_validate(_json_body())
    result = _analyse(payload.decision, payload.profile, _horizon(payload.months))
    return jsonify(result.model_dump(mode="json"))


@api_bp.post("/compare")
def compare_decisions() -> Any:
    payload = CompareRequest.model_validate(_json_body())
    result = compare(
        payload.decisionA,
        payload.decisionB,
        payload.profile,
        _horizon(payload.months),
        rng=_rng(),
    )
    return jsonify(result.model_dump(mode="json"))


# ---------- stored records ----------


@api_bp.get("/profile")
def get_profile() -> Any:
    profile = _store().require_profile()
    return jsonify(ProfileResponse(profile=profile, warnings=profile_warnings(profile)).model_dump())


@api_bp.put("/profile")
def put_profile() -> Any:
    profile = _store().save_profile(UserProfile.model_validate(_json_body()))
    return jsonify(ProfileResponse(profile=profile, warnings=profile_warnings(profile)).model_dump())


@api_bp.get("/decisions")
def list_decisions() -> Any:
    return jsonify([record.model_dump() for record in _store().list_decisions()])


@api_bp.post("/decisions")
def save_decision() -> Any:
    """Save a decision and return it with its analysis against the stored profile."""
    store = _store()
    profile = store.require_profile()
    decision = parse_decision(_json_body())
    analysis_result = _analyse(decision, profile, _horizon(None))
    record = store.save_decision(decision)
    return (
        jsonify({"record": record.model_dump(), **analysis_result.model_dump(mode="json")}),
        HTTPStatus.CREATED,
    )


@api_bp.get("/decisions/<decision_id>")
def get_decision(decision_id: str) -> Any:
    return jsonify(_store().get_decision(decision_id).model_dump())


@api_bp.patch("/decisions/<decision_id>")
def update_decision(decision_id: str) -> Any:
    updates = DecisionUpdate.model_validate(_json_body())
    record = _store().update_decision(decision_id, updates.model_dump(exclude_unset=True))
    return jsonify(record.model_dump())


@api_bp.delete("/decisions/<decision_id>")
def delete_decision(decision_id: str) -> Any:
    if not _store().delete_decision(decision_id):
        raise RecordNotFoundError("decision", decision_id)
    return "", HTTPStatus.NO_CONTENT


@api_bp.get("/comparisons")
def list_comparisons() -> Any:
    return jsonify([record.model_dump() for record in _store().list_comparisons()])


@api_bp.post("/comparisons")
def save_comparison() -> Any:
    """Compare two stored decisions against the stored profile and keep the result."""
    store = _store()
    payload = SavedComparisonRequest.model_validate(_json_body())
    profile = store.require_profile()
    decision_a = store.get_decision(payload.decisionAId).to_decision()
    decision_b = store.get_decision(payload.decisionBId).to_decision()

    result = compare(decision_a, decision_b, profile, _horizon(payload.months), rng=_rng())
    record = store.save_comparison(
        {
            "decisionAId": payload.decisionAId,
            "decisionBId": payload.decisionBId,
            **result.model_dump(mode="json"),
        }
    )
    return jsonify(record.model_dump()), HTTPStatus.CREATED


@api_bp.delete("/data")
def clear_data() -> Any:
    _store().clear()
    return "", HTTPStatus.NO_CONTENT
