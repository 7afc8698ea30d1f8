"""
Score API endpoints.

Thin HTTP adapter over the scoring engine. The two match endpoints each
return a single view, so a recruiter client never receives the engineer
view and an engineer client never receives a match score.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, HTTPException

from ..agents.analyst import compute_compatibility_score, compute_impact_score, compute_trust_score
from ..agents.architect import compute_recruiter_match_score, generate_match_explanation
from ..agents.researcher import build_contribution_pattern
from ..config import settings
from ..exceptions import WecraftError
from ..models import (
    CompatibilityScoreResult,
    EngineerView,
    ImpactScoreResult,
    MatchExplanation,
    RecruiterView,
    RoleQuery,
    TrustScoreResult,
)
from ..models.requests import (
    CompatibilityScoreRequest,
    ExplanationRequest,
    ImpactScoreRequest,
    MatchScoreRequest,
    TrustScoreRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _reference_time(as_of: Optional[datetime], snapshot: Optional[datetime] = None) -> datetime:
    return as_of or snapshot or datetime.now(timezone.utc)


def _unprocessable(error: WecraftError) -> HTTPException:
    logger.warning("Rejected scoring request: %s", error)
    return HTTPException(status_code=422, detail=str(error))


@router.post("/trust", response_model=TrustScoreResult)
async def score_trust(request: TrustScoreRequest):
    """Compute the trust score, deriving the contribution pattern if needed."""
    pattern = request.contribution_pattern
    if pattern is None:
        pattern = build_contribution_pattern(request.activity, request.account)
    as_of = _reference_time(request.as_of, request.account.fetched_at)
    try:
        return compute_trust_score(request.account, pattern, config=request.config, as_of=as_of)
    except WecraftError as e:
        raise _unprocessable(e)


@router.post("/impact", response_model=ImpactScoreResult)
async def score_impact(request: ImpactScoreRequest):
    """Compute the impact score."""
    as_of = _reference_time(request.as_of, request.activity.fetched_at)
    try:
        return compute_impact_score(request.activity, config=request.config, as_of=as_of)
    except WecraftError as e:
        raise _unprocessable(e)


@router.post("/compatibility", response_model=CompatibilityScoreResult)
async def score_compatibility(request: CompatibilityScoreRequest):
    """Compute the role compatibility score."""
    role_query = request.role_query or RoleQuery(role=settings.default_role)
    try:
        return compute_compatibility_score(request.activity, role_query)
    except WecraftError as e:
        raise _unprocessable(e)


@router.post("/match/recruiter", response_model=RecruiterView)
async def recruiter_match(request: MatchScoreRequest):
    """Recruiter view of the match. Never includes the engineer view."""
    try:
        result = compute_recruiter_match_score(
            request.trust, request.compatibility, request.impact, config=request.config
        )
    except WecraftError as e:
        raise _unprocessable(e)
    return result.recruiter_view


@router.post("/match/engineer", response_model=EngineerView)
async def engineer_match(request: MatchScoreRequest):
    """Engineer view of the scores. Never includes a match score or recommendation."""
    try:
        result = compute_recruiter_match_score(
            request.trust, request.compatibility, request.impact, config=request.config
        )
    except WecraftError as e:
        raise _unprocessable(e)
    return result.engineer_view


@router.post("/explanation", response_model=MatchExplanation)
async def explain_match(request: ExplanationRequest):
    """Explain the three underlying scores."""
    return generate_match_explanation(request.trust, request.impact, request.compatibility)
