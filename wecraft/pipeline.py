"""
Scoring pipeline.

Runs the agents in order for one engineer: researcher (pattern derivation),
analyst (trust, impact, compatibility; mutually independent), then architect
(recruiter match and explanation, both fed the finished analyst results).
Nothing is shared between runs; the same inputs always give the same bundle.
"""
import logging
from datetime import datetime
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict

from .agents.analyst import compute_compatibility_score, compute_impact_score, compute_trust_score
from .agents.architect import compute_recruiter_match_score, generate_match_explanation
from .agents.researcher import build_contribution_pattern
from .models.config import ConfigOverride
from .models.github import ContributionPattern, EngineerActivity, GitHubAccount, GitHubActivity
from .models.roles import RoleQuery
from .models.scores import (
    CompatibilityScoreResult,
    ImpactScoreResult,
    MatchExplanation,
    RecruiterMatchScoreResult,
    TrustScoreResult,
)

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "backend"


class EngineerScoreBundle(BaseModel):
    """Every result of one scoring run."""
    model_config = ConfigDict(frozen=True)

    contribution_pattern: ContributionPattern
    trust: TrustScoreResult
    impact: ImpactScoreResult
    compatibility: CompatibilityScoreResult
    match: RecruiterMatchScoreResult
    explanation: MatchExplanation


def score_engineer(
    account: GitHubAccount,
    activity: GitHubActivity,
    engineer_activity: Optional[EngineerActivity] = None,
    role_query: Union[RoleQuery, str, Dict, None] = None,
    contribution_pattern: Optional[ContributionPattern] = None,
    trust_config: ConfigOverride = None,
    impact_config: ConfigOverride = None,
    match_config: ConfigOverride = None,
    as_of: Optional[datetime] = None,
) -> EngineerScoreBundle:
    """
    Score one engineer end to end.

    Args:
        account: Profile snapshot
        activity: Canonical GitHub activity
        engineer_activity: Role-analysis view of the activity. Empty if omitted.
        role_query: Role to score compatibility against. Defaults to backend.
        contribution_pattern: Precomputed pattern; derived from activity if omitted
        trust_config: Optional TrustScoreConfig override
        impact_config: Optional ImpactScoreConfig override
        match_config: Optional RecruiterMatchScoreConfig override
        as_of: Reference time for trust and impact. Defaults to the snapshot
            time of the account, then of the activity, so both calculators
            share one run timestamp.

    Returns:
        EngineerScoreBundle

    Raises:
        UnknownRoleError: If the role is not supported
        InvalidConfigError: If a config override fails validation
    """
    if contribution_pattern is None:
        contribution_pattern = build_contribution_pattern(activity, account)
    if engineer_activity is None:
        engineer_activity = EngineerActivity()
    if role_query is None:
        role_query = RoleQuery(role=DEFAULT_ROLE)
    if as_of is None:
        as_of = account.fetched_at or activity.fetched_at

    trust = compute_trust_score(account, contribution_pattern, config=trust_config, as_of=as_of)
    impact = compute_impact_score(activity, config=impact_config, as_of=as_of)
    compatibility = compute_compatibility_score(engineer_activity, role_query)

    match = compute_recruiter_match_score(trust, compatibility, impact, config=match_config)
    explanation = generate_match_explanation(trust, impact, compatibility)

    logger.info(
        "Scored engineer: trust=%.1f impact=%.1f compatibility=%.1f match=%.1f",
        trust.total_score, impact.total_score, compatibility.total_score, match.total_match_score,
    )

    return EngineerScoreBundle(
        contribution_pattern=contribution_pattern,
        trust=trust,
        impact=impact,
        compatibility=compatibility,
        match=match,
        explanation=explanation,
    )
