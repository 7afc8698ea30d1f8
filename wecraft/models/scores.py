"""
Score result records.

Each result is immutable and self-describing: a 0-100 total, named weighted
components with their own breakdowns, derived signals, and qualitative
flags. Results never reference the raw activity they were derived from.
"""
from datetime import datetime
from typing import Annotated, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field


Score = Annotated[float, Field(ge=0.0, le=100.0)]

CompatibilityLevel = Literal["high", "medium", "low", "poor"]
MatchLevel = Literal["excellent", "strong", "good", "fair", "poor"]
Recommendation = Literal["strongly-recommend", "recommend", "consider", "not-recommended"]
Severity = Literal["low", "medium", "high"]


class ResultModel(BaseModel):
    model_config = ConfigDict(frozen=True)


# ============================================================================
# Trust
# ============================================================================

class SpamDetection(ResultModel):
    excessive_daily_prs: bool = False
    identical_commit_messages: bool = False
    fork_farming: bool = False
    self_merge_farming: bool = False
    repository_farming: bool = False


class AccountAuthenticityBreakdown(ResultModel):
    account_age: float  # days
    account_maturity: float
    profile_completeness: float


class ContributionAuthenticityBreakdown(ResultModel):
    contribution_span: float  # days
    repository_diversity: float
    maintainer_trust: float
    temporal_consistency: float


class CollaborationSignalsBreakdown(ResultModel):
    unique_collaborators: int
    maintainer_interactions: int
    cross_repo_collaborations: int
    review_reciprocity: float


class AntiGamingBreakdown(ResultModel):
    spam_detection: float
    fork_farming_penalty: float
    pattern_anomalies: float
    behavioral_red_flags: float


class AccountAuthenticity(ResultModel):
    score: Score
    breakdown: AccountAuthenticityBreakdown


class ContributionAuthenticity(ResultModel):
    score: Score
    breakdown: ContributionAuthenticityBreakdown


class CollaborationSignals(ResultModel):
    score: Score
    breakdown: CollaborationSignalsBreakdown


class AntiGamingScore(ResultModel):
    score: Score
    breakdown: AntiGamingBreakdown


class TrustComponents(ResultModel):
    account_authenticity: AccountAuthenticity
    contribution_authenticity: ContributionAuthenticity
    collaboration_signals: CollaborationSignals
    anti_gaming_score: AntiGamingScore


class TrustSignals(ResultModel):
    account_age: float  # days
    account_maturity: float
    contribution_span: float  # days
    repository_diversity: float
    maintainer_trust: float
    collaboration_depth: float
    fork_contribution_ratio: float  # 0-1
    original_repo_contribution_ratio: float  # 0-1


class TrustScoreResult(ResultModel):
    total_score: Score
    is_authentic: bool
    confidence: Score
    components: TrustComponents
    signals: TrustSignals
    spam_detection: SpamDetection
    red_flags: List[str] = Field(default_factory=list)
    green_flags: List[str] = Field(default_factory=list)


# ============================================================================
# Impact
# ============================================================================

class PRImpactBreakdown(ResultModel):
    merged_pr_count: float
    review_engagement: float
    acceptance_rate: float
    repo_diversity: float
    maintainer_trust: float


class CollaborationBreakdown(ResultModel):
    cross_repo_contributions: float
    review_reciprocity: float
    issue_engagement: float
    team_participation: float


class LongevityBreakdown(ResultModel):
    activity_span: float  # months
    consistency: float
    temporal_distribution: float


class QualityBreakdown(ResultModel):
    review_depth: float
    maintainer_trust: float
    contribution_complexity: float
    anti_spam_score: float


class PRImpactComponent(ResultModel):
    score: Score
    breakdown: PRImpactBreakdown


class CollaborationComponent(ResultModel):
    score: Score
    breakdown: CollaborationBreakdown


class LongevityComponent(ResultModel):
    score: Score
    breakdown: LongevityBreakdown


class QualityComponent(ResultModel):
    score: Score
    breakdown: QualityBreakdown


class ImpactComponents(ResultModel):
    pr_impact: PRImpactComponent
    collaboration: CollaborationComponent
    longevity: LongevityComponent
    quality: QualityComponent


class ImpactSignals(ResultModel):
    total_merged_prs: int
    self_merged_prs: int
    spam_prs: int
    active_repositories: int
    activity_span_months: float


class RepoContribution(ResultModel):
    repo: str
    pr_count: int
    score: float


class ActivityEvent(ResultModel):
    date: datetime
    event: str
    impact: float


class Penalty(ResultModel):
    reason: str
    count: int
    impact: float


class ImpactExplainability(ResultModel):
    top_contributing_repos: List[RepoContribution] = Field(default_factory=list)
    recent_activity: List[ActivityEvent] = Field(default_factory=list)
    penalties: List[Penalty] = Field(default_factory=list)


class ImpactScoreResult(ResultModel):
    total_score: Score
    components: ImpactComponents
    signals: ImpactSignals
    explainability: ImpactExplainability


# ============================================================================
# Compatibility
# ============================================================================

class CompatibilitySignals(ResultModel):
    technology_stack_match: Score
    domain_contribution_depth: Score
    architecture_pattern_match: Score
    file_type_alignment: Score
    activity_type_match: Score
    repository_type_match: Score
    review_domain_expertise: Score


class NegativeSignals(ResultModel):
    technology_mismatch: Score
    domain_contradiction: Score
    insufficient_depth: Score
    architecture_mismatch: Score
    technology_overweight: Score


class CompatibilityEvidence(ResultModel):
    type: str
    description: str
    score: float


class CompatibilityExplanation(ResultModel):
    role: str
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    evidence: List[CompatibilityEvidence] = Field(default_factory=list)


class TechnologyStackBreakdown(ResultModel):
    matched_technologies: List[str] = Field(default_factory=list)
    mismatched_technologies: List[str] = Field(default_factory=list)
    score: Score


class ContributionDepthBreakdown(ResultModel):
    relevant_prs: int
    total_prs: int
    score: Score


class ArchitecturePatternsBreakdown(ResultModel):
    detected_patterns: List[str] = Field(default_factory=list)
    score: Score


class CompatibilityBreakdown(ResultModel):
    technology_stack: TechnologyStackBreakdown
    contribution_depth: ContributionDepthBreakdown
    architecture_patterns: ArchitecturePatternsBreakdown


class CompatibilityScoreResult(ResultModel):
    total_score: Score
    compatibility_level: CompatibilityLevel
    signals: CompatibilitySignals
    negative_signals: NegativeSignals
    explanation: CompatibilityExplanation
    breakdown: CompatibilityBreakdown


# ============================================================================
# Recruiter Match
# ============================================================================

class RecruiterView(ResultModel):
    """What a recruiter sees: the match score plus a restricted summary."""
    match_score: Score
    match_level: MatchLevel
    recommendation: Recommendation
    trust_score: Score
    fit_score: Score
    impact_score: Score
    strengths: List[str] = Field(default_factory=list)
    concerns: List[str] = Field(default_factory=list)
    is_authentic: bool
    is_good_fit: bool
    has_impact: bool
    red_flags: List[str] = Field(default_factory=list)
    summary: str


class EngineerTrustView(ResultModel):
    total: Score
    is_authentic: bool
    confidence: Score
    components: Dict[str, float]
    green_flags: List[str] = Field(default_factory=list)
    red_flags: List[str] = Field(default_factory=list)


class EngineerCompatibilityView(ResultModel):
    total: Score
    compatibility_level: CompatibilityLevel
    signals: Dict[str, float]
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)


class EngineerImpactView(ResultModel):
    total: Score
    components: Dict[str, float]
    signals: Dict[str, float]


class EngineerView(ResultModel):
    """
    What the engineer sees about themselves.

    Full transparency into the three underlying scores, with no match score,
    recommendation or other recruiter-facing ranking language.
    """
    trust_score: EngineerTrustView
    compatibility_score: EngineerCompatibilityView
    impact_score: EngineerImpactView
    improvement_suggestions: List[str] = Field(default_factory=list)


class AxisValues(ResultModel):
    trust: float
    compatibility: float
    impact: float


class CalculationDetails(ResultModel):
    weights: AxisValues
    thresholds: AxisValues
    boosts: AxisValues


class RecruiterMatchScoreResult(ResultModel):
    total_match_score: Score
    trust_component: Score
    compatibility_component: Score
    impact_component: Score
    recruiter_view: RecruiterView
    engineer_view: EngineerView
    calculation_details: CalculationDetails


# ============================================================================
# Explanation
# ============================================================================

class ExplanationStrength(ResultModel):
    title: str
    description: str
    evidence: List[str] = Field(default_factory=list)


class ExplanationConcern(ResultModel):
    title: str
    description: str
    severity: Severity
    evidence: List[str] = Field(default_factory=list)


class TrustIndicators(ResultModel):
    is_authentic: bool
    confidence: Score
    key_trust_signals: List[str] = Field(default_factory=list)


class CompatibilityIndicators(ResultModel):
    role: str
    fit_level: CompatibilityLevel
    key_signals: List[str] = Field(default_factory=list)


class ImpactIndicators(ResultModel):
    contribution_depth: str
    collaboration_level: str
    key_contributions: List[str] = Field(default_factory=list)


class MatchExplanation(ResultModel):
    why_this_match: str
    strengths: List[ExplanationStrength] = Field(default_factory=list)
    concerns: List[ExplanationConcern] = Field(default_factory=list)
    trust_indicators: TrustIndicators
    compatibility_indicators: CompatibilityIndicators
    impact_indicators: ImpactIndicators
