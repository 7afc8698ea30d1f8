"""
Recruiter Match Scorer - The Architect Agent

Combines the three analyst scores into a single 0-100 match score:
1. Trust (40%): is this person real and reliable?
2. Compatibility (40%): do they match the role?
3. Impact (20%): have they made meaningful contributions?

Scoring is fail-fast: any axis below its minimum threshold forces the match
to 0. Otherwise exceptional axes earn a multiplicative boost folded into the
capped total. The reported per-axis components stay un-boosted.

The result fans out into two separate projections. The recruiter view
carries the match score and a restricted summary; the engineer view carries
full score transparency and never any ranking language.

Author: Wecraft
"""
import logging
from typing import List, NamedTuple, Optional

from ...models.config import ConfigOverride, RecruiterMatchScoreConfig, resolve_config
from ...models.scores import (
    AxisValues,
    CalculationDetails,
    CompatibilityScoreResult,
    EngineerCompatibilityView,
    EngineerImpactView,
    EngineerTrustView,
    EngineerView,
    ImpactScoreResult,
    RecruiterMatchScoreResult,
    RecruiterView,
    TrustScoreResult,
)

logger = logging.getLogger(__name__)


class WeightedScore(NamedTuple):
    total: float
    trust_component: float
    compatibility_component: float
    impact_component: float
    boosts: AxisValues


NO_BOOSTS = AxisValues(trust=1.0, compatibility=1.0, impact=1.0)

# (minimum total, match level, recommendation)
MATCH_LEVELS = [
    (85, "excellent", "strongly-recommend"),
    (70, "strong", "recommend"),
    (50, "good", "consider"),
    (30, "fair", "consider"),
]


def match_level(score: float):
    """Map a match total to its (level, recommendation) pair."""
    for minimum, level, recommendation in MATCH_LEVELS:
        if score >= minimum:
            return level, recommendation
    return "poor", "not-recommended"


class RecruiterMatchScorer:
    """
    Calculates the Recruiter Match Score from already-computed results.
    """

    # An axis earns its boost strictly above these scores
    BOOST_THRESHOLDS = {
        "trust": 80,
        "compatibility": 85,
        "impact": 90,
    }

    def __init__(self, config: Optional[RecruiterMatchScoreConfig] = None):
        self.config = config or RecruiterMatchScoreConfig()

    def calculate(
        self,
        trust: TrustScoreResult,
        compatibility: CompatibilityScoreResult,
        impact: ImpactScoreResult,
    ) -> RecruiterMatchScoreResult:
        """
        Calculate the match score and both views.

        Args:
            trust: Trust score result
            compatibility: Compatibility score result for the queried role
            impact: Impact score result

        Returns:
            Immutable RecruiterMatchScoreResult
        """
        weighted = self._calculate_weighted_score(
            trust.total_score, compatibility.total_score, impact.total_score
        )

        cfg = self.config
        return RecruiterMatchScoreResult(
            total_match_score=weighted.total,
            trust_component=weighted.trust_component,
            compatibility_component=weighted.compatibility_component,
            impact_component=weighted.impact_component,
            recruiter_view=project_recruiter_view(trust, compatibility, impact, weighted.total),
            engineer_view=project_engineer_view(trust, compatibility, impact),
            calculation_details=CalculationDetails(
                weights=AxisValues(**cfg.weights.model_dump()),
                thresholds=AxisValues(**cfg.minimum_thresholds.model_dump()),
                boosts=weighted.boosts,
            ),
        )

    def _calculate_weighted_score(self, trust: float, compatibility: float, impact: float) -> WeightedScore:
        weights = self.config.weights
        thresholds = self.config.minimum_thresholds
        factors = self.config.boost_factors

        if trust < thresholds.trust or compatibility < thresholds.compatibility or impact < thresholds.impact:
            logger.debug(
                "match gated: trust=%.1f compatibility=%.1f impact=%.1f", trust, compatibility, impact
            )
            return WeightedScore(0.0, 0.0, 0.0, 0.0, NO_BOOSTS)

        boosts = AxisValues(
            trust=factors.high_trust_boost if trust > self.BOOST_THRESHOLDS["trust"] else 1.0,
            compatibility=(
                factors.high_compatibility_boost
                if compatibility > self.BOOST_THRESHOLDS["compatibility"] else 1.0
            ),
            impact=factors.high_impact_boost if impact > self.BOOST_THRESHOLDS["impact"] else 1.0,
        )

        trust_component = trust * weights.trust
        compatibility_component = compatibility * weights.compatibility
        impact_component = impact * weights.impact

        total = min(
            trust_component * boosts.trust +
            compatibility_component * boosts.compatibility +
            impact_component * boosts.impact,
            100.0,
        )

        logger.debug("match score %.1f boosts=%s", total, boosts.model_dump())

        # Components are reported before boosting
        return WeightedScore(total, trust_component, compatibility_component, impact_component, boosts)


# ============================================================================
# Views
# ============================================================================

def project_recruiter_view(
    trust: TrustScoreResult,
    compatibility: CompatibilityScoreResult,
    impact: ImpactScoreResult,
    match_score: float,
) -> RecruiterView:
    """
    Build the recruiter-facing view.

    Red flags are restricted to authenticity, fork farming and poor
    compatibility. The full trust red-flag list is never exposed here.
    """
    level, recommendation = match_level(match_score)
    role = compatibility.explanation.role

    strengths = []
    if trust.total_score > 75:
        strengths.append("Highly authentic profile with verified contributions")
    if compatibility.total_score > 75:
        strengths.append(f"Strong {role} role fit")
    if impact.total_score > 80:
        strengths.append("High-impact contributions with proven track record")
    if trust.is_authentic and compatibility.compatibility_level == "high":
        strengths.append("Authentic engineer with excellent role alignment")

    concerns = []
    if trust.total_score < 60:
        concerns.append("Trust score below ideal threshold")
    if compatibility.total_score < 50:
        concerns.append("Limited role-specific experience")
    if impact.total_score < 50:
        concerns.append("Lower contribution impact")
    if trust.red_flags:
        concerns.append(f"{len(trust.red_flags)} trust-related concerns")

    red_flags = []
    if not trust.is_authentic:
        red_flags.append("Profile authenticity concerns")
    if trust.spam_detection.fork_farming:
        red_flags.append("Fork-only contributions detected")
    if compatibility.compatibility_level == "poor":
        red_flags.append("Poor role compatibility")

    return RecruiterView(
        match_score=match_score,
        match_level=level,
        recommendation=recommendation,
        trust_score=trust.total_score,
        fit_score=compatibility.total_score,
        impact_score=impact.total_score,
        strengths=strengths,
        concerns=concerns,
        is_authentic=trust.is_authentic,
        is_good_fit=compatibility.compatibility_level != "poor",
        has_impact=impact.total_score > 50,
        red_flags=red_flags,
        summary=_build_summary(trust, compatibility, impact, match_score),
    )


def project_engineer_view(
    trust: TrustScoreResult,
    compatibility: CompatibilityScoreResult,
    impact: ImpactScoreResult,
) -> EngineerView:
    """
    Build the engineer-facing view: every underlying score, no match score.
    """
    trust_components = trust.components
    impact_components = impact.components

    return EngineerView(
        trust_score=EngineerTrustView(
            total=trust.total_score,
            is_authentic=trust.is_authentic,
            confidence=trust.confidence,
            components={
                "account_authenticity": trust_components.account_authenticity.score,
                "contribution_authenticity": trust_components.contribution_authenticity.score,
                "collaboration_signals": trust_components.collaboration_signals.score,
                "anti_gaming_score": trust_components.anti_gaming_score.score,
            },
            green_flags=trust.green_flags,
            red_flags=trust.red_flags,
        ),
        compatibility_score=EngineerCompatibilityView(
            total=compatibility.total_score,
            compatibility_level=compatibility.compatibility_level,
            signals=compatibility.signals.model_dump(),
            strengths=compatibility.explanation.strengths,
            weaknesses=compatibility.explanation.weaknesses,
        ),
        impact_score=EngineerImpactView(
            total=impact.total_score,
            components={
                "pr_impact": impact_components.pr_impact.score,
                "collaboration": impact_components.collaboration.score,
                "longevity": impact_components.longevity.score,
                "quality": impact_components.quality.score,
            },
            signals={
                "total_merged_prs": impact.signals.total_merged_prs,
                "active_repositories": impact.signals.active_repositories,
                "activity_span_months": impact.signals.activity_span_months,
            },
        ),
        improvement_suggestions=_build_suggestions(trust, compatibility, impact),
    )


def _build_suggestions(
    trust: TrustScoreResult,
    compatibility: CompatibilityScoreResult,
    impact: ImpactScoreResult,
) -> List[str]:
    suggestions = []

    if trust.total_score < 70:
        if "Insufficient repository diversity" in trust.red_flags:
            suggestions.append("Contribute to more diverse repositories to increase trust score")
        if trust.spam_detection.fork_farming:
            suggestions.append("Contribute to original repositories, not just forks")

    if compatibility.total_score < 60:
        suggestions.append(f"Increase {compatibility.explanation.role}-specific contributions")
        if compatibility.negative_signals.technology_mismatch > 50:
            suggestions.append("Focus on role-relevant technologies and reduce unrelated contributions")

    if impact.total_score < 60:
        suggestions.append("Increase merged PR count and collaboration with maintainers")
        if impact.signals.active_repositories < 3:
            suggestions.append("Contribute to more repositories to demonstrate breadth")

    return suggestions


def _build_summary(
    trust: TrustScoreResult,
    compatibility: CompatibilityScoreResult,
    impact: ImpactScoreResult,
    match_score: float,
) -> str:
    level, _ = match_level(match_score)
    parts = [f"{level.capitalize()} match"]

    parts.append(f"with {compatibility.explanation.role} role")
    if trust.is_authentic:
        parts.append("and authentic profile")
    if compatibility.compatibility_level == "high":
        parts.append("showing strong role alignment")
    if impact.total_score > 80:
        parts.append("with high-impact contributions")

    return ", ".join(parts) + "."


def compute_recruiter_match_score(
    trust: TrustScoreResult,
    compatibility: CompatibilityScoreResult,
    impact: ImpactScoreResult,
    config: ConfigOverride = None,
) -> RecruiterMatchScoreResult:
    """
    Calculate the Recruiter Match Score.

    Args:
        trust: Trust score result
        compatibility: Compatibility score result
        impact: Impact score result
        config: Optional partial override of RecruiterMatchScoreConfig defaults

    Raises:
        InvalidConfigError: If the override fails validation
    """
    scorer = RecruiterMatchScorer(resolve_config(RecruiterMatchScoreConfig, config))
    return scorer.calculate(trust, compatibility, impact)
