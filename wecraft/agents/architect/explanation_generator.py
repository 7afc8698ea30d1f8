"""
Explanation Generator - The Architect Agent

Turns the three analyst results into human-readable explanations. It only
explains numbers that already exist: it never computes a score, ranks, or
compares engineers. Every strength and concern is triggered by a threshold
crossing in its input, and its evidence list quotes the underlying values.

Works without a recruiter match result, so it can explain an engineer's
scores to the engineer directly.

Author: Wecraft
"""
import logging
from typing import List

from ...models.scores import (
    CompatibilityIndicators,
    CompatibilityScoreResult,
    ExplanationConcern,
    ExplanationStrength,
    ImpactIndicators,
    ImpactScoreResult,
    MatchExplanation,
    TrustIndicators,
    TrustScoreResult,
)

logger = logging.getLogger(__name__)


def impact_level(score: float) -> str:
    if score >= 70:
        return "high"
    if score >= 40:
        return "medium"
    return "low"


class ExplanationGenerator:
    """
    Builds a MatchExplanation from trust, impact and compatibility results.
    """

    STRONG_SIGNAL = 70
    WEAK_COMPONENT = 40
    NEW_ACCOUNT_DAYS = 180
    FEW_MERGED_PRS = 5

    def generate(
        self,
        trust: TrustScoreResult,
        impact: ImpactScoreResult,
        compatibility: CompatibilityScoreResult,
    ) -> MatchExplanation:
        """
        Generate the full explanation.

        Args:
            trust: Trust score result
            impact: Impact score result
            compatibility: Compatibility score result

        Returns:
            Immutable MatchExplanation
        """
        strengths = self._generate_strengths(trust, impact, compatibility)
        concerns = self._generate_concerns(trust, impact, compatibility)

        logger.debug("explanation: %d strengths, %d concerns", len(strengths), len(concerns))

        return MatchExplanation(
            why_this_match=self._generate_why_this_match(trust, impact, compatibility),
            strengths=strengths,
            concerns=concerns,
            trust_indicators=self._extract_trust_indicators(trust),
            compatibility_indicators=self._extract_compatibility_indicators(compatibility),
            impact_indicators=self._extract_impact_indicators(impact),
        )

    # ------------------------------------------------------------------
    # Summary sentence
    # ------------------------------------------------------------------

    @staticmethod
    def _generate_why_this_match(
        trust: TrustScoreResult,
        impact: ImpactScoreResult,
        compatibility: CompatibilityScoreResult,
    ) -> str:
        role = compatibility.explanation.role
        parts = []

        if trust.is_authentic:
            parts.append("This engineer has an authentic profile")
        else:
            parts.append("There are authenticity concerns with this profile")

        if compatibility.compatibility_level == "high":
            parts.append(f"shows strong alignment with {role} engineering")
        elif compatibility.compatibility_level == "medium":
            parts.append(f"demonstrates moderate {role} experience")
        else:
            parts.append(f"has limited {role} alignment")

        level = impact_level(impact.total_score)
        if level == "high":
            parts.append("with a proven track record of meaningful contributions")
        elif level == "medium":
            parts.append("with a solid history of contributions")
        else:
            parts.append("with emerging contribution patterns")

        return ", ".join(parts) + "."

    # ------------------------------------------------------------------
    # Strengths
    # ------------------------------------------------------------------

    def _generate_strengths(
        self,
        trust: TrustScoreResult,
        impact: ImpactScoreResult,
        compatibility: CompatibilityScoreResult,
    ) -> List[ExplanationStrength]:
        strengths = []
        signals = trust.signals
        role = compatibility.explanation.role

        # Trust side
        if trust.is_authentic:
            strengths.append(ExplanationStrength(
                title="Authentic Profile",
                description="Profile shows genuine engineering activity with verified contributions.",
                evidence=self._build_trust_evidence(trust),
            ))

        if signals.maintainer_trust > 80:
            maintainer_merged = impact.signals.total_merged_prs - impact.signals.self_merged_prs
            strengths.append(ExplanationStrength(
                title="High Maintainer Trust",
                description=(
                    f"Most contributions ({round(signals.maintainer_trust)}%) were merged by "
                    "repository maintainers, indicating quality work."
                ),
                evidence=[
                    f"{round(signals.maintainer_trust)}% of PRs merged by maintainers",
                    f"{maintainer_merged} maintainer-merged PRs",
                ],
            ))

        if signals.repository_diversity > self.STRONG_SIGNAL:
            repos = impact.signals.active_repositories
            strengths.append(ExplanationStrength(
                title="Strong Repository Diversity",
                description=f"Contributions span {repos} repositories, showing breadth of experience.",
                evidence=[
                    f"{repos} active repositories",
                    f"{round(signals.repository_diversity)} repository diversity score",
                ],
            ))

        if signals.collaboration_depth > self.STRONG_SIGNAL:
            collaboration = trust.components.collaboration_signals.breakdown
            strengths.append(ExplanationStrength(
                title="Active Collaboration",
                description="Strong collaboration patterns with other engineers and maintainers.",
                evidence=[
                    f"{collaboration.unique_collaborators} collaborators",
                    f"{collaboration.maintainer_interactions} maintainer interactions",
                    f"{collaboration.cross_repo_collaborations} cross-repository collaborations",
                ],
            ))

        # Impact side
        components = impact.components
        if components.pr_impact.score > self.STRONG_SIGNAL:
            breakdown = components.pr_impact.breakdown
            strengths.append(ExplanationStrength(
                title="High PR Impact",
                description=(
                    f"Significant contributions with {impact.signals.total_merged_prs} merged PRs "
                    "and strong review engagement."
                ),
                evidence=[
                    f"{impact.signals.total_merged_prs} merged PRs",
                    f"{round(breakdown.review_engagement)} review engagement score",
                    f"{round(breakdown.repo_diversity)} repository diversity score",
                ],
            ))

        if components.longevity.score > self.STRONG_SIGNAL:
            span_months = round(impact.signals.activity_span_months)
            strengths.append(ExplanationStrength(
                title="Long-term Consistency",
                description=(
                    f"Sustained contributions over {span_months} months, "
                    "demonstrating commitment and reliability."
                ),
                evidence=[
                    f"{span_months} months of activity",
                    f"{round(components.longevity.breakdown.consistency)}% consistency score",
                ],
            ))

        if components.collaboration.score > self.STRONG_SIGNAL:
            breakdown = components.collaboration.breakdown
            strengths.append(ExplanationStrength(
                title="Strong Collaboration",
                description=(
                    "Active participation in collaborative development with "
                    "cross-repository contributions."
                ),
                evidence=[
                    f"Contributions to {impact.signals.active_repositories} repositories",
                    f"{round(breakdown.review_reciprocity)}% review reciprocity",
                    f"{round(breakdown.team_participation)}% team repository participation",
                ],
            ))

        # Compatibility side
        tech = compatibility.breakdown.technology_stack
        if compatibility.signals.technology_stack_match > self.STRONG_SIGNAL:
            strengths.append(ExplanationStrength(
                title="Technology Stack Alignment",
                description=f"Strong match with {role} technologies and tools.",
                evidence=[
                    f"{len(tech.matched_technologies)} matched technologies",
                    f"Technologies: {', '.join(tech.matched_technologies[:5])}",
                ],
            ))

        depth = compatibility.breakdown.contribution_depth
        if compatibility.signals.domain_contribution_depth > self.STRONG_SIGNAL:
            strengths.append(ExplanationStrength(
                title="Deep Domain Experience",
                description=f"Strong focus on {role}-specific work with {depth.relevant_prs} relevant PRs.",
                evidence=[
                    f"{depth.relevant_prs} out of {depth.total_prs} PRs are role-relevant",
                    f"{round(compatibility.signals.domain_contribution_depth)}% domain contribution depth",
                ],
            ))

        patterns = compatibility.breakdown.architecture_patterns.detected_patterns
        if patterns:
            strengths.append(ExplanationStrength(
                title="Architecture Pattern Recognition",
                description=f"Recognized architecture patterns relevant to {role} engineering.",
                evidence=[
                    f"Patterns: {', '.join(patterns[:3])}",
                    f"{len(patterns)} architecture patterns detected",
                ],
            ))

        return strengths

    # ------------------------------------------------------------------
    # Concerns
    # ------------------------------------------------------------------

    def _generate_concerns(
        self,
        trust: TrustScoreResult,
        impact: ImpactScoreResult,
        compatibility: CompatibilityScoreResult,
    ) -> List[ExplanationConcern]:
        concerns = []
        signals = trust.signals
        role = compatibility.explanation.role

        # Trust side
        if not trust.is_authentic:
            concerns.append(ExplanationConcern(
                title="Profile Authenticity Concerns",
                description=(
                    "Profile does not meet authenticity thresholds. "
                    "May indicate spam, farming, or incomplete profile."
                ),
                severity="high",
                evidence=[f"Trust score: {round(trust.total_score)}"] + trust.red_flags,
            ))

        if trust.spam_detection.fork_farming:
            concerns.append(ExplanationConcern(
                title="Fork-Only Contributions",
                description=(
                    "All contributions are to forked repositories. "
                    "No contributions to original repositories detected."
                ),
                severity="high",
                evidence=[
                    f"{round(signals.fork_contribution_ratio * 100)}% fork contribution ratio",
                    f"{round(signals.original_repo_contribution_ratio * 100)}% original repository contributions",
                ],
            ))

        if signals.fork_contribution_ratio > 0.8:
            fork_percent = round(signals.fork_contribution_ratio * 100)
            concerns.append(ExplanationConcern(
                title="High Fork Contribution Ratio",
                description=f"Most contributions ({fork_percent}%) are to forked repositories.",
                severity="medium",
                evidence=[f"{fork_percent}% fork contributions"],
            ))

        if signals.account_age < self.NEW_ACCOUNT_DAYS:
            age = round(signals.account_age)
            concerns.append(ExplanationConcern(
                title="New Account",
                description=f"Account is relatively new ({age} days old). Limited history available.",
                severity="low",
                evidence=[f"{age} days old account"],
            ))

        if signals.repository_diversity < 30:
            repos = impact.signals.active_repositories
            concerns.append(ExplanationConcern(
                title="Limited Repository Diversity",
                description=f"Contributions concentrated in few repositories ({repos} repositories).",
                severity="medium",
                evidence=[
                    f"{repos} active repositories",
                    f"{round(signals.repository_diversity)} repository diversity score",
                ],
            ))

        # Impact side
        merged = impact.signals.total_merged_prs
        if merged < self.FEW_MERGED_PRS:
            concerns.append(ExplanationConcern(
                title="Limited Contribution History",
                description=f"Only {merged} merged PRs. Limited evidence of impact.",
                severity="medium",
                evidence=[f"{merged} total merged PRs"],
            ))

        if impact.components.longevity.score < self.WEAK_COMPONENT:
            span_months = round(impact.signals.activity_span_months)
            concerns.append(ExplanationConcern(
                title="Short Activity Span",
                description=(
                    f"Limited contribution history ({span_months} months). "
                    "May indicate new or inconsistent contributor."
                ),
                severity="low",
                evidence=[
                    f"{span_months} months of activity",
                    f"{round(impact.components.longevity.score)} longevity score",
                ],
            ))

        if impact.components.collaboration.score < self.WEAK_COMPONENT:
            breakdown = impact.components.collaboration.breakdown
            concerns.append(ExplanationConcern(
                title="Limited Collaboration",
                description="Few collaborative contributions. May indicate solo work or limited team interaction.",
                severity="low",
                evidence=[
                    f"{round(impact.components.collaboration.score)} collaboration score",
                    f"{round(breakdown.cross_repo_contributions)} cross-repository score",
                ],
            ))

        # Compatibility side
        if compatibility.compatibility_level == "poor":
            concerns.append(ExplanationConcern(
                title="Poor Role Compatibility",
                description=f"Limited alignment with {role} role requirements.",
                severity="high",
                evidence=[f"Compatibility score: {round(compatibility.total_score)}"]
                + compatibility.explanation.weaknesses,
            ))

        tech = compatibility.breakdown.technology_stack
        if compatibility.signals.technology_stack_match < 30:
            evidence = [f"{len(tech.matched_technologies)} matched technologies"]
            if tech.mismatched_technologies:
                evidence.append(f"Mismatched: {', '.join(tech.mismatched_technologies[:3])}")
            concerns.append(ExplanationConcern(
                title="Technology Stack Mismatch",
                description=f"Limited experience with {role} technologies.",
                severity="medium",
                evidence=evidence,
            ))

        depth = compatibility.breakdown.contribution_depth
        if compatibility.signals.domain_contribution_depth < 30:
            concerns.append(ExplanationConcern(
                title="Limited Domain Experience",
                description=f"Only {depth.relevant_prs} out of {depth.total_prs} PRs are role-relevant.",
                severity="medium",
                evidence=[f"{round(compatibility.signals.domain_contribution_depth)}% domain contribution depth"],
            ))

        if compatibility.negative_signals.technology_mismatch > 50:
            concerns.append(ExplanationConcern(
                title="Significant Technology Mismatch",
                description="High percentage of contributions in technologies not aligned with role.",
                severity="medium",
                evidence=[f"{round(compatibility.negative_signals.technology_mismatch)}% technology mismatch"],
            ))

        return concerns

    # ------------------------------------------------------------------
    # Indicators
    # ------------------------------------------------------------------

    def _extract_trust_indicators(self, trust: TrustScoreResult) -> TrustIndicators:
        signals = []
        if trust.is_authentic:
            signals.append("Authentic profile verified")
        # Green flags already name maintainer trust, diversity and collaboration
        signals.extend(trust.green_flags[:3])

        return TrustIndicators(
            is_authentic=trust.is_authentic,
            confidence=trust.confidence,
            key_trust_signals=list(dict.fromkeys(signals)),
        )

    def _extract_compatibility_indicators(self, compatibility: CompatibilityScoreResult) -> CompatibilityIndicators:
        signals = []
        if compatibility.signals.technology_stack_match > self.STRONG_SIGNAL:
            signals.append("Strong technology alignment")
        if compatibility.signals.domain_contribution_depth > self.STRONG_SIGNAL:
            signals.append("Deep domain experience")
        if compatibility.signals.architecture_pattern_match > self.STRONG_SIGNAL:
            signals.append("Recognized architecture patterns")

        patterns = compatibility.breakdown.architecture_patterns.detected_patterns
        if patterns:
            signals.append(f"{len(patterns)} architecture patterns")
        signals.extend(compatibility.explanation.strengths[:2])

        return CompatibilityIndicators(
            role=compatibility.explanation.role,
            fit_level=compatibility.compatibility_level,
            key_signals=signals,
        )

    def _extract_impact_indicators(self, impact: ImpactScoreResult) -> ImpactIndicators:
        contributions = [
            f"{impact.signals.total_merged_prs} merged PRs",
            f"{impact.signals.active_repositories} active repositories",
        ]
        top_repos = impact.explainability.top_contributing_repos
        if top_repos:
            contributions.append(f"Top contribution: {top_repos[0].repo} ({top_repos[0].pr_count} PRs)")

        if impact.total_score > 70:
            depth = "Deep"
        elif impact.total_score > 40:
            depth = "Moderate"
        else:
            depth = "Emerging"

        collaboration_score = impact.components.collaboration.score
        if collaboration_score > 70:
            collaboration = "Strong"
        elif collaboration_score > 40:
            collaboration = "Moderate"
        else:
            collaboration = "Limited"

        return ImpactIndicators(
            contribution_depth=depth,
            collaboration_level=collaboration,
            key_contributions=contributions,
        )

    @staticmethod
    def _build_trust_evidence(trust: TrustScoreResult) -> List[str]:
        evidence = [f"Trust score: {round(trust.total_score)}"]
        if trust.signals.account_age > 365:
            evidence.append(f"Account age: {round(trust.signals.account_age / 365)} years")
        evidence.extend(trust.green_flags[:2])
        return evidence


def generate_match_explanation(
    trust: TrustScoreResult,
    impact: ImpactScoreResult,
    compatibility: CompatibilityScoreResult,
) -> MatchExplanation:
    """
    Explain the three underlying scores.

    Note the argument order: trust, impact, compatibility.
    """
    return ExplanationGenerator().generate(trust, impact, compatibility)
