"""
Compatibility Scorer - The Analyst Agent ("Does this engineer fit the role?")

Role fit is read only from public proof of work: the files, PR text,
repositories and reviews in an EngineerActivity are scanned against the
role's knowledge-base entry. Self-reported skills play no part.

Seven positive signals (0-100 each) are blended with role-specific weights,
then five negative signals are subtracted as fixed-weight penalties.

Author: Wecraft
"""
import logging
import posixpath
from typing import Dict, Iterable, List, Union

from ...models.github import EngineerActivity, FileChange, PRAnalysis
from ...models.roles import RoleProfile, RoleQuery
from ...models.scores import (
    ArchitecturePatternsBreakdown,
    CompatibilityBreakdown,
    CompatibilityEvidence,
    CompatibilityExplanation,
    CompatibilityScoreResult,
    CompatibilitySignals,
    ContributionDepthBreakdown,
    NegativeSignals,
    TechnologyStackBreakdown,
)
from ..utils import clamp, safe_ratio
from .role_profiles import get_role_profile

logger = logging.getLogger(__name__)


def _ordered(values: Iterable[str]) -> List[str]:
    """De-duplicate while keeping first-seen order."""
    return list(dict.fromkeys(values))


def _mentions(text: str, terms: Iterable[str]) -> bool:
    return any(term in text for term in terms)


def compatibility_level(score: float) -> str:
    """Map a 0-100 compatibility total to its level."""
    if score >= 75:
        return "high"
    if score >= 50:
        return "medium"
    if score >= 25:
        return "low"
    return "poor"


class CompatibilityScorer:
    """
    Calculates the role Compatibility Score (0-100) for one role profile.
    """

    BASE_SIGNAL_WEIGHTS = {
        "technology_stack_match": 0.2,
        "domain_contribution_depth": 0.25,
        "architecture_pattern_match": 0.15,
        "file_type_alignment": 0.15,
        "activity_type_match": 0.1,
        "repository_type_match": 0.1,
        "review_domain_expertise": 0.05,
    }

    NEGATIVE_SIGNAL_WEIGHTS = {
        "technology_mismatch": 0.15,
        "domain_contradiction": 0.1,
        "insufficient_depth": 0.2,
        "architecture_mismatch": 0.1,
        "technology_overweight": 0.15,
    }

    # Structural PR flags that imply an architecture pattern
    STRUCTURAL_PATTERNS = {
        "is_api_change": "api-design",
        "is_infrastructure_change": "infrastructure",
        "is_database_change": "data-layer",
    }

    # Role profile change type -> PRAnalysis flag
    CHANGE_TYPE_FLAGS = {
        "api": "is_api_change",
        "ui": "is_ui_change",
        "database": "is_database_change",
        "config": "is_config_change",
        "infrastructure": "is_infrastructure_change",
        "test": "is_test_change",
        "documentation": "is_documentation_change",
    }

    ISSUE_TYPE_FLAGS = {
        "bug": "is_bug",
        "feature": "is_feature",
        "infrastructure": "is_infrastructure",
        "security": "is_security",
    }

    # Strength text for signals without their own evidence entry, used above 70
    SIGNAL_STRENGTHS = {
        "file_type_alignment": "{value}% of changed files are {role} file types",
        "activity_type_match": "{value}% of PRs and issues are {role} work",
        "repository_type_match": "{value}% of original repositories are {role} projects",
        "review_domain_expertise": "{value}% of code reviews cover {role} code",
    }

    MIN_REPO_LANGUAGE_SHARE = 10  # percent
    MIN_PRS_FOR_DEPTH = 5

    def __init__(self, profile: RoleProfile):
        self.profile = profile
        self.weights = profile.signal_weights or self.BASE_SIGNAL_WEIGHTS

    def calculate(self, activity: EngineerActivity, query: RoleQuery) -> CompatibilityScoreResult:
        """
        Score the activity against this scorer's role.

        Args:
            activity: Role-analysis view of the engineer's activity
            query: The role query; its technology hints only add evidence

        Returns:
            Immutable CompatibilityScoreResult
        """
        tech = self._calculate_technology_stack(activity)
        depth = self._calculate_domain_depth(activity)
        architecture = self._calculate_architecture_patterns(activity)

        signals = CompatibilitySignals(
            technology_stack_match=tech.score,
            domain_contribution_depth=depth.score,
            architecture_pattern_match=architecture.score,
            file_type_alignment=self._calculate_file_type_alignment(activity),
            activity_type_match=self._calculate_activity_type_match(activity),
            repository_type_match=self._calculate_repository_type_match(activity),
            review_domain_expertise=self._calculate_review_expertise(activity),
        )
        negative = self._calculate_negative_signals(activity, tech, depth, architecture)

        positive_total = sum(getattr(signals, name) * weight for name, weight in self.weights.items())
        penalty_total = sum(
            getattr(negative, name) * weight for name, weight in self.NEGATIVE_SIGNAL_WEIGHTS.items()
        )
        total_score = clamp(positive_total - penalty_total)
        level = compatibility_level(total_score)

        logger.debug(
            "compatibility %s: %.1f (positive=%.1f penalties=%.1f) level=%s",
            self.profile.role, total_score, positive_total, penalty_total, level,
        )

        return CompatibilityScoreResult(
            total_score=total_score,
            compatibility_level=level,
            signals=signals,
            negative_signals=negative,
            explanation=self._build_explanation(query, signals, tech, depth, architecture, negative),
            breakdown=CompatibilityBreakdown(
                technology_stack=tech,
                contribution_depth=depth,
                architecture_patterns=architecture,
            ),
        )

    # ------------------------------------------------------------------
    # Positive signals
    # ------------------------------------------------------------------

    def _calculate_technology_stack(self, activity: EngineerActivity) -> TechnologyStackBreakdown:
        """
        Distinct matched technologies x15 (max 100), minus distinct
        mismatched technologies x10 (max 50).
        """
        profile = self.profile
        matched, mismatched = [], []

        for pr in activity.prs:
            for file in pr.files_changed:
                ext = file.file_extension.lower()
                if ext in profile.file_extensions:
                    matched.append(ext)
                if _mentions(file.file_path.lower(), profile.negative_indicators):
                    mismatched.append(ext or file.file_path.lower())
            for language in pr.languages:
                if language.lower() in profile.languages:
                    matched.append(language.lower())

        for repo in activity.repositories:
            for language, share in repo.languages.items():
                if share > self.MIN_REPO_LANGUAGE_SHARE and language.lower() in profile.languages:
                    matched.append(language.lower())
            if _mentions(repo.text, profile.keywords):
                matched.append("repository-keyword")

        matched, mismatched = _ordered(matched), _ordered(mismatched)
        base = min(len(matched) * 15, 100)
        penalty = min(len(mismatched) * 10, 50)

        return TechnologyStackBreakdown(
            matched_technologies=matched,
            mismatched_technologies=mismatched,
            score=max(base - penalty, 0),
        )

    def _is_relevant_file(self, file: FileChange) -> bool:
        if file.file_extension.lower() in self.profile.file_extensions:
            return True
        return _mentions(file.file_path.lower(), self.profile.keywords) or _mentions(
            file.directory.lower(), self.profile.keywords
        )

    def _calculate_domain_depth(self, activity: EngineerActivity) -> ContributionDepthBreakdown:
        """A PR counts once if most of its files are relevant or its text names a role keyword."""
        relevant = 0
        for pr in activity.prs:
            relevant_files = sum(1 for file in pr.files_changed if self._is_relevant_file(file))
            if safe_ratio(relevant_files, len(pr.files_changed)) > 0.5 or _mentions(pr.text, self.profile.keywords):
                relevant += 1

        total = len(activity.prs)
        return ContributionDepthBreakdown(
            relevant_prs=relevant,
            total_prs=total,
            score=clamp(safe_ratio(relevant, total) * 100),
        )

    def _calculate_architecture_patterns(self, activity: EngineerActivity) -> ArchitecturePatternsBreakdown:
        patterns = self.profile.architecture_patterns
        detected = []

        for pr in activity.prs:
            paths = " ".join(file.file_path.lower() for file in pr.files_changed)
            detected.extend(p for p in patterns if p in pr.text or p in paths)
            detected.extend(name for flag, name in self.STRUCTURAL_PATTERNS.items() if getattr(pr, flag))

        for repo in activity.repositories:
            detected.extend(p for p in patterns if p in repo.text)

        detected = _ordered(detected)
        return ArchitecturePatternsBreakdown(
            detected_patterns=detected,
            score=min(len(detected) * 20, 100),
        )

    def _calculate_file_type_alignment(self, activity: EngineerActivity) -> float:
        files = [file for pr in activity.prs for file in pr.files_changed]
        relevant = sum(1 for file in files if file.file_extension.lower() in self.profile.file_extensions)
        return safe_ratio(relevant, len(files)) * 100

    def _is_relevant_pr_activity(self, pr: PRAnalysis) -> bool:
        for change_type in self.profile.relevant_change_types:
            if getattr(pr, self.CHANGE_TYPE_FLAGS[change_type]):
                return True
        return _mentions(pr.text, self.profile.keywords)

    def _calculate_activity_type_match(self, activity: EngineerActivity) -> float:
        relevant = sum(1 for pr in activity.prs if self._is_relevant_pr_activity(pr))
        for issue in activity.issues:
            typed = any(getattr(issue, self.ISSUE_TYPE_FLAGS[t]) for t in self.profile.relevant_issue_types)
            if typed or _mentions(issue.text, self.profile.keywords):
                relevant += 1
        return clamp(safe_ratio(relevant, len(activity.prs) + len(activity.issues)) * 100)

    def _calculate_repository_type_match(self, activity: EngineerActivity) -> float:
        originals = [repo for repo in activity.repositories if not repo.is_fork]
        relevant = sum(
            1 for repo in originals
            if repo.primary_language.lower() in self.profile.languages
            or _mentions(repo.text, self.profile.keywords)
        )
        return safe_ratio(relevant, len(originals)) * 100

    def _calculate_review_expertise(self, activity: EngineerActivity) -> float:
        profile = self.profile
        relevant = 0
        for review in activity.code_reviews:
            extensions = {posixpath.splitext(path)[1].lower() for path in review.reviewed_files}
            languages = {language.lower() for language in review.languages}
            if extensions & set(profile.file_extensions) or languages & set(profile.languages):
                relevant += 1
        return clamp(safe_ratio(relevant, len(activity.code_reviews)) * 100)

    # ------------------------------------------------------------------
    # Negative signals
    # ------------------------------------------------------------------

    def _calculate_negative_signals(
        self,
        activity: EngineerActivity,
        tech: TechnologyStackBreakdown,
        depth: ContributionDepthBreakdown,
        architecture: ArchitecturePatternsBreakdown,
    ) -> NegativeSignals:
        files = [file for pr in activity.prs for file in pr.files_changed]
        negative_touches = sum(
            1 for file in files if _mentions(file.file_path.lower(), self.profile.negative_indicators)
        )
        technology_mismatch = clamp(safe_ratio(negative_touches, len(files)) * 100)

        return NegativeSignals(
            technology_mismatch=technology_mismatch,
            # Mirrors technology_mismatch until a distinct formula is defined
            domain_contradiction=technology_mismatch,
            insufficient_depth=100.0 if depth.total_prs < self.MIN_PRS_FOR_DEPTH else 0.0,
            architecture_mismatch=100.0 if not architecture.detected_patterns else 0.0,
            technology_overweight=70.0 if len(tech.mismatched_technologies) > len(tech.matched_technologies) else 0.0,
        )

    # ------------------------------------------------------------------
    # Explanation
    # ------------------------------------------------------------------

    def _build_explanation(
        self,
        query: RoleQuery,
        signals: CompatibilitySignals,
        tech: TechnologyStackBreakdown,
        depth: ContributionDepthBreakdown,
        architecture: ArchitecturePatternsBreakdown,
        negative: NegativeSignals,
    ) -> CompatibilityExplanation:
        strengths, weaknesses, evidence = [], [], []

        if tech.score > 70:
            strengths.append(
                f"Strong technology stack match with {len(tech.matched_technologies)} relevant technologies"
            )
            evidence.append(CompatibilityEvidence(
                type="Technology Stack",
                description=f"Matched technologies: {', '.join(tech.matched_technologies[:5])}",
                score=tech.score,
            ))
        elif tech.score < 30:
            weaknesses.append("Limited technology stack alignment")

        if depth.score > 70:
            strengths.append(f"Deep domain contributions: {depth.relevant_prs}/{depth.total_prs} relevant PRs")
            evidence.append(CompatibilityEvidence(
                type="Contribution Depth",
                description=f"{depth.relevant_prs} out of {depth.total_prs} PRs are role-relevant",
                score=depth.score,
            ))

        if architecture.detected_patterns:
            strengths.append(
                f"Recognized architecture patterns: {', '.join(architecture.detected_patterns[:3])}"
            )
            evidence.append(CompatibilityEvidence(
                type="Architecture Patterns",
                description=f"Detected patterns: {', '.join(architecture.detected_patterns)}",
                score=architecture.score,
            ))

        role = self.profile.role
        for name, strength in self.SIGNAL_STRENGTHS.items():
            value = getattr(signals, name)
            if value > 70:
                strengths.append(strength.format(role=role, value=round(value)))

        if negative.technology_mismatch > 50:
            weaknesses.append("Significant contributions in mismatched technologies")
        if negative.insufficient_depth > 0:
            weaknesses.append("Insufficient contribution depth in role domain")

        hint_evidence = self._requested_technology_evidence(query.required_technologies, tech)
        if hint_evidence is not None:
            evidence.append(hint_evidence)

        return CompatibilityExplanation(
            role=self.profile.role,
            strengths=strengths,
            weaknesses=weaknesses,
            evidence=evidence,
        )

    @staticmethod
    def _requested_technology_evidence(requested: List[str], tech: TechnologyStackBreakdown):
        """Report which requested technologies show up in the work. Never affects the score."""
        if not requested:
            return None
        matched = {name.lower().lstrip(".") for name in tech.matched_technologies}
        found = [name for name in requested if name.lower().lstrip(".") in matched]
        return CompatibilityEvidence(
            type="Requested Technologies",
            description=(
                f"Found {len(found)} of {len(requested)} requested technologies"
                + (f": {', '.join(found)}" if found else "")
            ),
            score=safe_ratio(len(found), len(requested)) * 100,
        )


def compute_compatibility_score(
    activity: EngineerActivity,
    role_query: Union[RoleQuery, str, Dict],
) -> CompatibilityScoreResult:
    """
    Calculate the role Compatibility Score.

    Args:
        activity: Role-analysis view of the engineer's activity
        role_query: A RoleQuery, a mapping with its fields, or a bare role name

    Raises:
        UnknownRoleError: If the role is not in the knowledge base
    """
    if isinstance(role_query, str):
        role_query = RoleQuery(role=role_query)
    elif isinstance(role_query, dict):
        role_query = RoleQuery(**role_query)

    scorer = CompatibilityScorer(get_role_profile(role_query.role))
    return scorer.calculate(activity, role_query)
