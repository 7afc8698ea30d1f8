"""
Trust Scorer - The Analyst Agent ("Is this engineer real?")

This module decides whether an engineer's public activity is authentic by
combining four weighted components:
1. Account Authenticity (25%): account age, maturity, profile completeness
2. Contribution Authenticity (35%): span, repository diversity, maintainer trust
3. Collaboration Signals (25%): collaborators, maintainer interactions, reviews
4. Anti-Gaming (15%): spam, fork farming and behavioral anomaly penalties

Author: Wecraft
"""
import logging
from datetime import datetime
from typing import List, Optional

from ...models.config import ConfigOverride, TrustScoreConfig, resolve_config
from ...models.github import ContributionPattern, GitHubAccount, as_utc
from ...models.scores import (
    AccountAuthenticity,
    AccountAuthenticityBreakdown,
    AntiGamingBreakdown,
    AntiGamingScore,
    CollaborationSignals,
    CollaborationSignalsBreakdown,
    ContributionAuthenticity,
    ContributionAuthenticityBreakdown,
    SpamDetection,
    TrustComponents,
    TrustScoreResult,
    TrustSignals,
)
from ..utils import clamp, days_between, log_scaled, safe_ratio

logger = logging.getLogger(__name__)


class TrustScorer:
    """
    Calculates the Trust / Authenticity Score (0-100).

    The scorer is configured once and is stateless across calls.
    """

    # Fixed deductions from the spam sub-score, per detected flag
    SPAM_PENALTIES = {
        "excessive_daily_prs": 30,
        "identical_commit_messages": 25,
        "fork_farming": 40,
        "self_merge_farming": 30,
        "repository_farming": 20,
    }

    # Anti-gaming sub-score blend
    ANTI_GAMING_WEIGHTS = {
        "spam_detection": 0.4,
        "fork_farming": 0.3,
        "pattern_anomalies": 0.2,
        "behavioral_red_flags": 0.1,
    }

    AUTHENTIC_THRESHOLD = 60
    MAX_RED_FLAGS = 3

    def __init__(self, config: Optional[TrustScoreConfig] = None):
        self.config = config or TrustScoreConfig()

    def calculate(
        self,
        account: GitHubAccount,
        pattern: ContributionPattern,
        as_of: Optional[datetime] = None,
    ) -> TrustScoreResult:
        """
        Calculate the trust score for one engineer.

        Args:
            account: Profile snapshot
            pattern: Aggregated contribution statistics
            as_of: Reference time for account age. Defaults to the account
                snapshot time, then the last contribution date, then the account
                creation date.

        Returns:
            Immutable TrustScoreResult
        """
        reference = as_utc(as_of) if as_of else self._default_reference(account, pattern)
        account_age = max(days_between(account.created_at, reference), 0.0)
        contribution_span = pattern.contribution_span_days

        spam = self._detect_spam_patterns(pattern)

        account_auth = self._calculate_account_authenticity(account, pattern, account_age, contribution_span)
        contribution_auth = self._calculate_contribution_authenticity(pattern, contribution_span)
        collaboration = self._calculate_collaboration_signals(pattern)
        anti_gaming = self._calculate_anti_gaming_score(pattern, spam)

        weights = self.config.weights
        total_score = clamp(
            account_auth.score * weights.account_authenticity +
            contribution_auth.score * weights.contribution_authenticity +
            collaboration.score * weights.collaboration_signals +
            anti_gaming.score * weights.anti_gaming_score
        )

        fork_ratio = safe_ratio(pattern.fork_prs, pattern.total_prs)
        original_ratio = safe_ratio(pattern.original_repo_contributions, pattern.total_prs)
        maintainer_trust = self._maintainer_trust(pattern)

        signals = TrustSignals(
            account_age=account_age,
            account_maturity=account_auth.breakdown.account_maturity,
            contribution_span=contribution_span,
            repository_diversity=contribution_auth.breakdown.repository_diversity,
            maintainer_trust=maintainer_trust,
            collaboration_depth=collaboration.score,
            fork_contribution_ratio=fork_ratio,
            original_repo_contribution_ratio=original_ratio,
        )

        red_flags = self._build_red_flags(pattern, spam, signals)
        green_flags = self._build_green_flags(signals)

        is_authentic = (
            total_score >= self.AUTHENTIC_THRESHOLD
            and len(red_flags) < self.MAX_RED_FLAGS
            and not spam.fork_farming
        )

        logger.debug(
            "trust score %.1f (account=%.1f contribution=%.1f collaboration=%.1f anti_gaming=%.1f) red_flags=%d",
            total_score, account_auth.score, contribution_auth.score,
            collaboration.score, anti_gaming.score, len(red_flags),
        )

        return TrustScoreResult(
            total_score=total_score,
            is_authentic=is_authentic,
            confidence=self._calculate_confidence(pattern, contribution_span),
            components=TrustComponents(
                account_authenticity=account_auth,
                contribution_authenticity=contribution_auth,
                collaboration_signals=collaboration,
                anti_gaming_score=anti_gaming,
            ),
            signals=signals,
            spam_detection=spam,
            red_flags=red_flags,
            green_flags=green_flags,
        )

    # ------------------------------------------------------------------
    # Spam detection
    # ------------------------------------------------------------------

    def _detect_spam_patterns(self, pattern: ContributionPattern) -> SpamDetection:
        """Pure predicate pass over the contribution pattern."""
        return SpamDetection(
            excessive_daily_prs=pattern.max_prs_in_single_day > self.config.max_prs_per_day,
            identical_commit_messages=pattern.identical_commit_messages >= self.config.identical_message_threshold,
            fork_farming=len(pattern.fork_only_repos) > 0 and pattern.original_repo_contributions == 0,
            self_merge_farming=safe_ratio(pattern.self_merged_prs, pattern.total_prs) > 0.5,
            repository_farming=pattern.unique_repositories > 50 and pattern.repositories_with_multiple_prs < 5,
        )

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def _calculate_account_authenticity(
        self,
        account: GitHubAccount,
        pattern: ContributionPattern,
        account_age: float,
        contribution_span: float,
    ) -> AccountAuthenticity:
        """
        Blend of account age (1 year = 100), maturity (6 months of
        contributions = 100) and profile completeness (20 per field).
        """
        age_score = min(account_age / 365, 1.0) * 100
        if account_age < self.config.min_account_age_days:
            age_score *= 0.3

        maturity = min(contribution_span / 180, 1.0) * 100

        profile_fields = [account.bio, account.location, account.company, account.website, account.email]
        profile_completeness = min(sum(20 for value in profile_fields if value), 100)

        breakdown = AccountAuthenticityBreakdown(
            account_age=account_age,
            account_maturity=maturity,
            profile_completeness=profile_completeness,
        )

        if pattern.total_prs == 0:
            return AccountAuthenticity(score=0.0, breakdown=breakdown)

        score = age_score * 0.4 + maturity * 0.4 + profile_completeness * 0.2
        return AccountAuthenticity(score=clamp(score), breakdown=breakdown)

    def _calculate_contribution_authenticity(
        self,
        pattern: ContributionPattern,
        contribution_span: float,
    ) -> ContributionAuthenticity:
        if pattern.total_prs == 0:
            return ContributionAuthenticity(
                score=0.0,
                breakdown=ContributionAuthenticityBreakdown(
                    contribution_span=0.0,
                    repository_diversity=0.0,
                    maintainer_trust=0.0,
                    temporal_consistency=0.0,
                ),
            )

        span_score = min(contribution_span / 365, 1.0) * 100
        repo_diversity = log_scaled(pattern.unique_repositories, 20)
        maintainer_trust = self._maintainer_trust(pattern)

        # Active months over the span measured in 30-day months
        consistency = 0.0
        if pattern.contribution_months > 0 and contribution_span > 0:
            consistency = min(pattern.contribution_months / (contribution_span / 30) * 100, 100.0)

        diversity_penalty = 0.5 if pattern.unique_repositories < self.config.min_unique_repos else 1.0

        score = (
            span_score * 0.3 +
            repo_diversity * 0.3 * diversity_penalty +
            maintainer_trust * 0.25 +
            consistency * 0.15
        )

        return ContributionAuthenticity(
            score=clamp(score),
            breakdown=ContributionAuthenticityBreakdown(
                contribution_span=contribution_span,
                repository_diversity=repo_diversity,
                maintainer_trust=maintainer_trust,
                temporal_consistency=consistency,
            ),
        )

    def _calculate_collaboration_signals(self, pattern: ContributionPattern) -> CollaborationSignals:
        breakdown_counts = {
            "unique_collaborators": pattern.unique_collaborators,
            "maintainer_interactions": pattern.maintainer_interactions,
            "cross_repo_collaborations": pattern.cross_repository_collaborations,
        }
        if pattern.total_prs == 0:
            return CollaborationSignals(
                score=0.0,
                breakdown=CollaborationSignalsBreakdown(review_reciprocity=0.0, **breakdown_counts),
            )

        collaborator_score = log_scaled(pattern.unique_collaborators, 50)
        maintainer_rate = min(safe_ratio(pattern.maintainer_interactions, pattern.merged_prs) * 100, 100.0)
        cross_repo = min(safe_ratio(pattern.cross_repository_collaborations, pattern.unique_repositories) * 100, 100.0)
        reciprocity = safe_ratio(
            min(pattern.reviews_given, pattern.reviews_received),
            max(pattern.reviews_given, pattern.reviews_received),
        ) * 100

        score = (
            collaborator_score * 0.3 +
            maintainer_rate * 0.3 +
            cross_repo * 0.2 +
            reciprocity * 0.2
        )

        return CollaborationSignals(
            score=clamp(score),
            breakdown=CollaborationSignalsBreakdown(review_reciprocity=reciprocity, **breakdown_counts),
        )

    def _calculate_anti_gaming_score(self, pattern: ContributionPattern, spam: SpamDetection) -> AntiGamingScore:
        """
        Starts every sub-score at 100 and deducts for detected gaming.

        The fork-farming penalty is tiered on the fork PR ratio and inverted
        when blended, so a higher penalty lowers the score.
        """
        if pattern.total_prs == 0:
            return AntiGamingScore(
                score=0.0,
                breakdown=AntiGamingBreakdown(
                    spam_detection=0.0,
                    fork_farming_penalty=0.0,
                    pattern_anomalies=0.0,
                    behavioral_red_flags=0.0,
                ),
            )

        spam_score = 100.0
        for flag, penalty in self.SPAM_PENALTIES.items():
            if getattr(spam, flag):
                spam_score -= penalty
        spam_score = max(spam_score, 0.0)

        fork_ratio = safe_ratio(pattern.fork_prs, pattern.total_prs)
        if fork_ratio == 1.0 and pattern.original_repo_contributions == 0:
            fork_penalty = 100.0
        elif fork_ratio > 0.8:
            fork_penalty = 70.0
        elif fork_ratio > 0.5:
            fork_penalty = 40.0
        else:
            fork_penalty = 0.0

        anomalies = 100.0
        if pattern.average_prs_per_day > 10:
            anomalies -= 20
        if pattern.max_prs_in_single_day > self.config.max_prs_per_day:
            anomalies -= 30
        if pattern.identical_commit_messages > 0:
            anomalies -= 15
        anomalies = max(anomalies, 0.0)

        behavioral = 100.0
        self_merge_ratio = safe_ratio(pattern.self_merged_prs, pattern.total_prs)
        if self_merge_ratio > 0.7:
            behavioral -= 40
        if self_merge_ratio > 0.5:
            behavioral -= 25
        if pattern.unique_repositories > 100 and pattern.repositories_with_multiple_prs < 10:
            behavioral -= 30
        behavioral = max(behavioral, 0.0)

        w = self.ANTI_GAMING_WEIGHTS
        score = (
            spam_score * w["spam_detection"] +
            (100 - fork_penalty) * w["fork_farming"] +
            anomalies * w["pattern_anomalies"] +
            behavioral * w["behavioral_red_flags"]
        )

        return AntiGamingScore(
            score=clamp(score),
            breakdown=AntiGamingBreakdown(
                spam_detection=spam_score,
                fork_farming_penalty=fork_penalty,
                pattern_anomalies=anomalies,
                behavioral_red_flags=behavioral,
            ),
        )

    # ------------------------------------------------------------------
    # Flags and confidence
    # ------------------------------------------------------------------

    def _build_red_flags(
        self,
        pattern: ContributionPattern,
        spam: SpamDetection,
        signals: TrustSignals,
    ) -> List[str]:
        red_flags = []
        if spam.fork_farming:
            red_flags.append("Fork-only contributions detected")
        if spam.self_merge_farming:
            red_flags.append("High rate of self-merged PRs")
        if spam.excessive_daily_prs:
            red_flags.append("Excessive daily PR activity")
        if spam.repository_farming:
            red_flags.append("Repository farming pattern detected")
        if signals.fork_contribution_ratio > 0.8:
            red_flags.append("High fork contribution ratio")
        if signals.account_age < self.config.min_account_age_days:
            red_flags.append("Account too new")
        if pattern.unique_repositories < self.config.min_unique_repos:
            red_flags.append("Insufficient repository diversity")
        return red_flags

    @staticmethod
    def _build_green_flags(signals: TrustSignals) -> List[str]:
        green_flags = []
        if signals.maintainer_trust > 80:
            green_flags.append("High maintainer trust")
        if signals.repository_diversity > 70:
            green_flags.append("Strong repository diversity")
        if signals.collaboration_depth > 70:
            green_flags.append("Active collaboration")
        if signals.contribution_span > 365:
            green_flags.append("Long-term consistent contributions")
        if signals.original_repo_contribution_ratio > 0.7:
            green_flags.append("Primarily original repository contributions")
        return green_flags

    @staticmethod
    def _calculate_confidence(pattern: ContributionPattern, contribution_span: float) -> float:
        """Discount confidence for thin data."""
        confidence = 100.0
        if pattern.total_prs < 5:
            confidence -= 30
        if contribution_span < 30:
            confidence -= 20
        if pattern.unique_repositories < 2:
            confidence -= 25
        return max(confidence, 0.0)

    @staticmethod
    def _default_reference(account: GitHubAccount, pattern: ContributionPattern) -> datetime:
        return account.fetched_at or pattern.last_contribution_date or account.created_at

    @staticmethod
    def _maintainer_trust(pattern: ContributionPattern) -> float:
        """Share of merged PRs merged by someone other than the author."""
        if pattern.merged_prs <= 0:
            return 0.0
        maintainer_merges = max(pattern.merged_prs - pattern.self_merged_prs, 0)
        return min(maintainer_merges / pattern.merged_prs * 100, 100.0)


def compute_trust_score(
    account: GitHubAccount,
    contribution_pattern: ContributionPattern,
    config: ConfigOverride = None,
    as_of: Optional[datetime] = None,
) -> TrustScoreResult:
    """
    Calculate the Trust / Authenticity Score.

    Args:
        account: Profile snapshot
        contribution_pattern: Aggregated contribution statistics
        config: Optional partial override of TrustScoreConfig defaults
        as_of: Optional reference time for account age

    Raises:
        InvalidConfigError: If the override fails validation
    """
    scorer = TrustScorer(resolve_config(TrustScoreConfig, config))
    return scorer.calculate(account, contribution_pattern, as_of=as_of)
