"""
Impact Scorer - The Analyst Agent ("What has this engineer shipped?")

Impact is measured on merged pull requests only, after two filters:
self-merged PRs are dropped first, then spam PRs (too small, or merged on
a day with an implausible number of merges) are dropped from what is left.
Raw commit counts, lines of code and streaks are never considered.

Author: Wecraft
"""
import logging
from collections import Counter
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from ...models.config import ConfigOverride, ImpactScoreConfig, resolve_config
from ...models.github import CodeReview, GitHubActivity, Issue, MergedPR, RepositoryContribution, as_utc
from ...models.scores import (
    ActivityEvent,
    CollaborationBreakdown,
    CollaborationComponent,
    ImpactComponents,
    ImpactExplainability,
    ImpactScoreResult,
    ImpactSignals,
    LongevityBreakdown,
    LongevityComponent,
    Penalty,
    PRImpactBreakdown,
    PRImpactComponent,
    QualityBreakdown,
    QualityComponent,
    RepoContribution,
)
from ..utils import DAYS_PER_MONTH, clamp, days_between, log_scaled, safe_ratio

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class ImpactScorer:
    """
    Calculates the Impact Score (0-100) from merged PR activity.

    Components:
    - PR Impact: time-decayed merged PR count, review engagement, diversity
    - Collaboration: cross-repo work, review reciprocity, issues, team repos
    - Longevity: activity span, monthly consistency, years active
    - Quality: review rounds, maintainer merges, complexity, fork penalty
    """

    TOP_REPOS_LIMIT = 10
    RECENT_ACTIVITY_LIMIT = 10

    # Normalization caps
    DECAYED_PR_SATURATION = 10
    REVIEW_COMMENTS_SATURATION = 5
    SPAN_MONTHS_SATURATION = 24
    YEARS_SATURATION = 3
    REVIEW_ROUNDS_SATURATION = 3
    COMPLEXITY_SATURATION = 10

    def __init__(self, config: Optional[ImpactScoreConfig] = None):
        self.config = config or ImpactScoreConfig()

    def calculate(self, activity: GitHubActivity, as_of: Optional[datetime] = None) -> ImpactScoreResult:
        """
        Calculate the impact score.

        Args:
            activity: Full GitHub activity bundle
            as_of: Reference time for time decay. Defaults to the activity
                snapshot time, then the latest merge in the activity.

        Returns:
            Immutable ImpactScoreResult
        """
        reference = as_utc(as_of) if as_of else self._default_reference(activity)

        valid_prs, self_merged = self._filter_self_merged(activity.merged_prs)
        clean_prs, spam = self._filter_spam(valid_prs)

        logger.debug(
            "impact filters: %d merged, %d self-merged, %d spam, %d clean",
            len(activity.merged_prs), len(self_merged), len(spam), len(clean_prs),
        )

        span_months = self._span_months(activity)

        pr_impact = self._calculate_pr_impact(clean_prs, activity.reviews_received, reference)
        collaboration = self._calculate_collaboration(
            clean_prs,
            activity.reviews_given,
            activity.reviews_received,
            activity.issues,
            activity.repositories,
        )
        longevity = self._calculate_longevity(clean_prs, span_months)
        quality = self._calculate_quality(clean_prs)

        weights = self.config.weights
        total_score = clamp(
            pr_impact.score * weights.pr_impact +
            collaboration.score * weights.collaboration +
            longevity.score * weights.longevity +
            quality.score * weights.quality
        )

        logger.debug(
            "impact score %.1f (pr=%.1f collaboration=%.1f longevity=%.1f quality=%.1f)",
            total_score, pr_impact.score, collaboration.score, longevity.score, quality.score,
        )

        return ImpactScoreResult(
            total_score=total_score,
            components=ImpactComponents(
                pr_impact=pr_impact,
                collaboration=collaboration,
                longevity=longevity,
                quality=quality,
            ),
            signals=ImpactSignals(
                total_merged_prs=len(activity.merged_prs),
                self_merged_prs=len(self_merged),
                spam_prs=len(spam),
                active_repositories=len({pr.repository for pr in clean_prs}),
                activity_span_months=span_months,
            ),
            explainability=self._build_explainability(clean_prs, self_merged, spam, reference),
        )

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    @staticmethod
    def _filter_self_merged(prs: List[MergedPR]) -> Tuple[List[MergedPR], List[MergedPR]]:
        valid, self_merged = [], []
        for pr in prs:
            (self_merged if pr.is_self_merged else valid).append(pr)
        return valid, self_merged

    def _filter_spam(self, prs: List[MergedPR]) -> Tuple[List[MergedPR], List[MergedPR]]:
        """Drop PRs below the minimum size or merged on an over-busy UTC day."""
        per_day = Counter(pr.merged_at.date() for pr in prs)

        valid, spam = [], []
        for pr in prs:
            if pr.files_changed < self.config.min_pr_size:
                spam.append(pr)
            elif per_day[pr.merged_at.date()] > self.config.max_pr_frequency:
                spam.append(pr)
            else:
                valid.append(pr)
        return valid, spam

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def _calculate_pr_impact(
        self,
        prs: List[MergedPR],
        reviews_received: List[CodeReview],
        reference: datetime,
    ) -> PRImpactComponent:
        if not prs:
            return PRImpactComponent(
                score=0.0,
                breakdown=PRImpactBreakdown(
                    merged_pr_count=0.0,
                    review_engagement=0.0,
                    acceptance_rate=0.0,
                    repo_diversity=0.0,
                    maintainer_trust=0.0,
                ),
            )

        decayed_count = sum(self._time_decay(pr, reference) for pr in prs)
        pr_count_score = min(decayed_count / self.DECAYED_PR_SATURATION, 1.0) * 100

        total_comments = sum(review.comment_count for review in reviews_received)
        avg_comments = safe_ratio(total_comments, len(prs))
        review_engagement = min(avg_comments / self.REVIEW_COMMENTS_SATURATION, 1.0) * 100

        # Only merged PRs are ever considered
        acceptance_rate = 100.0

        repo_diversity = log_scaled(len({pr.repository for pr in prs}), 50)
        maintainer_trust = self._maintainer_merge_ratio(prs)

        score = (
            pr_count_score * 0.3 +
            review_engagement * 0.25 +
            acceptance_rate * 0.15 +
            repo_diversity * 0.15 +
            maintainer_trust * 0.15
        )

        return PRImpactComponent(
            score=clamp(score),
            breakdown=PRImpactBreakdown(
                merged_pr_count=pr_count_score,
                review_engagement=review_engagement,
                acceptance_rate=acceptance_rate,
                repo_diversity=repo_diversity,
                maintainer_trust=maintainer_trust,
            ),
        )

    @staticmethod
    def _calculate_collaboration(
        prs: List[MergedPR],
        reviews_given: List[CodeReview],
        reviews_received: List[CodeReview],
        issues: List[Issue],
        repositories: List[RepositoryContribution],
    ) -> CollaborationComponent:
        if not prs:
            return CollaborationComponent(
                score=0.0,
                breakdown=CollaborationBreakdown(
                    cross_repo_contributions=0.0,
                    review_reciprocity=0.0,
                    issue_engagement=0.0,
                    team_participation=0.0,
                ),
            )

        cross_repo = log_scaled(len({pr.repository for pr in prs}), 20)

        given, received = len(reviews_given), len(reviews_received)
        reciprocity = safe_ratio(min(given, received), max(given, received)) * 100

        issue_engagement = safe_ratio(sum(1 for issue in issues if issue.led_to_merged_pr), len(issues)) * 100

        team_repos = sum(1 for repo in repositories if repo.contributor_count > 1)
        team_participation = safe_ratio(team_repos, len(repositories)) * 100

        score = (
            cross_repo * 0.3 +
            reciprocity * 0.3 +
            issue_engagement * 0.2 +
            team_participation * 0.2
        )

        return CollaborationComponent(
            score=clamp(score),
            breakdown=CollaborationBreakdown(
                cross_repo_contributions=cross_repo,
                review_reciprocity=reciprocity,
                issue_engagement=issue_engagement,
                team_participation=team_participation,
            ),
        )

    def _calculate_longevity(self, prs: List[MergedPR], span_months: float) -> LongevityComponent:
        if not prs:
            return LongevityComponent(
                score=0.0,
                breakdown=LongevityBreakdown(activity_span=0.0, consistency=0.0, temporal_distribution=0.0),
            )

        span_score = min(span_months / self.SPAN_MONTHS_SATURATION, 1.0) * 100

        active_months = {(pr.merged_at.year, pr.merged_at.month) for pr in prs}
        consistency = 0.0
        if span_months > 0:
            consistency = min(len(active_months) / max(span_months, 1.0) * 100, 100.0)

        years = {pr.merged_at.year for pr in prs}
        temporal_distribution = min(len(years) / self.YEARS_SATURATION, 1.0) * 100

        score = span_score * 0.4 + consistency * 0.35 + temporal_distribution * 0.25

        return LongevityComponent(
            score=clamp(score),
            breakdown=LongevityBreakdown(
                activity_span=span_months,
                consistency=consistency,
                temporal_distribution=temporal_distribution,
            ),
        )

    def _calculate_quality(self, prs: List[MergedPR]) -> QualityComponent:
        if not prs:
            return QualityComponent(
                score=0.0,
                breakdown=QualityBreakdown(
                    review_depth=0.0,
                    maintainer_trust=0.0,
                    contribution_complexity=0.0,
                    anti_spam_score=0.0,
                ),
            )

        count = len(prs)
        avg_rounds = sum(pr.review_rounds for pr in prs) / count
        review_depth = min(avg_rounds / self.REVIEW_ROUNDS_SATURATION, 1.0) * 100

        maintainer_trust = self._maintainer_merge_ratio(prs)

        avg_files = sum(pr.files_changed for pr in prs) / count
        avg_dirs = sum(pr.directories_touched for pr in prs) / count
        complexity = min((avg_files + avg_dirs) / self.COMPLEXITY_SATURATION, 1.0) * 100

        # Up to 50 points off for fork PRs
        fork_penalty = sum(1 for pr in prs if pr.is_fork) / count * 50
        anti_spam = max(100 - fork_penalty, 0.0)

        score = (
            review_depth * 0.3 +
            maintainer_trust * 0.3 +
            complexity * 0.25 +
            anti_spam * 0.15
        )

        return QualityComponent(
            score=clamp(score),
            breakdown=QualityBreakdown(
                review_depth=review_depth,
                maintainer_trust=maintainer_trust,
                contribution_complexity=complexity,
                anti_spam_score=anti_spam,
            ),
        )

    # ------------------------------------------------------------------
    # Explainability
    # ------------------------------------------------------------------

    def _build_explainability(
        self,
        clean_prs: List[MergedPR],
        self_merged: List[MergedPR],
        spam: List[MergedPR],
        reference: datetime,
    ) -> ImpactExplainability:
        per_repo = Counter(pr.repository for pr in clean_prs)
        # Ties broken by repository name
        ranked = sorted(per_repo.items(), key=lambda item: (-item[1], item[0]))[:self.TOP_REPOS_LIMIT]
        top_repos = [RepoContribution(repo=repo, pr_count=count, score=count * 10) for repo, count in ranked]

        recent = sorted(clean_prs, key=lambda pr: (pr.merged_at, pr.id), reverse=True)[:self.RECENT_ACTIVITY_LIMIT]
        recent_activity = [
            ActivityEvent(
                date=pr.merged_at,
                event=f"Merged PR in {pr.repository}",
                impact=self._time_decay(pr, reference) * 10,
            )
            for pr in recent
        ]

        # Penalties record that filtering happened; they carry no score delta
        penalties = [
            Penalty(reason="Self-merged PRs excluded", count=len(self_merged), impact=0.0),
            Penalty(reason="Spam PRs filtered", count=len(spam), impact=0.0),
        ]

        return ImpactExplainability(
            top_contributing_repos=top_repos,
            recent_activity=recent_activity,
            penalties=penalties,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _time_decay(self, pr: MergedPR, reference: datetime) -> float:
        months_ago = max(days_between(pr.merged_at, reference), 0.0) / DAYS_PER_MONTH
        return self.config.time_decay_factor ** months_ago

    @staticmethod
    def _maintainer_merge_ratio(prs: List[MergedPR]) -> float:
        return safe_ratio(sum(1 for pr in prs if pr.is_maintainer_merge), len(prs)) * 100

    @staticmethod
    def _span_months(activity: GitHubActivity) -> float:
        span = activity.activity_span
        if span is None:
            return 0.0
        return max(days_between(span.first_pr_date, span.last_pr_date), 0.0) / DAYS_PER_MONTH

    @staticmethod
    def _default_reference(activity: GitHubActivity) -> datetime:
        if activity.fetched_at is not None:
            return activity.fetched_at
        if activity.merged_prs:
            return max(pr.merged_at for pr in activity.merged_prs)
        if activity.activity_span is not None:
            return activity.activity_span.last_pr_date
        return EPOCH


def compute_impact_score(
    activity: GitHubActivity,
    config: ConfigOverride = None,
    as_of: Optional[datetime] = None,
) -> ImpactScoreResult:
    """
    Calculate the Impact Score.

    Args:
        activity: Full GitHub activity bundle
        config: Optional partial override of ImpactScoreConfig defaults
        as_of: Optional reference time for time decay

    Raises:
        InvalidConfigError: If the override fails validation
    """
    scorer = ImpactScorer(resolve_config(ImpactScoreConfig, config))
    return scorer.calculate(activity, as_of=as_of)
