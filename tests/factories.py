"""Builders for test inputs and pre-computed score results."""
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from wecraft.agents.analyst.compatibility import compatibility_level
from wecraft.models import (
    CodeReview,
    CompatibilityScoreResult,
    ContributionPattern,
    EngineerActivity,
    GitHubAccount,
    GitHubActivity,
    ImpactScoreResult,
    Issue,
    MergedPR,
    PRAnalysis,
    RepositoryAnalysis,
    RepositoryContribution,
    ReviewAnalysis,
    TrustScoreResult,
)
from wecraft.models.github import ActivitySpan, FileChange
from wecraft.models.scores import (
    AccountAuthenticity,
    AccountAuthenticityBreakdown,
    AntiGamingBreakdown,
    AntiGamingScore,
    ArchitecturePatternsBreakdown,
    CollaborationBreakdown,
    CollaborationComponent,
    CollaborationSignals,
    CollaborationSignalsBreakdown,
    CompatibilityBreakdown,
    CompatibilityExplanation,
    CompatibilitySignals,
    ContributionAuthenticity,
    ContributionAuthenticityBreakdown,
    ContributionDepthBreakdown,
    ImpactComponents,
    ImpactExplainability,
    ImpactSignals,
    LongevityBreakdown,
    LongevityComponent,
    NegativeSignals,
    PRImpactBreakdown,
    PRImpactComponent,
    QualityBreakdown,
    QualityComponent,
    SpamDetection,
    TechnologyStackBreakdown,
    TrustComponents,
    TrustSignals,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
USERNAME = "octocat"


# ============================================================================
# Trust inputs
# ============================================================================

def make_account(age_days: float = 730, complete_profile: bool = True, **overrides) -> GitHubAccount:
    fields = dict(
        username=USERNAME,
        created_at=NOW - timedelta(days=age_days),
        public_repos=20,
        followers=50,
        following=10,
    )
    if complete_profile:
        fields.update(
            bio="Distributed systems engineer",
            location="Berlin",
            company="Acme",
            website="https://octocat.dev",
            email="octocat@example.com",
        )
    fields.update(overrides)
    return GitHubAccount(**fields)


def make_pattern(**overrides) -> ContributionPattern:
    """A healthy, long-lived contribution pattern ending at NOW."""
    fields = dict(
        total_prs=40,
        merged_prs=40,
        self_merged_prs=2,
        fork_prs=4,
        original_repo_prs=36,
        fork_only_repos=[],
        original_repo_contributions=36,
        first_contribution_date=NOW - timedelta(days=500),
        last_contribution_date=NOW,
        contribution_days=120,
        contribution_months=16,
        average_prs_per_day=0.08,
        max_prs_in_single_day=3,
        unique_repositories=12,
        repositories_with_multiple_prs=8,
        repositories_with_maintainer_interaction=10,
        reviews_given=30,
        reviews_received=35,
        maintainer_reviews=20,
        issues_opened=10,
        issues_with_prs=6,
        identical_commit_messages=0,
        unique_collaborators=25,
        maintainer_interactions=38,
        cross_repository_collaborations=10,
    )
    fields.update(overrides)
    return ContributionPattern(**fields)


def make_fork_farming_pattern() -> ContributionPattern:
    return make_pattern(
        total_prs=10,
        merged_prs=10,
        self_merged_prs=0,
        fork_prs=10,
        original_repo_prs=0,
        fork_only_repos=["someone/fork-a", "someone/fork-b"],
        original_repo_contributions=0,
        maintainer_interactions=10,
    )


# ============================================================================
# Impact inputs
# ============================================================================

def make_merged_pr(
    pr_id: str,
    repository: str = "acme/api",
    merged_at: datetime = NOW,
    author: str = USERNAME,
    merged_by: str = "maintainer",
    **overrides,
) -> MergedPR:
    fields = dict(
        id=pr_id,
        repository=repository,
        merged_at=merged_at,
        author=author,
        merged_by=merged_by,
        review_comments_received=3,
        review_rounds=2,
        files_changed=4,
        directories_touched=2,
        is_maintainer_merge=author != merged_by,
        is_fork=False,
        time_to_merge=24.0,
    )
    fields.update(overrides)
    return MergedPR(**fields)


def make_review(review_id: str, reviewer: str, reviewee: str, repository: str = "acme/api",
                reviewed_at: datetime = NOW, comment_count: int = 3) -> CodeReview:
    return CodeReview(
        id=review_id,
        repository=repository,
        pr_id=f"pr-{review_id}",
        reviewed_at=reviewed_at,
        reviewer=reviewer,
        reviewee=reviewee,
        comment_count=comment_count,
    )


def make_activity(prs: Optional[List[MergedPR]] = None, **overrides) -> GitHubActivity:
    prs = prs or []
    fields = dict(merged_prs=prs)
    if prs:
        dates = sorted(pr.merged_at for pr in prs)
        fields["activity_span"] = ActivitySpan(first_pr_date=dates[0], last_pr_date=dates[-1])
    fields.update(overrides)
    return GitHubActivity(**fields)


def make_active_engineer_activity(months: int = 24, repos: int = 6) -> GitHubActivity:
    """Two maintainer-merged PRs a month, spread across several repositories."""
    prs = []
    for month in range(months):
        for n in range(2):
            prs.append(make_merged_pr(
                f"pr-{month}-{n}",
                repository=f"acme/repo-{(month + n) % repos}",
                merged_at=NOW - timedelta(days=30 * month + 7 * n),
            ))
    reviews_given = [make_review(f"g{i}", USERNAME, f"peer{i % 5}") for i in range(20)]
    reviews_received = [make_review(f"r{i}", f"peer{i % 5}", USERNAME) for i in range(20)]
    issues = [
        Issue(id=f"i{i}", repository="acme/repo-0", opened_at=NOW - timedelta(days=10 * i),
              author=USERNAME, led_to_merged_pr=i % 2 == 0)
        for i in range(6)
    ]
    repositories = [
        RepositoryContribution(repository=f"acme/repo-{i}", merged_pr_count=8, contributor_count=5, maintainer_count=2)
        for i in range(repos)
    ]
    return make_activity(
        prs,
        reviews_given=reviews_given,
        reviews_received=reviews_received,
        issues=issues,
        repositories=repositories,
    )


# ============================================================================
# Compatibility inputs
# ============================================================================

def make_file(path: str) -> FileChange:
    directory, _, name = path.rpartition("/")
    extension = "." + name.rsplit(".", 1)[1].lower() if "." in name else ""
    return FileChange(file_path=path, file_extension=extension, directory=directory)


def make_pr_analysis(pr_id: str, paths: List[str], title: str = "", **overrides) -> PRAnalysis:
    fields = dict(
        id=pr_id,
        repository="acme/app",
        title=title,
        merged_at=NOW,
        files_changed=[make_file(path) for path in paths],
    )
    fields.update(overrides)
    return PRAnalysis(**fields)


def make_backend_activity(pr_count: int = 6) -> EngineerActivity:
    prs = [
        make_pr_analysis(
            f"b{i}",
            ["services/orders/api/handlers.py", "services/orders/db/models.py"],
            title="Add order service endpoint",
            languages=["python"],
            is_api_change=True,
            is_database_change=True,
        )
        for i in range(pr_count)
    ]
    repositories = [
        RepositoryAnalysis(
            repository="acme/orders",
            primary_language="Python",
            languages={"Python": 85.0, "Go": 15.0},
            topics=["microservices", "api"],
            description="Order service",
        )
    ]
    reviews = [ReviewAnalysis(repository="acme/orders", pr_id="x1", reviewed_files=["svc/main.go"], languages=["go"])]
    return EngineerActivity(prs=prs, repositories=repositories, code_reviews=reviews)


def make_frontend_activity(pr_count: int = 6) -> EngineerActivity:
    prs = [
        make_pr_analysis(
            f"f{i}",
            ["src/components/react/Button.tsx", "src/styles/button.css"],
            title="Polish button component",
            languages=["typescript"],
            is_ui_change=True,
        )
        for i in range(pr_count)
    ]
    repositories = [
        RepositoryAnalysis(
            repository="acme/web",
            primary_language="TypeScript",
            languages={"TypeScript": 90.0, "CSS": 10.0},
            topics=["react", "frontend"],
            description="Design system",
        )
    ]
    return EngineerActivity(prs=prs, repositories=repositories)


# ============================================================================
# Pre-computed results for the architect agents
# ============================================================================

def make_trust_result(
    total: float,
    is_authentic: Optional[bool] = None,
    red_flags: Optional[List[str]] = None,
    green_flags: Optional[List[str]] = None,
    fork_farming: bool = False,
    **signal_overrides,
) -> TrustScoreResult:
    signals = dict(
        account_age=800.0,
        account_maturity=100.0,
        contribution_span=500.0,
        repository_diversity=60.0,
        maintainer_trust=75.0,
        collaboration_depth=60.0,
        fork_contribution_ratio=0.1,
        original_repo_contribution_ratio=0.9,
    )
    signals.update(signal_overrides)
    return TrustScoreResult(
        total_score=total,
        is_authentic=total >= 60 if is_authentic is None else is_authentic,
        confidence=100.0,
        components=TrustComponents(
            account_authenticity=AccountAuthenticity(
                score=total,
                breakdown=AccountAuthenticityBreakdown(account_age=800, account_maturity=100, profile_completeness=100),
            ),
            contribution_authenticity=ContributionAuthenticity(
                score=total,
                breakdown=ContributionAuthenticityBreakdown(
                    contribution_span=500, repository_diversity=60, maintainer_trust=75, temporal_consistency=80,
                ),
            ),
            collaboration_signals=CollaborationSignals(
                score=total,
                breakdown=CollaborationSignalsBreakdown(
                    unique_collaborators=12, maintainer_interactions=20, cross_repo_collaborations=5,
                    review_reciprocity=80,
                ),
            ),
            anti_gaming_score=AntiGamingScore(
                score=total,
                breakdown=AntiGamingBreakdown(
                    spam_detection=100, fork_farming_penalty=0, pattern_anomalies=100, behavioral_red_flags=100,
                ),
            ),
        ),
        signals=TrustSignals(**signals),
        spam_detection=SpamDetection(fork_farming=fork_farming),
        red_flags=red_flags or [],
        green_flags=green_flags or [],
    )


def make_compatibility_result(
    total: float,
    role: str = "backend",
    level: Optional[str] = None,
    technology_mismatch: float = 0.0,
    **signal_overrides,
) -> CompatibilityScoreResult:
    signals = dict(
        technology_stack_match=total,
        domain_contribution_depth=total,
        architecture_pattern_match=total,
        file_type_alignment=total,
        activity_type_match=total,
        repository_type_match=total,
        review_domain_expertise=total,
    )
    signals.update(signal_overrides)
    return CompatibilityScoreResult(
        total_score=total,
        compatibility_level=level or compatibility_level(total),
        signals=CompatibilitySignals(**signals),
        negative_signals=NegativeSignals(
            technology_mismatch=technology_mismatch,
            domain_contradiction=technology_mismatch,
            insufficient_depth=0,
            architecture_mismatch=0,
            technology_overweight=0,
        ),
        explanation=CompatibilityExplanation(role=role),
        breakdown=CompatibilityBreakdown(
            technology_stack=TechnologyStackBreakdown(matched_technologies=[".py", "python"], score=signals["technology_stack_match"]),
            contribution_depth=ContributionDepthBreakdown(relevant_prs=8, total_prs=10, score=signals["domain_contribution_depth"]),
            architecture_patterns=ArchitecturePatternsBreakdown(detected_patterns=[], score=signals["architecture_pattern_match"]),
        ),
    )


def make_impact_result(total: float, total_merged_prs: int = 30, active_repositories: int = 5) -> ImpactScoreResult:
    return ImpactScoreResult(
        total_score=total,
        components=ImpactComponents(
            pr_impact=PRImpactComponent(
                score=total,
                breakdown=PRImpactBreakdown(
                    merged_pr_count=total, review_engagement=60, acceptance_rate=100, repo_diversity=50,
                    maintainer_trust=90,
                ),
            ),
            collaboration=CollaborationComponent(
                score=total,
                breakdown=CollaborationBreakdown(
                    cross_repo_contributions=60, review_reciprocity=80, issue_engagement=50, team_participation=100,
                ),
            ),
            longevity=LongevityComponent(
                score=total,
                breakdown=LongevityBreakdown(activity_span=24, consistency=90, temporal_distribution=100),
            ),
            quality=QualityComponent(
                score=total,
                breakdown=QualityBreakdown(
                    review_depth=66, maintainer_trust=90, contribution_complexity=60, anti_spam_score=100,
                ),
            ),
        ),
        signals=ImpactSignals(
            total_merged_prs=total_merged_prs,
            self_merged_prs=0,
            spam_prs=0,
            active_repositories=active_repositories,
            activity_span_months=24.0,
        ),
        explainability=ImpactExplainability(),
    )
