"""
Pydantic records shared by the scoring agents.

- github: canonical activity inputs (account, PRs, reviews, issues, repositories)
- roles: role queries and the role knowledge-base profile shape
- config: calculator configs and override resolution
- scores: immutable score results, recruiter/engineer views, explanations
"""
from .config import (
    ImpactScoreConfig,
    RecruiterMatchScoreConfig,
    TrustScoreConfig,
    resolve_config,
)
from .github import (
    ActivitySpan,
    CodeReview,
    ContributionPattern,
    EngineerActivity,
    FileChange,
    GitHubAccount,
    GitHubActivity,
    Issue,
    IssueAnalysis,
    MergedPR,
    PRAnalysis,
    RepositoryAnalysis,
    RepositoryContribution,
    ReviewAnalysis,
)
from .roles import RoleProfile, RoleQuery
from .scores import (
    CompatibilityScoreResult,
    EngineerView,
    ImpactScoreResult,
    MatchExplanation,
    RecruiterMatchScoreResult,
    RecruiterView,
    TrustScoreResult,
)

__all__ = [
    "ActivitySpan",
    "CodeReview",
    "CompatibilityScoreResult",
    "ContributionPattern",
    "EngineerActivity",
    "EngineerView",
    "FileChange",
    "GitHubAccount",
    "GitHubActivity",
    "ImpactScoreConfig",
    "ImpactScoreResult",
    "Issue",
    "IssueAnalysis",
    "MatchExplanation",
    "MergedPR",
    "PRAnalysis",
    "RecruiterMatchScoreConfig",
    "RecruiterMatchScoreResult",
    "RecruiterView",
    "RepositoryAnalysis",
    "RepositoryContribution",
    "ReviewAnalysis",
    "RoleProfile",
    "RoleQuery",
    "TrustScoreConfig",
    "TrustScoreResult",
    "resolve_config",
]
