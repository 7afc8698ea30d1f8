"""
Canonical GitHub activity records.

These are produced by the external fetch/normalize layer (or derived from
each other by the researcher agent) and consumed read-only by the score
calculators. All records are immutable.
"""
from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so all arithmetic is offset-aware."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Record(BaseModel):
    """Base for all frozen activity records."""

    model_config = ConfigDict(frozen=True)

    @field_validator("*", mode="after")
    @classmethod
    def _normalize_datetimes(cls, value):
        if isinstance(value, datetime):
            return as_utc(value)
        return value


# ============================================================================
# Account
# ============================================================================

class GitHubAccount(Record):
    """Snapshot of a GitHub user profile."""
    username: str
    created_at: datetime
    public_repos: int = Field(0, ge=0)
    followers: int = Field(0, ge=0)
    following: int = Field(0, ge=0)
    bio: Optional[str] = None
    location: Optional[str] = None
    company: Optional[str] = None
    website: Optional[str] = None
    email: Optional[str] = None
    is_verified: bool = False
    fetched_at: Optional[datetime] = None  # when this snapshot was taken


# ============================================================================
# Impact inputs
# ============================================================================

class MergedPR(Record):
    """A merged pull request authored by the engineer."""
    id: str
    repository: str
    merged_at: datetime
    merged_by: str
    author: str
    review_comments_received: int = Field(0, ge=0)
    review_rounds: int = Field(0, ge=0)
    files_changed: int = Field(0, ge=0)
    directories_touched: int = Field(0, ge=0)
    is_maintainer_merge: bool = False
    is_fork: bool = False
    time_to_merge: float = 0.0  # hours

    @property
    def is_self_merged(self) -> bool:
        return self.author == self.merged_by


class CodeReview(Record):
    """A review given or received by the engineer."""
    id: str
    repository: str
    pr_id: str
    reviewed_at: datetime
    reviewer: str
    reviewee: str
    comment_count: int = Field(0, ge=0)


class Issue(Record):
    id: str
    repository: str
    opened_at: datetime
    author: str
    led_to_merged_pr: bool = False
    comment_count: int = Field(0, ge=0)


class RepositoryContribution(Record):
    repository: str
    merged_pr_count: int = Field(0, ge=0)
    is_fork: bool = False
    contributor_count: int = Field(0, ge=0)
    maintainer_count: int = Field(0, ge=0)


class ActivitySpan(Record):
    first_pr_date: datetime
    last_pr_date: datetime


class GitHubActivity(Record):
    """Full activity bundle consumed by the impact calculator."""
    merged_prs: List[MergedPR] = Field(default_factory=list)
    reviews_given: List[CodeReview] = Field(default_factory=list)
    reviews_received: List[CodeReview] = Field(default_factory=list)
    issues: List[Issue] = Field(default_factory=list)
    repositories: List[RepositoryContribution] = Field(default_factory=list)
    activity_span: Optional[ActivitySpan] = None
    fetched_at: Optional[datetime] = None  # when this snapshot was taken


# ============================================================================
# Trust inputs
# ============================================================================

class ContributionPattern(Record):
    """
    Aggregated statistics over an engineer's PR, review and issue history.

    Every field defaults to zero/empty, so ``ContributionPattern()`` is the
    pattern of an engineer with no public activity.
    """
    # PR counts
    total_prs: int = Field(0, ge=0)
    merged_prs: int = Field(0, ge=0)
    self_merged_prs: int = Field(0, ge=0)

    # Fork vs original repositories
    fork_prs: int = Field(0, ge=0)
    original_repo_prs: int = Field(0, ge=0)
    fork_only_repos: List[str] = Field(default_factory=list)
    original_repo_contributions: int = Field(0, ge=0)

    # Temporal patterns
    first_contribution_date: Optional[datetime] = None
    last_contribution_date: Optional[datetime] = None
    contribution_days: int = Field(0, ge=0)
    contribution_months: int = Field(0, ge=0)
    average_prs_per_day: float = Field(0.0, ge=0)
    max_prs_in_single_day: int = Field(0, ge=0)

    # Repository patterns
    unique_repositories: int = Field(0, ge=0)
    repositories_with_multiple_prs: int = Field(0, ge=0)
    repositories_with_maintainer_interaction: int = Field(0, ge=0)

    # Reviews
    reviews_given: int = Field(0, ge=0)
    reviews_received: int = Field(0, ge=0)
    maintainer_reviews: int = Field(0, ge=0)

    # Issues
    issues_opened: int = Field(0, ge=0)
    issues_with_prs: int = Field(0, ge=0)

    # Commit messages (message -> occurrences)
    commit_message_patterns: Dict[str, int] = Field(default_factory=dict)
    identical_commit_messages: int = Field(0, ge=0)

    # Collaboration
    unique_collaborators: int = Field(0, ge=0)
    maintainer_interactions: int = Field(0, ge=0)
    cross_repository_collaborations: int = Field(0, ge=0)

    @property
    def contribution_span_days(self) -> float:
        if not self.first_contribution_date or not self.last_contribution_date:
            return 0.0
        delta = self.last_contribution_date - self.first_contribution_date
        return max(delta.total_seconds() / 86400, 0.0)


# ============================================================================
# Compatibility inputs
# ============================================================================

class FileChange(Record):
    file_path: str
    file_extension: str = ""
    change_type: str = "modified"  # added | modified | deleted
    lines_added: int = Field(0, ge=0)
    lines_deleted: int = Field(0, ge=0)
    directory: str = ""


class PRAnalysis(Record):
    """A pull request with per-file detail and detected change types."""
    id: str
    repository: str
    title: str = ""
    body: Optional[str] = None
    merged_at: datetime
    files_changed: List[FileChange] = Field(default_factory=list)
    languages: List[str] = Field(default_factory=list)
    directories: List[str] = Field(default_factory=list)
    is_infrastructure_change: bool = False
    is_api_change: bool = False
    is_ui_change: bool = False
    is_database_change: bool = False
    is_config_change: bool = False
    is_test_change: bool = False
    is_documentation_change: bool = False

    @property
    def text(self) -> str:
        return f"{self.title} {self.body or ''}".lower()


class IssueAnalysis(Record):
    id: str
    repository: str
    title: str = ""
    body: Optional[str] = None
    labels: List[str] = Field(default_factory=list)
    is_bug: bool = False
    is_feature: bool = False
    is_infrastructure: bool = False
    is_security: bool = False

    @property
    def text(self) -> str:
        return f"{self.title} {self.body or ''}".lower()


class RepositoryAnalysis(Record):
    repository: str
    is_fork: bool = False
    primary_language: str = ""
    languages: Dict[str, float] = Field(default_factory=dict)  # language -> percentage
    topics: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    stars: int = Field(0, ge=0)
    is_archived: bool = False

    @property
    def text(self) -> str:
        return f"{self.description or ''} {' '.join(self.topics)}".lower()


class ReviewAnalysis(Record):
    repository: str
    pr_id: str
    reviewed_files: List[str] = Field(default_factory=list)
    languages: List[str] = Field(default_factory=list)


class EngineerActivity(Record):
    """Role-analysis view of an engineer's activity."""
    prs: List[PRAnalysis] = Field(default_factory=list)
    issues: List[IssueAnalysis] = Field(default_factory=list)
    repositories: List[RepositoryAnalysis] = Field(default_factory=list)
    code_reviews: List[ReviewAnalysis] = Field(default_factory=list)
