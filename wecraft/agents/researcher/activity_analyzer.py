"""
Activity Analyzer - The Researcher Agent

Derives the records the analyst scorers consume from canonical GitHub
activity. Every function here is a pure derivation: the same activity
always yields the same pattern or analysis.

- build_contribution_pattern: GitHubActivity -> ContributionPattern
- detect_change_types: file paths -> structural PR flags
- build_pr_analysis: raw PR file list -> PRAnalysis

Author: Wecraft
"""
import logging
import posixpath
import re
from collections import Counter
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Union

from ...models.github import (
    ContributionPattern,
    FileChange,
    GitHubAccount,
    GitHubActivity,
    PRAnalysis,
)
from ..utils import days_between

logger = logging.getLogger(__name__)


# Path patterns per PRAnalysis change flag, matched against lowercased paths
CHANGE_TYPE_PATTERNS = {
    "is_infrastructure_change": [
        r"(^|/)dockerfile", r"docker-compose", r"\.tf$", r"\.tfvars$", r"(^|/)terraform/",
        r"(^|/)(k8s|kubernetes|helm|charts|ansible|deploy|deployment|infra)/",
        r"\.github/workflows", r"circleci", r"travis", r"jenkinsfile",
    ],
    "is_api_change": [
        r"(^|/)(api|apis|routes|routers|controllers|endpoints|handlers)/",
        r"\.proto$", r"openapi", r"swagger", r"\.graphql$",
    ],
    "is_ui_change": [
        r"\.(jsx|tsx|vue|svelte|css|scss|sass|less|html)$",
        r"(^|/)(components|pages|views|ui|styles)/",
    ],
    "is_database_change": [
        r"(^|/)(migrations|migrate|alembic|db|database|models|prisma)/",
        r"\.sql$", r"schema\.",
    ],
    "is_config_change": [
        r"\.(ya?ml|toml|ini|cfg|conf|env)$", r"(^|/)config/", r"settings\.",
        r"(^|/)package\.json$", r"(^|/)setup\.cfg$",
    ],
    "is_test_change": [
        r"(^|/)(tests?|__tests__|spec)/", r"(^|/)test_[^/]*$", r"_test\.[a-z]+$",
        r"\.(test|spec)\.[a-z]+$",
    ],
    "is_documentation_change": [
        r"\.(md|rst|adoc)$", r"(^|/)docs?/", r"(^|/)(readme|changelog|contributing|license)",
    ],
}

EXTENSION_LANGUAGES = {
    ".py": "python",
    ".java": "java",
    ".go": "go",
    ".rs": "rust",
    ".rb": "ruby",
    ".php": "php",
    ".scala": "scala",
    ".kt": "kotlin",
    ".cs": "c#",
    ".cpp": "c++",
    ".c": "c",
    ".js": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".html": "html",
    ".css": "css",
    ".scss": "scss",
    ".sass": "sass",
    ".less": "less",
    ".swift": "swift",
    ".dart": "dart",
    ".m": "objective-c",
    ".sql": "sql",
    ".r": "r",
    ".jl": "julia",
    ".sh": "bash",
    ".groovy": "groovy",
    ".yaml": "yaml",
    ".yml": "yaml",
}


def _ordered(values: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(values))


# ============================================================================
# Contribution pattern
# ============================================================================

def build_contribution_pattern(
    activity: GitHubActivity,
    account: Optional[GitHubAccount] = None,
    commit_messages: Optional[Iterable[str]] = None,
) -> ContributionPattern:
    """
    Derive the aggregated contribution statistics for the trust scorer.

    Args:
        activity: Canonical activity bundle
        account: Profile snapshot; its username identifies the engineer.
            Without it the most frequent PR author is used.
        commit_messages: Optional commit messages for duplicate detection

    Returns:
        ContributionPattern
    """
    prs = activity.merged_prs
    username = _resolve_username(activity, account)

    # Per-repository PR tallies
    prs_per_repo = Counter(pr.repository for pr in prs)
    fork_per_repo = Counter(pr.repository for pr in prs if pr.is_fork)
    fork_only_repos = [repo for repo in prs_per_repo if fork_per_repo[repo] == prs_per_repo[repo]]

    maintainer_merged = [pr for pr in prs if not pr.is_self_merged]
    mergers = {pr.merged_by for pr in maintainer_merged}

    # Temporal patterns
    dates = sorted(pr.merged_at for pr in prs)
    first, last = _contribution_bounds(activity, dates)
    span_days = days_between(first, last) if first and last else 0.0
    per_day = Counter(date.date() for date in dates)

    # Repositories touched by PRs or listed as contributions
    repositories = _ordered(list(prs_per_repo) + [repo.repository for repo in activity.repositories])

    # Collaboration
    collaborators = set(mergers)
    collaborators.update(review.reviewer for review in activity.reviews_received)
    collaborators.update(review.reviewee for review in activity.reviews_given)
    collaborators.discard(username)

    collaborative_repos = {pr.repository for pr in maintainer_merged}
    collaborative_repos.update(
        review.repository for review in activity.reviews_received if review.reviewer != username
    )

    messages = Counter(message.strip() for message in (commit_messages or []) if message.strip())

    pattern = ContributionPattern(
        total_prs=len(prs),
        merged_prs=len(prs),
        self_merged_prs=len(prs) - len(maintainer_merged),
        fork_prs=sum(fork_per_repo.values()),
        original_repo_prs=len(prs) - sum(fork_per_repo.values()),
        fork_only_repos=fork_only_repos,
        original_repo_contributions=len(prs) - sum(fork_per_repo.values()),
        first_contribution_date=first,
        last_contribution_date=last,
        contribution_days=len(per_day),
        contribution_months=len({(date.year, date.month) for date in dates}),
        average_prs_per_day=len(prs) / max(span_days, 1.0),
        max_prs_in_single_day=max(per_day.values(), default=0),
        unique_repositories=len(repositories),
        repositories_with_multiple_prs=sum(1 for count in prs_per_repo.values() if count > 1),
        repositories_with_maintainer_interaction=len({pr.repository for pr in maintainer_merged}),
        reviews_given=len(activity.reviews_given),
        reviews_received=len(activity.reviews_received),
        maintainer_reviews=sum(1 for review in activity.reviews_received if review.reviewer in mergers),
        issues_opened=len(activity.issues),
        issues_with_prs=sum(1 for issue in activity.issues if issue.led_to_merged_pr),
        commit_message_patterns=dict(messages),
        identical_commit_messages=sum(count - 1 for count in messages.values() if count > 1),
        unique_collaborators=len(collaborators),
        maintainer_interactions=len(maintainer_merged),
        cross_repository_collaborations=len(collaborative_repos),
    )

    logger.debug(
        "pattern: %d PRs over %d repositories, %d collaborators",
        pattern.total_prs, pattern.unique_repositories, pattern.unique_collaborators,
    )
    return pattern


def _resolve_username(activity: GitHubActivity, account: Optional[GitHubAccount]) -> Optional[str]:
    if account is not None:
        return account.username
    authors = Counter(pr.author for pr in activity.merged_prs)
    if not authors:
        return None
    # Ties go to the first author seen
    return authors.most_common(1)[0][0]


def _contribution_bounds(activity: GitHubActivity, dates: List[datetime]):
    if dates:
        return dates[0], dates[-1]
    if activity.activity_span is not None:
        return activity.activity_span.first_pr_date, activity.activity_span.last_pr_date
    return None, None


# ============================================================================
# Change types and PR analysis
# ============================================================================

def detect_change_types(paths: Iterable[str]) -> Dict[str, bool]:
    """
    Classify a PR's changed paths into structural change flags.

    Args:
        paths: Changed file paths, relative to the repository root

    Returns:
        Mapping of PRAnalysis flag name to whether any path matched it
    """
    lowered = [path.lower().replace("\\", "/") for path in paths]
    return {
        flag: any(re.search(pattern, path) for path in lowered for pattern in patterns)
        for flag, patterns in CHANGE_TYPE_PATTERNS.items()
    }


def _to_file_change(item: Union[str, FileChange]) -> FileChange:
    if isinstance(item, FileChange):
        return item
    path = item.replace("\\", "/")
    return FileChange(
        file_path=path,
        file_extension=posixpath.splitext(path)[1].lower(),
        directory=posixpath.dirname(path),
    )


def build_pr_analysis(
    pr_id: str,
    repository: str,
    merged_at: datetime,
    files: Iterable[Union[str, FileChange]],
    title: str = "",
    body: Optional[str] = None,
) -> PRAnalysis:
    """
    Assemble a PRAnalysis from a PR's changed files.

    Plain path strings are expanded into FileChange records. Languages,
    directories and change flags are derived from the paths.
    """
    changes = [_to_file_change(item) for item in files]

    languages = _ordered(
        EXTENSION_LANGUAGES[change.file_extension.lower()]
        for change in changes
        if change.file_extension.lower() in EXTENSION_LANGUAGES
    )
    directories = _ordered(change.directory for change in changes if change.directory)

    return PRAnalysis(
        id=pr_id,
        repository=repository,
        title=title,
        body=body,
        merged_at=merged_at,
        files_changed=changes,
        languages=languages,
        directories=directories,
        **detect_change_types(change.file_path for change in changes),
    )
