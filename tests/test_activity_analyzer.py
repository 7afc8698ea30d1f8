"""Tests for deriving contribution patterns and PR analyses from raw activity."""
from datetime import timedelta

import pytest

from wecraft import build_contribution_pattern, build_pr_analysis, detect_change_types
from wecraft.models import ContributionPattern, FileChange, GitHubActivity, RepositoryContribution
from wecraft.models.github import ActivitySpan

from .factories import NOW, USERNAME, make_account, make_activity, make_merged_pr, make_review


@pytest.fixture
def activity():
    prs = [
        make_merged_pr("1", repository="acme/api", merged_at=NOW - timedelta(days=10)),
        make_merged_pr("2", repository="acme/api", merged_at=NOW - timedelta(days=10), merged_by=USERNAME),
        make_merged_pr("3", repository="fork/x", merged_at=NOW - timedelta(days=40), merged_by="m2", is_fork=True),
    ]
    return make_activity(
        prs,
        reviews_received=[make_review("r1", "alice", USERNAME, repository="acme/web")],
        reviews_given=[make_review("g1", USERNAME, "bob")],
        repositories=[RepositoryContribution(repository="acme/docs")],
    )


def test_pr_counts(activity):
    pattern = build_contribution_pattern(activity, make_account())

    assert pattern.total_prs == 3
    assert pattern.merged_prs == 3
    assert pattern.self_merged_prs == 1
    assert pattern.fork_prs == 1
    assert pattern.original_repo_prs == 2
    assert pattern.original_repo_contributions == 2
    assert pattern.fork_only_repos == ["fork/x"]


def test_temporal_patterns(activity):
    pattern = build_contribution_pattern(activity, make_account())

    assert pattern.first_contribution_date == NOW - timedelta(days=40)
    assert pattern.last_contribution_date == NOW - timedelta(days=10)
    assert pattern.contribution_span_days == pytest.approx(30)
    assert pattern.contribution_days == 2
    assert pattern.contribution_months == 2
    assert pattern.max_prs_in_single_day == 2
    assert pattern.average_prs_per_day == pytest.approx(0.1)


def test_repository_patterns(activity):
    pattern = build_contribution_pattern(activity, make_account())

    assert pattern.unique_repositories == 3
    assert pattern.repositories_with_multiple_prs == 1
    assert pattern.repositories_with_maintainer_interaction == 2


def test_collaboration_patterns(activity):
    pattern = build_contribution_pattern(activity, make_account())

    assert pattern.unique_collaborators == 4
    assert pattern.maintainer_interactions == 2
    assert pattern.cross_repository_collaborations == 3
    assert pattern.reviews_given == 1
    assert pattern.reviews_received == 1
    assert pattern.maintainer_reviews == 0


def test_username_falls_back_to_most_common_author(activity):
    assert build_contribution_pattern(activity) == build_contribution_pattern(activity, make_account())


def test_commit_message_duplicates(activity):
    messages = ["fix", "fix", "fix", "Add feature", "   "]
    pattern = build_contribution_pattern(activity, make_account(), commit_messages=messages)

    assert pattern.commit_message_patterns == {"fix": 3, "Add feature": 1}
    assert pattern.identical_commit_messages == 2


def test_empty_activity_gives_empty_pattern():
    assert build_contribution_pattern(GitHubActivity(), make_account()) == ContributionPattern()


def test_activity_span_used_without_prs():
    span = ActivitySpan(first_pr_date=NOW - timedelta(days=100), last_pr_date=NOW)
    pattern = build_contribution_pattern(GitHubActivity(activity_span=span))

    assert pattern.contribution_span_days == pytest.approx(100)
    assert pattern.total_prs == 0


@pytest.mark.parametrize("path,flag", [
    ("Dockerfile", "is_infrastructure_change"),
    ("deploy/terraform/main.tf", "is_infrastructure_change"),
    (".github/workflows/ci.yml", "is_infrastructure_change"),
    ("src/api/users.py", "is_api_change"),
    ("proto/service.proto", "is_api_change"),
    ("src/App.tsx", "is_ui_change"),
    ("db/migrations/001_init.sql", "is_database_change"),
    ("config/settings.yaml", "is_config_change"),
    ("tests/test_users.py", "is_test_change"),
    ("web/button.spec.ts", "is_test_change"),
    ("README.md", "is_documentation_change"),
])
def test_detect_change_types(path, flag):
    assert detect_change_types([path])[flag]


def test_detect_change_types_plain_source_file():
    flags = detect_change_types(["src/engine/core.py"])

    assert not any(flags.values())


def test_build_pr_analysis_from_paths():
    pr = build_pr_analysis(
        "42",
        "acme/app",
        NOW,
        ["services/api/handlers.py", "web/src/App.tsx", "README.md"],
        title="Wire up handlers",
    )

    assert [f.file_extension for f in pr.files_changed] == [".py", ".tsx", ".md"]
    assert pr.languages == ["python", "typescript"]
    assert pr.directories == ["services/api", "web/src"]
    assert pr.is_api_change
    assert pr.is_ui_change
    assert pr.is_documentation_change
    assert not pr.is_database_change


def test_build_pr_analysis_keeps_file_changes():
    change = FileChange(file_path="lib/db/models.rb", file_extension=".rb", directory="lib/db", lines_added=12)
    pr = build_pr_analysis("7", "acme/app", NOW, [change])

    assert pr.files_changed == [change]
    assert pr.languages == ["ruby"]
    assert pr.is_database_change


def test_build_pr_analysis_normalizes_windows_paths():
    pr = build_pr_analysis("8", "acme/app", NOW, ["src\\api\\routes.go"])

    assert pr.files_changed[0].file_path == "src/api/routes.go"
    assert pr.files_changed[0].directory == "src/api"
    assert pr.is_api_change
