"""Tests for the role compatibility scorer and the role knowledge base."""
import pytest

from wecraft import (
    SUPPORTED_ROLES,
    UnknownRoleError,
    compute_compatibility_score,
    get_role_profile,
    load_role_profiles,
)
from wecraft.agents.analyst.compatibility import CompatibilityScorer, compatibility_level
from wecraft.models import EngineerActivity, RoleQuery

from .factories import make_backend_activity, make_frontend_activity, make_pr_analysis


# ============================================================================
# Role knowledge base
# ============================================================================

def test_supported_roles():
    assert set(SUPPORTED_ROLES) == {
        "backend", "frontend", "fullstack", "devops", "mobile",
        "data-engineer", "security", "ml-engineer", "sre", "platform-engineer",
    }


def test_role_profiles_are_cached_and_read_only():
    profiles = load_role_profiles()

    assert profiles is load_role_profiles()
    with pytest.raises(TypeError):
        profiles["backend"] = None


def test_role_specific_weights():
    for role in ("backend", "frontend", "devops"):
        assert get_role_profile(role).signal_weights is not None
    assert CompatibilityScorer(get_role_profile("fullstack")).weights == CompatibilityScorer.BASE_SIGNAL_WEIGHTS


def test_unknown_role_rejected():
    with pytest.raises(UnknownRoleError) as exc_info:
        compute_compatibility_score(make_backend_activity(), "astronaut")

    assert exc_info.value.role == "astronaut"
    assert "backend" in exc_info.value.supported


def test_unknown_role_is_a_value_error():
    with pytest.raises(ValueError):
        get_role_profile("")


# ============================================================================
# Scoring
# ============================================================================

def test_backend_engineer_fits_backend():
    result = compute_compatibility_score(make_backend_activity(), "backend")

    assert result.compatibility_level == "high"
    assert result.total_score == pytest.approx(97.0)
    assert result.signals.domain_contribution_depth == 100.0
    assert result.signals.file_type_alignment == 100.0
    assert result.signals.review_domain_expertise == 100.0


def test_technology_breakdown():
    result = compute_compatibility_score(make_backend_activity(), "backend")
    tech = result.breakdown.technology_stack

    assert tech.matched_technologies == [".py", "python", "go", "repository-keyword"]
    assert tech.mismatched_technologies == []
    assert tech.score == 60


def test_architecture_patterns_from_structure_and_repositories():
    result = compute_compatibility_score(make_backend_activity(), "backend")

    assert result.breakdown.architecture_patterns.detected_patterns == ["api-design", "data-layer", "microservices"]
    assert result.signals.architecture_pattern_match == 60


def test_frontend_engineer_does_not_fit_backend():
    result = compute_compatibility_score(make_frontend_activity(), "backend")

    assert result.total_score < 30
    assert result.compatibility_level == "poor"
    assert result.negative_signals.technology_mismatch > 0
    assert result.negative_signals.technology_overweight == 70.0
    assert "Limited technology stack alignment" in result.explanation.weaknesses
    assert "Significant contributions in mismatched technologies" in result.explanation.weaknesses


def test_frontend_engineer_fits_frontend():
    result = compute_compatibility_score(make_frontend_activity(), "frontend")

    assert result.compatibility_level in ("high", "medium")
    assert result.negative_signals.technology_mismatch == 0.0


def test_empty_activity():
    result = compute_compatibility_score(EngineerActivity(), "backend")

    assert result.total_score == 0.0
    assert result.compatibility_level == "poor"
    assert result.negative_signals.insufficient_depth == 100.0
    assert result.negative_signals.architecture_mismatch == 100.0
    assert result.breakdown.contribution_depth.total_prs == 0


def test_insufficient_depth_under_five_prs():
    result = compute_compatibility_score(make_backend_activity(pr_count=3), "backend")

    assert result.negative_signals.insufficient_depth == 100.0
    assert "Insufficient contribution depth in role domain" in result.explanation.weaknesses
    assert result.total_score == pytest.approx(77.0)


def test_pr_counted_once_across_change_types():
    pr = make_pr_analysis(
        "x",
        ["svc/handler.py"],
        title="Add database backed api",
        is_api_change=True,
        is_database_change=True,
    )
    result = compute_compatibility_score(EngineerActivity(prs=[pr]), "backend")

    assert result.signals.activity_type_match == 100.0
    assert result.breakdown.contribution_depth.relevant_prs == 1


def test_required_technologies_add_evidence_only():
    activity = make_backend_activity()
    plain = compute_compatibility_score(activity, "backend")
    hinted = compute_compatibility_score(
        activity, RoleQuery(role="backend", required_technologies=["Python", "Kafka"])
    )

    assert hinted.total_score == plain.total_score
    evidence = hinted.explanation.evidence[-1]
    assert evidence.type == "Requested Technologies"
    assert evidence.description == "Found 1 of 2 requested technologies: Python"
    assert evidence.score == pytest.approx(50.0)


def test_role_query_as_mapping():
    result = compute_compatibility_score(make_backend_activity(), {"role": "backend"})
    assert result.explanation.role == "backend"


@pytest.mark.parametrize("score,level", [
    (100, "high"),
    (75, "high"),
    (74.9, "medium"),
    (50, "medium"),
    (25, "low"),
    (24.9, "poor"),
    (0, "poor"),
])
def test_compatibility_levels(score, level):
    assert compatibility_level(score) == level


def test_deterministic():
    activity = make_backend_activity()
    assert compute_compatibility_score(activity, "backend") == compute_compatibility_score(activity, "backend")


def test_strong_signals_become_strengths():
    strengths = compute_compatibility_score(make_backend_activity(), "backend").explanation.strengths

    assert "100% of changed files are backend file types" in strengths
    assert "100% of PRs and issues are backend work" in strengths
    assert "100% of original repositories are backend projects" in strengths
    assert "100% of code reviews cover backend code" in strengths


def test_weak_signals_add_no_strengths():
    strengths = compute_compatibility_score(make_frontend_activity(), "backend").explanation.strengths

    assert not any("backend" in strength for strength in strengths)
