"""Tests for the trust / authenticity scorer."""
from datetime import datetime, timedelta, timezone

import pytest

from wecraft import InvalidConfigError, compute_trust_score
from wecraft.agents.analyst.trust import TrustScorer
from wecraft.models import ContributionPattern

from .factories import NOW, make_account, make_fork_farming_pattern, make_pattern


def test_healthy_engineer_is_authentic():
    result = compute_trust_score(make_account(), make_pattern())

    assert result.is_authentic
    assert result.total_score > 85
    assert result.red_flags == []
    assert result.confidence == 100.0


def test_healthy_engineer_green_flags():
    result = compute_trust_score(make_account(), make_pattern())

    assert result.green_flags == [
        "High maintainer trust",
        "Strong repository diversity",
        "Active collaboration",
        "Long-term consistent contributions",
        "Primarily original repository contributions",
    ]


def test_account_authenticity_breakdown():
    result = compute_trust_score(make_account(age_days=730), make_pattern())
    breakdown = result.components.account_authenticity.breakdown

    assert breakdown.account_age == pytest.approx(730)
    assert breakdown.account_maturity == 100.0
    assert breakdown.profile_completeness == 100.0
    assert result.components.account_authenticity.score == pytest.approx(100.0)


def test_profile_completeness_counts_twenty_per_field():
    account = make_account(complete_profile=False, bio="hi", email="a@b.c")
    result = compute_trust_score(account, make_pattern())

    assert result.components.account_authenticity.breakdown.profile_completeness == 40


def test_fork_farming_is_never_authentic():
    result = compute_trust_score(make_account(), make_fork_farming_pattern())

    assert result.spam_detection.fork_farming
    assert "Fork-only contributions detected" in result.red_flags
    assert "High fork contribution ratio" in result.red_flags
    assert not result.is_authentic
    assert result.components.anti_gaming_score.breakdown.fork_farming_penalty == 100.0


def test_empty_activity_on_brand_new_account():
    result = compute_trust_score(make_account(age_days=0), ContributionPattern())

    assert result.total_score < 60
    assert not result.is_authentic
    assert "Account too new" in result.red_flags
    assert "Insufficient repository diversity" in result.red_flags
    assert result.confidence == 25.0


def test_zero_prs_zeroes_components_but_keeps_breakdowns():
    result = compute_trust_score(make_account(), ContributionPattern(), as_of=NOW)

    components = result.components
    assert components.account_authenticity.score == 0.0
    assert components.contribution_authenticity.score == 0.0
    assert components.collaboration_signals.score == 0.0
    assert components.anti_gaming_score.score == 0.0
    assert result.total_score == 0.0
    # account age is still reported
    assert components.account_authenticity.breakdown.account_age == pytest.approx(730)


def test_self_merge_farming():
    pattern = make_pattern(self_merged_prs=30)
    result = compute_trust_score(make_account(), pattern)

    assert result.spam_detection.self_merge_farming
    assert "High rate of self-merged PRs" in result.red_flags
    assert result.signals.maintainer_trust == pytest.approx(25.0)


def test_excessive_daily_prs():
    pattern = make_pattern(max_prs_in_single_day=25)
    result = compute_trust_score(make_account(), pattern)

    assert result.spam_detection.excessive_daily_prs
    assert "Excessive daily PR activity" in result.red_flags
    assert result.components.anti_gaming_score.breakdown.pattern_anomalies == 70.0


def test_identical_commit_messages_reduce_spam_score():
    pattern = make_pattern(identical_commit_messages=5)
    result = compute_trust_score(make_account(), pattern)

    assert result.spam_detection.identical_commit_messages
    breakdown = result.components.anti_gaming_score.breakdown
    assert breakdown.spam_detection == 75.0
    assert breakdown.pattern_anomalies == 85.0


def test_repository_farming():
    pattern = make_pattern(unique_repositories=60, repositories_with_multiple_prs=2)
    result = compute_trust_score(make_account(), pattern)

    assert result.spam_detection.repository_farming
    assert "Repository farming pattern detected" in result.red_flags


def test_three_red_flags_block_authenticity():
    pattern = make_pattern(
        self_merged_prs=30,
        max_prs_in_single_day=25,
        unique_repositories=60,
        repositories_with_multiple_prs=2,
    )
    result = compute_trust_score(make_account(), pattern)

    assert len(result.red_flags) >= 3
    assert not result.is_authentic


def test_fork_penalty_tiers():
    scorer = TrustScorer()
    spam = scorer._detect_spam_patterns(make_pattern())

    def penalty(fork_prs):
        pattern = make_pattern(fork_prs=fork_prs)
        return scorer._calculate_anti_gaming_score(pattern, spam).breakdown.fork_farming_penalty

    assert penalty(10) == 0.0
    assert penalty(24) == 40.0
    assert penalty(36) == 70.0


def test_explicit_as_of_controls_account_age():
    account = make_account(age_days=10)
    result = compute_trust_score(account, make_pattern(), as_of=NOW + timedelta(days=90))

    assert result.signals.account_age == pytest.approx(100)
    assert "Account too new" not in result.red_flags


def test_naive_as_of_is_treated_as_utc():
    account = make_account()
    aware = compute_trust_score(account, make_pattern(), as_of=NOW)
    naive = compute_trust_score(account, make_pattern(), as_of=NOW.replace(tzinfo=None))

    assert aware == naive


def test_config_override_changes_thresholds():
    pattern = make_pattern(max_prs_in_single_day=25)
    result = compute_trust_score(make_account(), pattern, config={"max_prs_per_day": 30})

    assert not result.spam_detection.excessive_daily_prs


def test_config_override_weights():
    config = {"weights": {
        "account_authenticity": 1.0,
        "contribution_authenticity": 0.0,
        "collaboration_signals": 0.0,
        "anti_gaming_score": 0.0,
    }}
    result = compute_trust_score(make_account(), make_pattern(), config=config)

    assert result.total_score == pytest.approx(result.components.account_authenticity.score)


@pytest.mark.parametrize("config", [
    {"max_prs_per_day": -1},
    {"weights": {"account_authenticity": 1.5}},
    {"unknown_setting": 1},
    ["not", "a", "mapping"],
])
def test_invalid_config_rejected(config):
    with pytest.raises(InvalidConfigError):
        compute_trust_score(make_account(), make_pattern(), config=config)


def test_deterministic():
    account, pattern = make_account(), make_pattern()
    assert compute_trust_score(account, pattern) == compute_trust_score(account, pattern)


def test_dormant_account_aged_against_snapshot_time():
    account = make_account(created_at=datetime(2018, 1, 1, tzinfo=timezone.utc), fetched_at=NOW)
    pattern = make_pattern(
        first_contribution_date=datetime(2018, 1, 2, tzinfo=timezone.utc),
        last_contribution_date=datetime(2018, 1, 3, tzinfo=timezone.utc),
    )
    result = compute_trust_score(account, pattern)

    assert result.signals.account_age > 2000
    assert "Account too new" not in result.red_flags


def test_explicit_as_of_overrides_snapshot_time():
    account = make_account(age_days=10, fetched_at=NOW + timedelta(days=365))
    result = compute_trust_score(account, make_pattern(), as_of=NOW)

    assert result.signals.account_age == pytest.approx(10)
