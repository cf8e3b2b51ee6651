"""
Tests for tier -> plan duration and the day access gate.
"""
import pytest

from services.plan_content import EntitlementsService, SubscriptionTier


@pytest.fixture
def entitlements():
    return EntitlementsService(trial_access_days=3)


@pytest.mark.parametrize(
    "tier,days",
    [("free-trial", 7), ("monthly", 30), ("semi-annual", 180), ("annual", 365)],
)
def test_plan_duration_for_tier(entitlements, tier, days):
    assert entitlements.plan_duration_for_tier(tier) == days


def test_unknown_tier_gets_trial_sized_plan(entitlements):
    assert entitlements.plan_duration_for_tier("lifetime") == 7
    assert entitlements.plan_duration_for_tier(None) == 7


def test_trial_opens_first_three_days(entitlements):
    assert entitlements.accessible_days(SubscriptionTier.FREE_TRIAL, 7) == 3
    assert [d for d in range(1, 8) if entitlements.can_access_day("free-trial", 7, d)] == [1, 2, 3]


def test_paid_tier_opens_every_day(entitlements):
    assert entitlements.accessible_days("monthly", 30) == 30
    assert entitlements.can_access_day("monthly", 30, 30) is True
    assert entitlements.can_access_day("monthly", 30, 31) is False


def test_check_day_access_reasons(entitlements):
    locked = entitlements.check_day_access("free-trial", 7, 5)
    assert locked.allowed is False
    assert locked.reason == "trial_day_locked"
    assert locked.upgrade_path == "/plans"

    out_of_range = entitlements.check_day_access("annual", 365, 0)
    assert out_of_range.allowed is False
    assert out_of_range.reason == "day_out_of_range"

    assert entitlements.check_day_access("free-trial", 7, 2).allowed is True


def test_trial_access_defaults_to_settings():
    assert EntitlementsService().trial_access_days == 3
