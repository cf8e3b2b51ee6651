"""
Entitlements Service

Clean separation of "can they access this?" logic.
Maps a subscription tier to how many plan days get generated and how many
of those days the user may open.

Usage:
    entitlements = EntitlementsService()

    days = entitlements.plan_duration_for_tier("monthly")        # 30
    access = entitlements.check_day_access("free-trial", 7, 5)   # locked
"""

from dataclasses import dataclass
from typing import Optional, Union

from core.config import settings

from .constants import (
    DEFAULT_PLAN_DURATION,
    TIER_PLAN_DURATIONS,
    SubscriptionTier,
)


@dataclass
class AccessResult:
    """Result of access check."""
    allowed: bool
    reason: Optional[str] = None
    upgrade_path: Optional[str] = None


def _coerce_tier(tier: Union[str, SubscriptionTier, None]) -> Optional[SubscriptionTier]:
    if tier is None:
        return None
    try:
        return SubscriptionTier(tier)
    except ValueError:
        return None


class EntitlementsService:
    """
    Central authority for what a subscriber can access.
    """

    def __init__(self, trial_access_days: Optional[int] = None):
        self.trial_access_days = trial_access_days or settings.TRIAL_ACCESS_DAYS

    def plan_duration_for_tier(self, tier: Union[str, SubscriptionTier, None]) -> int:
        """Days of content to generate. Unknown tiers get the trial-sized plan."""
        resolved = _coerce_tier(tier)
        if resolved is None:
            return DEFAULT_PLAN_DURATION
        return TIER_PLAN_DURATIONS[resolved]

    def accessible_days(self, tier: Union[str, SubscriptionTier, None], duration: int) -> int:
        if _coerce_tier(tier) == SubscriptionTier.FREE_TRIAL:
            return min(self.trial_access_days, duration)
        return duration

    def can_access_day(self, tier: Union[str, SubscriptionTier, None], duration: int, day: int) -> bool:
        return 1 <= day <= self.accessible_days(tier, duration)

    def check_day_access(self, tier: Union[str, SubscriptionTier, None], duration: int, day: int) -> AccessResult:
        """Check with a reason, for API responses."""
        if day < 1 or day > duration:
            return AccessResult(allowed=False, reason="day_out_of_range")

        if not self.can_access_day(tier, duration, day):
            return AccessResult(
                allowed=False,
                reason="trial_day_locked",
                upgrade_path="/plans",
            )

        return AccessResult(allowed=True)
