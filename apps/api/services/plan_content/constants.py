"""
Constants for plan content generation.

These are DEFAULTS that callers can override by supplying their own pools.
They exist here for type safety and documentation.
"""

from enum import Enum
from typing import Dict, Tuple


class ExerciseCategory(str, Enum):
    """Body-region/cardio groupings. One exercise per category per day."""
    UPPER_BODY = "upper_body"
    LOWER_BODY = "lower_body"
    CORE = "core"
    CARDIO = "cardio"


class MealSlot(str, Enum):
    """The five meal positions in a day."""
    BREAKFAST = "breakfast"
    MID_MORNING_SNACK = "mid_morning_snack"
    LUNCH = "lunch"
    AFTERNOON_SNACK = "afternoon_snack"
    DINNER = "dinner"


class SubscriptionTier(str, Enum):
    """Subscription plan ids."""
    FREE_TRIAL = "free-trial"
    MONTHLY = "monthly"
    SEMI_ANNUAL = "semi-annual"
    ANNUAL = "annual"


# Order matters: a day's exercises are listed in this order.
REQUIRED_CATEGORIES: Tuple[ExerciseCategory, ...] = (
    ExerciseCategory.UPPER_BODY,
    ExerciseCategory.LOWER_BODY,
    ExerciseCategory.CORE,
    ExerciseCategory.CARDIO,
)

MEAL_SLOTS: Tuple[MealSlot, ...] = (
    MealSlot.BREAKFAST,
    MealSlot.MID_MORNING_SNACK,
    MealSlot.LUNCH,
    MealSlot.AFTERNOON_SNACK,
    MealSlot.DINNER,
)

# The trial is sold as 3 days but materialized as a full week;
# days 4-7 stay locked behind the entitlement gate.
TRIAL_PLAN_DAYS = 7
TRIAL_ACCESS_DAYS = 3

# Days of plan content generated per tier
TIER_PLAN_DURATIONS: Dict[SubscriptionTier, int] = {
    SubscriptionTier.FREE_TRIAL: TRIAL_PLAN_DAYS,
    SubscriptionTier.MONTHLY: 30,
    SubscriptionTier.SEMI_ANNUAL: 180,
    SubscriptionTier.ANNUAL: 365,
}

DEFAULT_PLAN_DURATION = TRIAL_PLAN_DAYS
