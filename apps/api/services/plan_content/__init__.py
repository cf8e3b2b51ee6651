# Plan Content Framework
#
# Builds the workout + meal content of a fitness plan and decides which of
# its days a subscriber may open.
#
# Architecture:
# - Static, read-only content pools
# - Injected random source (deterministic in tests)
# - Pure generator: no I/O, no persistence
# - Entitlements service for tier -> duration / day access

from .constants import (
    ExerciseCategory,
    MealSlot,
    SubscriptionTier,
    REQUIRED_CATEGORIES,
    MEAL_SLOTS,
    TIER_PLAN_DURATIONS,
    TRIAL_PLAN_DAYS,
)
from .pools import ExerciseDefinition, EXERCISE_POOL, MEAL_POOLS
from .random_source import RandomSource, SystemRandomSource, SequenceRandomSource
from .generator import (
    generate_plan,
    PlanContent,
    DayWorkout,
    DayMeal,
    ExerciseAssignment,
)
from .entitlements import EntitlementsService, AccessResult

__all__ = [
    # Constants
    'ExerciseCategory',
    'MealSlot',
    'SubscriptionTier',
    'REQUIRED_CATEGORIES',
    'MEAL_SLOTS',
    'TIER_PLAN_DURATIONS',
    'TRIAL_PLAN_DAYS',

    # Pools
    'ExerciseDefinition',
    'EXERCISE_POOL',
    'MEAL_POOLS',

    # Randomness
    'RandomSource',
    'SystemRandomSource',
    'SequenceRandomSource',

    # Generator
    'generate_plan',
    'PlanContent',
    'DayWorkout',
    'DayMeal',
    'ExerciseAssignment',

    # Access
    'EntitlementsService',
    'AccessResult',
]
