# Progress tracking
#
# Pure bookkeeping over daily completion records:
# - records: per-day state machine and completion merge
# - aggregator: totals, streak, completion percentage
# - calories: session calorie estimate

from .records import CompletionKind, DayState, DailyProgressRecord, apply_completion
from .aggregator import AggregateProgress, aggregate, current_streak, completion_percentage
from .calories import calculate_exercise_calories, EXERCISE_CALORIE_RATES

__all__ = [
    'CompletionKind',
    'DayState',
    'DailyProgressRecord',
    'apply_completion',
    'AggregateProgress',
    'aggregate',
    'current_streak',
    'completion_percentage',
    'calculate_exercise_calories',
    'EXERCISE_CALORIE_RATES',
]
