"""
Daily progress records and the per-day completion state machine.

A record moves NOT_STARTED -> WORKOUT_ONLY / MEAL_ONLY -> BOTH_COMPLETE.
Completion flags only ever turn on (logical OR), so BOTH_COMPLETE is
terminal. Calories are different: every event adds its calorie delta,
even on a day that is already complete.
"""

import datetime
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class CompletionKind(str, Enum):
    """What a completion event marks as done."""
    WORKOUT = "workout"
    MEAL = "meal"


class DayState(str, Enum):
    NOT_STARTED = "not_started"
    WORKOUT_ONLY = "workout_only"
    MEAL_ONLY = "meal_only"
    BOTH_COMPLETE = "both_complete"


@dataclass(frozen=True)
class DailyProgressRecord:
    """One (user, plan, day) completion record."""
    day_number: int
    date: Optional[datetime.date] = None
    workout_completed: bool = False
    meal_completed: bool = False
    calories_burned: float = 0
    workout_duration_seconds: int = 0
    exercises: Tuple[str, ...] = ()

    @property
    def is_complete(self) -> bool:
        return self.workout_completed and self.meal_completed

    @property
    def state(self) -> DayState:
        if self.is_complete:
            return DayState.BOTH_COMPLETE
        if self.workout_completed:
            return DayState.WORKOUT_ONLY
        if self.meal_completed:
            return DayState.MEAL_ONLY
        return DayState.NOT_STARTED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "day_number": self.day_number,
            "date": self.date.isoformat() if self.date else None,
            "workout_completed": self.workout_completed,
            "meal_completed": self.meal_completed,
            "calories_burned": self.calories_burned,
            "workout_duration_seconds": self.workout_duration_seconds,
            "exercises": list(self.exercises),
            "state": self.state.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DailyProgressRecord":
        raw_date = data.get("date")
        return cls(
            day_number=data["day_number"],
            date=datetime.date.fromisoformat(raw_date) if raw_date else None,
            workout_completed=bool(data.get("workout_completed", False)),
            meal_completed=bool(data.get("meal_completed", False)),
            calories_burned=data.get("calories_burned") or 0,
            workout_duration_seconds=data.get("workout_duration_seconds") or 0,
            exercises=tuple(data.get("exercises") or ()),
        )


def apply_completion(
    existing: Optional[DailyProgressRecord],
    day_number: int,
    kind: CompletionKind,
    calories_burned: float = 0,
    workout_duration_seconds: Optional[int] = None,
    exercises: Optional[List[str]] = None,
    on_date: Optional[datetime.date] = None,
) -> DailyProgressRecord:
    """
    Merge one completion event into a day's record and return the new record.

    - flags: OR with the existing value (a completed day cannot be un-marked)
    - calories: added to the existing total, never replaced
    - workout events replace duration and exercise list when provided
    - date: first touch wins
    """
    kind = CompletionKind(kind)
    record = existing or DailyProgressRecord(day_number=day_number, date=on_date)

    changes: Dict[str, Any] = {
        "calories_burned": record.calories_burned + (calories_burned or 0),
    }
    if record.date is None and on_date is not None:
        changes["date"] = on_date

    if kind == CompletionKind.WORKOUT:
        changes["workout_completed"] = True
        if workout_duration_seconds is not None:
            changes["workout_duration_seconds"] = workout_duration_seconds
        if exercises is not None:
            changes["exercises"] = tuple(exercises)
    else:
        changes["meal_completed"] = True

    return replace(record, **changes)
