"""
Progress/Streak Aggregator

Folds a plan's daily progress records into the statistics shown on the
dashboard. Pure function of its input; safe to call on every read.

Streak semantics (kept as-is, pending product confirmation):
records are ordered most recent first and counted while both the workout
and the meal are complete. Calendar gaps are not detected, so a day with
no record at all does not break a streak, while a day with a partial
record does.
"""

import datetime
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

from .records import DailyProgressRecord


@dataclass
class AggregateProgress:
    total_calories_burned: float = 0
    current_streak: int = 0
    completion_percentage: int = 0
    daily_progress: List[DailyProgressRecord] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_calories_burned": self.total_calories_burned,
            "current_streak": self.current_streak,
            "completion_percentage": self.completion_percentage,
            "daily_progress": [r.to_dict() for r in self.daily_progress],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AggregateProgress":
        return cls(
            total_calories_burned=data.get("total_calories_burned", 0),
            current_streak=data.get("current_streak", 0),
            completion_percentage=data.get("completion_percentage", 0),
            daily_progress=[DailyProgressRecord.from_dict(r) for r in data.get("daily_progress", [])],
        )


def _recency_key(record: DailyProgressRecord) -> Tuple[datetime.date, int]:
    # Dated records order by date; undated ones by plan day
    return (record.date or datetime.date.min, record.day_number)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def current_streak(records: Iterable[DailyProgressRecord]) -> int:
    streak = 0
    for record in sorted(records, key=_recency_key, reverse=True):
        if not record.is_complete:
            break
        streak += 1
    return streak


def completion_percentage(records: List[DailyProgressRecord]) -> int:
    completed = sum(1 for r in records if r.is_complete)
    return _round_half_up(100 * completed / max(1, len(records)))


def aggregate(records: Iterable[DailyProgressRecord]) -> AggregateProgress:
    records = sorted(records, key=_recency_key)

    return AggregateProgress(
        total_calories_burned=sum(r.calories_burned for r in records),
        current_streak=current_streak(records),
        completion_percentage=completion_percentage(records),
        daily_progress=records,
    )
