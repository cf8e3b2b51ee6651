"""
Plan Content Generator

Builds the day-by-day workout and meal content of a plan.

Usage:
    content = generate_plan(30)
    content.workouts[0].exercises  # one per category
    content.meals[0].lunch

    # Deterministic output for tests
    content = generate_plan(3, rng=SequenceRandomSource([0, 1, 2]))

Selection rules:
- Exercises: for every day, one exercise per required category, chosen
  uniformly from that category. Exercise names may repeat across days.
  Sets, reps and rest are drawn independently from the exercise's
  candidate tuples.
- Meals: each slot walks its pool without replacement. When every entry of
  a slot has been served, that slot's pool is refilled (recycle on
  exhaustion), so entries are spread evenly across long plans.

Random draws happen in a fixed order: per day, per category
(exercise, sets, reps, rest), then per meal slot.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from core.exceptions import InvalidDurationError, InvalidPoolError

from .constants import REQUIRED_CATEGORIES, MEAL_SLOTS, ExerciseCategory, MealSlot
from .pools import EXERCISE_POOL, MEAL_POOLS, ExerciseDefinition
from .random_source import RandomSource, SystemRandomSource

logger = logging.getLogger(__name__)


@dataclass
class ExerciseAssignment:
    """A prescribed exercise on a given day."""
    name: str
    sets: int
    reps: int
    rest: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "sets": self.sets, "reps": self.reps, "rest": self.rest}


@dataclass
class DayWorkout:
    day: int
    exercises: List[ExerciseAssignment] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"day": self.day, "exercises": [e.to_dict() for e in self.exercises]}


@dataclass
class DayMeal:
    day: int
    breakfast: str
    mid_morning_snack: str
    lunch: str
    afternoon_snack: str
    dinner: str

    def get(self, slot: MealSlot) -> str:
        return getattr(self, slot.value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "day": self.day,
            "breakfast": self.breakfast,
            "mid_morning_snack": self.mid_morning_snack,
            "lunch": self.lunch,
            "afternoon_snack": self.afternoon_snack,
            "dinner": self.dinner,
        }


@dataclass
class PlanContent:
    """Generated plan body. workouts[i] and meals[i] are both day i + 1."""
    workouts: List[DayWorkout]
    meals: List[DayMeal]

    @property
    def duration(self) -> int:
        return len(self.workouts)

    def get_day(self, day: int) -> Optional[Dict[str, Any]]:
        if day < 1 or day > self.duration:
            return None
        return {"workout": self.workouts[day - 1], "meal": self.meals[day - 1]}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON storage."""
        return {
            "workouts": [w.to_dict() for w in self.workouts],
            "meals": [m.to_dict() for m in self.meals],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlanContent":
        workouts = [
            DayWorkout(
                day=w["day"],
                exercises=[ExerciseAssignment(**e) for e in w.get("exercises", [])],
            )
            for w in data.get("workouts", [])
        ]
        meals = [DayMeal(**m) for m in data.get("meals", [])]
        return cls(workouts=workouts, meals=meals)


class _SlotCycle:
    """Without-replacement draws from one meal slot, refilling on exhaustion."""

    def __init__(self, entries: Sequence[str]):
        # Duplicate entries would defeat the even-spread guarantee
        self._entries = list(dict.fromkeys(entries))
        self._remaining: List[str] = []

    def draw(self, rng: RandomSource) -> str:
        if not self._remaining:
            self._remaining = list(self._entries)
        return self._remaining.pop(rng.next(len(self._remaining)))


def _validate_duration(duration_days: Any) -> int:
    # bool is an int subclass; True is not a duration
    if isinstance(duration_days, bool) or not isinstance(duration_days, int):
        raise InvalidDurationError(duration_days)
    if duration_days <= 0:
        raise InvalidDurationError(duration_days)
    return duration_days


def _group_exercises(
    exercise_pool: Sequence[ExerciseDefinition],
) -> Dict[ExerciseCategory, List[ExerciseDefinition]]:
    by_category: Dict[ExerciseCategory, List[ExerciseDefinition]] = {c: [] for c in REQUIRED_CATEGORIES}
    for exercise in exercise_pool:
        if exercise.category in by_category:
            by_category[exercise.category].append(exercise)

    for category, exercises in by_category.items():
        if not exercises:
            raise InvalidPoolError(category.value)
        for exercise in exercises:
            if not (exercise.sets and exercise.reps and exercise.rest):
                raise InvalidPoolError(
                    category.value,
                    f"Exercise {exercise.name!r} has an empty sets/reps/rest candidate list",
                )
    return by_category


def _validate_meal_pools(meal_pools: Mapping[MealSlot, Sequence[str]]) -> None:
    for slot in MEAL_SLOTS:
        if not meal_pools.get(slot):
            raise InvalidPoolError(slot.value)


def _pick(items: Sequence, rng: RandomSource):
    return items[rng.next(len(items))]


def _assign(exercise: ExerciseDefinition, rng: RandomSource) -> ExerciseAssignment:
    return ExerciseAssignment(
        name=exercise.name,
        sets=_pick(exercise.sets, rng),
        reps=_pick(exercise.reps, rng),
        rest=_pick(exercise.rest, rng),
    )


def generate_plan(
    duration_days: int,
    exercise_pool: Sequence[ExerciseDefinition] = EXERCISE_POOL,
    meal_pools: Mapping[MealSlot, Sequence[str]] = MEAL_POOLS,
    rng: Optional[RandomSource] = None,
) -> PlanContent:
    """
    Generate workouts and meals for days 1..duration_days.

    Raises:
        InvalidDurationError: duration is not a positive integer
        InvalidPoolError: a required category or meal slot has no entries
    """
    duration_days = _validate_duration(duration_days)
    by_category = _group_exercises(exercise_pool)
    _validate_meal_pools(meal_pools)

    rng = rng or SystemRandomSource()
    cycles = {slot: _SlotCycle(meal_pools[slot]) for slot in MEAL_SLOTS}

    workouts: List[DayWorkout] = []
    meals: List[DayMeal] = []

    for day in range(1, duration_days + 1):
        exercises = [_assign(_pick(by_category[c], rng), rng) for c in REQUIRED_CATEGORIES]
        workouts.append(DayWorkout(day=day, exercises=exercises))

        drawn = {slot.value: cycles[slot].draw(rng) for slot in MEAL_SLOTS}
        meals.append(DayMeal(day=day, **drawn))

    logger.debug(f"Generated plan content for {duration_days} days")
    return PlanContent(workouts=workouts, meals=meals)
