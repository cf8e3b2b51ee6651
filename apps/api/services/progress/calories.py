"""
Calorie estimate for a finished workout session.

Burn rates are kcal per minute. The session's duration is split evenly
across its exercises; exercises not in the table burn DEFAULT_CALORIE_RATE.
"""

import math
from typing import Dict, Iterable, Mapping, Union

DEFAULT_CALORIE_RATE = 5

EXERCISE_CALORIE_RATES: Dict[str, int] = {
    "Push-ups": 8,
    "Squats": 7,
    "Lunges": 6,
    "Plank": 4,
    "Bicycle Crunches": 5,
    "Mountain Climbers": 10,
    "Burpees": 12,
    "Dumbbell Rows": 6,
    "Tricep Dips": 5,
    "Glute Bridges": 4,
    "Russian Twists": 5,
    "Jumping Jacks": 9,
    "Lateral Raises": 4,
    "Calf Raises": 3,
    "Superman": 3,
}


def _exercise_name(exercise: Union[str, Mapping, object]) -> str:
    if isinstance(exercise, str):
        return exercise
    if isinstance(exercise, Mapping):
        return exercise.get("name", "")
    return getattr(exercise, "name", "")


def calculate_exercise_calories(exercises: Iterable, duration_minutes: float) -> int:
    """
    Estimate calories burned over duration_minutes.

    Args:
        exercises: names, dicts with a "name" key, or objects with .name
        duration_minutes: total session length
    """
    names = [_exercise_name(e) for e in exercises]
    if not names or duration_minutes <= 0:
        return 0

    minutes_each = duration_minutes / len(names)
    total = sum(EXERCISE_CALORIE_RATES.get(name, DEFAULT_CALORIE_RATE) * minutes_each for name in names)
    return int(math.floor(total + 0.5))
