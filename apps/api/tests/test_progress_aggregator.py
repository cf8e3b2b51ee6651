"""
Tests for the progress aggregate: totals, streak, completion percentage.
"""
from datetime import date, timedelta

from services.progress import (
    AggregateProgress,
    DailyProgressRecord,
    aggregate,
    completion_percentage,
    current_streak,
)

START = date(2026, 3, 1)


def _record(day, workout=True, meal=True, calories=0, dated=True):
    return DailyProgressRecord(
        day_number=day,
        date=START + timedelta(days=day - 1) if dated else None,
        workout_completed=workout,
        meal_completed=meal,
        calories_burned=calories,
    )


def test_empty_input():
    result = aggregate([])
    assert result == AggregateProgress(
        total_calories_burned=0,
        current_streak=0,
        completion_percentage=0,
        daily_progress=[],
    )


def test_two_day_example():
    records = [
        _record(1, workout=True, meal=True, calories=100),
        _record(2, workout=True, meal=False, calories=50),
    ]
    result = aggregate(records)

    assert result.total_calories_burned == 150
    assert result.completion_percentage == 50
    assert result.current_streak == 0


def test_consecutive_complete_days_form_the_streak():
    records = [_record(d) for d in range(1, 8)]
    assert aggregate(records).current_streak == 7


def test_incomplete_most_recent_day_resets_streak():
    records = [_record(d) for d in range(1, 10)] + [_record(10, meal=False)]
    assert aggregate(records).current_streak == 0


def test_streak_stops_at_first_incomplete_record():
    records = [_record(1), _record(2, workout=False), _record(3), _record(4)]
    assert current_streak(records) == 2


def test_input_order_does_not_matter():
    records = [_record(3), _record(1, meal=False), _record(2)]
    result = aggregate(records)

    assert result.current_streak == 2
    assert [r.day_number for r in result.daily_progress] == [1, 2, 3]


def test_missing_day_does_not_break_streak():
    # Day 2 has no record at all; only explicit incomplete records break a streak.
    records = [_record(1), _record(3), _record(4)]
    assert aggregate(records).current_streak == 3


def test_partial_day_breaks_streak():
    records = [_record(1), _record(2, meal=False), _record(3), _record(4)]
    assert aggregate(records).current_streak == 2


def test_undated_records_order_by_day_number():
    records = [_record(2, dated=False), _record(1, dated=False, meal=False)]
    assert current_streak(records) == 1


def test_completion_percentage_rounds_half_up():
    # 1 of 8 complete -> 12.5%
    records = [_record(1)] + [_record(d, meal=False) for d in range(2, 9)]
    assert completion_percentage(records) == 13

    # 2 of 3 complete -> 66.67%
    assert completion_percentage([_record(1), _record(2), _record(3, workout=False)]) == 67


def test_completion_percentage_empty_is_zero():
    assert completion_percentage([]) == 0


def test_calories_sum_includes_incomplete_days():
    records = [_record(1, calories=120.5), _record(2, meal=False, calories=80), _record(3, workout=False)]
    assert aggregate(records).total_calories_burned == 200.5


def test_to_dict_and_from_dict():
    result = aggregate([_record(1, calories=100), _record(2, meal=False, calories=50)])
    data = result.to_dict()

    assert data["total_calories_burned"] == 150
    assert data["daily_progress"][1]["state"] == "workout_only"
    assert AggregateProgress.from_dict(data) == result
