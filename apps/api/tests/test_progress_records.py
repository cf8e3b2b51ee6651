"""
Tests for the per-day completion state machine and merge rules.
"""
from datetime import date

import pytest

from services.progress import (
    CompletionKind,
    DailyProgressRecord,
    DayState,
    aggregate,
    apply_completion,
)


class TestStateMachine:

    def test_new_record_is_not_started(self):
        assert DailyProgressRecord(day_number=1).state == DayState.NOT_STARTED

    def test_workout_then_meal(self):
        record = apply_completion(None, 1, CompletionKind.WORKOUT)
        assert record.state == DayState.WORKOUT_ONLY

        record = apply_completion(record, 1, CompletionKind.MEAL)
        assert record.state == DayState.BOTH_COMPLETE

    def test_meal_then_workout(self):
        record = apply_completion(None, 1, CompletionKind.MEAL)
        assert record.state == DayState.MEAL_ONLY

        record = apply_completion(record, 1, CompletionKind.WORKOUT)
        assert record.state == DayState.BOTH_COMPLETE

    @pytest.mark.parametrize("kind", [CompletionKind.WORKOUT, CompletionKind.MEAL])
    def test_both_complete_is_terminal(self, kind):
        record = DailyProgressRecord(day_number=1, workout_completed=True, meal_completed=True)
        assert apply_completion(record, 1, kind).state == DayState.BOTH_COMPLETE

    def test_kind_accepts_plain_string(self):
        assert apply_completion(None, 1, "meal").meal_completed is True


class TestMerge:

    def test_flags_are_idempotent(self):
        first = apply_completion(None, 1, CompletionKind.WORKOUT, calories_burned=100)
        second = apply_completion(first, 1, CompletionKind.WORKOUT, calories_burned=0)

        assert second.workout_completed is True
        assert second.meal_completed is False
        assert aggregate([second]).completion_percentage == aggregate([first]).completion_percentage

    def test_repeated_events_add_calories(self):
        # Calories are additive even when the day is already complete.
        record = apply_completion(None, 1, CompletionKind.WORKOUT, calories_burned=100)
        record = apply_completion(record, 1, CompletionKind.MEAL)
        record = apply_completion(record, 1, CompletionKind.WORKOUT, calories_burned=100)

        assert record.state == DayState.BOTH_COMPLETE
        assert record.calories_burned == 200

    def test_workout_event_replaces_duration_and_exercises(self):
        record = apply_completion(
            None, 1, CompletionKind.WORKOUT,
            workout_duration_seconds=600, exercises=["Push-ups"],
        )
        record = apply_completion(
            record, 1, CompletionKind.WORKOUT,
            workout_duration_seconds=900, exercises=["Squats", "Plank"],
        )

        assert record.workout_duration_seconds == 900
        assert record.exercises == ("Squats", "Plank")

    def test_meal_event_keeps_workout_details(self):
        record = apply_completion(
            None, 1, CompletionKind.WORKOUT,
            workout_duration_seconds=600, exercises=["Push-ups"],
        )
        record = apply_completion(record, 1, CompletionKind.MEAL, workout_duration_seconds=5)

        assert record.workout_duration_seconds == 600
        assert record.exercises == ("Push-ups",)

    def test_first_touch_date_wins(self):
        record = apply_completion(None, 1, CompletionKind.MEAL, on_date=date(2026, 1, 5))
        record = apply_completion(record, 1, CompletionKind.WORKOUT, on_date=date(2026, 1, 6))
        assert record.date == date(2026, 1, 5)

    def test_existing_record_is_not_mutated(self):
        original = DailyProgressRecord(day_number=2)
        apply_completion(original, 2, CompletionKind.MEAL, calories_burned=10)
        assert original.meal_completed is False
        assert original.calories_burned == 0

    def test_records_are_hashable(self):
        record = apply_completion(None, 1, CompletionKind.WORKOUT, exercises=["Push-ups", "Squats"])
        same = apply_completion(None, 1, CompletionKind.WORKOUT, exercises=["Push-ups", "Squats"])

        assert hash(record) == hash(same)
        assert len({record, same}) == 1


def test_record_dict_round_trip_keeps_date():
    record = DailyProgressRecord(day_number=3, date=date(2026, 2, 1), meal_completed=True)
    data = record.to_dict()

    assert data["date"] == "2026-02-01"
    assert data["state"] == "meal_only"
    assert DailyProgressRecord.from_dict(data) == record
