"""
Progress API Router

Per-day completion tracking and the aggregate dashboard numbers
(total calories, streak, completion percentage) for one plan.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.auth import CurrentUser, get_current_user
from core.database import get_db
from core.exceptions import ForbiddenError
from schemas import AggregateProgressResponse, CompleteDayRequest, DailyProgressResponse
from services.plan_content import EntitlementsService
from services.progress import CompletionKind, DailyProgressRecord, calculate_exercise_calories
from services.progress_service import ProgressService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/progress", tags=["progress"])


def _record_response(record: DailyProgressRecord) -> DailyProgressResponse:
    return DailyProgressResponse(**record.to_dict())


@router.get("/{plan_id}", response_model=AggregateProgressResponse)
def get_progress(
    plan_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = ProgressService(db)
    plan = svc.plans.get_plan(current_user.user_id, plan_id)
    result = svc.get_aggregate(current_user.user_id, plan.id)
    return AggregateProgressResponse(
        plan_id=plan.id,
        total_calories_burned=result.total_calories_burned,
        completed_days=sum(1 for r in result.daily_progress if r.is_complete),
        current_streak=result.current_streak,
        completion_percentage=result.completion_percentage,
        daily_progress=[_record_response(r) for r in result.daily_progress],
    )


@router.get("/{plan_id}/days/{day}", response_model=DailyProgressResponse)
def get_day_progress(
    plan_id: str,
    day: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    record = ProgressService(db).get_day(current_user.user_id, plan_id, day)
    return _record_response(record)


@router.post("/{plan_id}/days/{day}/complete", response_model=DailyProgressResponse)
def complete_day(
    plan_id: str,
    day: int,
    request: CompleteDayRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Mark a day's workout or meal as done.

    Days past the subscriber's access window return 403. When a workout
    reports a duration but no calories, calories are estimated from the
    day's exercises.
    """
    svc = ProgressService(db)
    plan = svc.plans.get_plan(current_user.user_id, plan_id)

    access = EntitlementsService().check_day_access(plan.subscription_tier, plan.duration, day)
    if not access.allowed and access.reason == "trial_day_locked":
        raise ForbiddenError(f"Day {day} is locked on the free trial")

    kind = CompletionKind(request.kind)
    calories = request.calories_burned
    if calories is None:
        calories = 0
        if kind == CompletionKind.WORKOUT and request.workout_duration_seconds:
            exercises = request.exercises
            if exercises is None:
                content_day = plan.get_content().get_day(day)
                exercises = [e.name for e in content_day["workout"].exercises] if content_day else []
            calories = calculate_exercise_calories(exercises, request.workout_duration_seconds / 60)

    record = svc.record_completion(
        current_user.user_id,
        plan.id,
        day,
        kind,
        calories_burned=calories,
        workout_duration_seconds=request.workout_duration_seconds,
        exercises=request.exercises,
        notes=request.notes,
        on_date=request.date,
    )
    return _record_response(record)
