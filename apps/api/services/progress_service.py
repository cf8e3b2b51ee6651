"""
Progress Service

Effectful side of progress tracking: upserts one DailyProgress row per
(plan, day) and serves the derived aggregate.

The stored rows are the only source of truth. The aggregate is recomputed
from a fresh read of every row; the cached copy exists to cut display
latency and is dropped on every write for that plan.
"""

import logging
from datetime import date, datetime, timezone
from typing import List, Optional, Union
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.cache import cache_key, delete_cache, get_cache, set_cache
from core.config import settings
from core.exceptions import RecordNotFoundError
from models import DailyProgress, UserPlan
from services.plan_service import PlanService
from services.progress import (
    AggregateProgress,
    CompletionKind,
    DailyProgressRecord,
    aggregate,
    apply_completion,
)

logger = logging.getLogger(__name__)


def progress_cache_key(plan_id: Union[str, UUID]) -> str:
    return cache_key("progress", str(plan_id))


class ProgressService:
    def __init__(self, db: Session):
        self.db = db
        self.plans = PlanService(db)

    def _get_row(self, plan_id: UUID, day_number: int) -> Optional[DailyProgress]:
        return (
            self.db.query(DailyProgress)
            .filter(DailyProgress.user_plan_id == plan_id, DailyProgress.day_number == day_number)
            .first()
        )

    def _check_day(self, plan: UserPlan, day_number: int) -> None:
        if day_number < 1 or day_number > plan.duration:
            raise RecordNotFoundError("Plan day", f"{plan.id}/{day_number}")

    def get_day(self, user_id: str, plan_id: Union[str, UUID], day_number: int) -> DailyProgressRecord:
        """The day's record, or an empty NOT_STARTED record if untouched."""
        plan = self.plans.get_plan(user_id, plan_id)
        self._check_day(plan, day_number)
        row = self._get_row(plan.id, day_number)
        return row.to_record() if row else DailyProgressRecord(day_number=day_number)

    def _upsert_day(
        self,
        plan: UserPlan,
        user_id: str,
        day_number: int,
        notes: Optional[str],
        **event,
    ) -> DailyProgressRecord:
        row = self._get_row(plan.id, day_number)
        if row is None:
            row = DailyProgress(user_id=user_id, user_plan_id=plan.id, day_number=day_number)
            self.db.add(row)
            existing = None
        else:
            existing = row.to_record()

        updated = apply_completion(existing, day_number=day_number, **event)
        row.apply_record(updated)
        if notes is not None:
            row.notes = notes
        if row.completed_at is None:
            row.completed_at = datetime.now(timezone.utc)

        if day_number > (plan.current_day or 1):
            plan.current_day = day_number

        self.db.commit()
        return updated

    def record_completion(
        self,
        user_id: str,
        plan_id: Union[str, UUID],
        day_number: int,
        kind: CompletionKind,
        calories_burned: float = 0,
        workout_duration_seconds: Optional[int] = None,
        exercises: Optional[List[str]] = None,
        notes: Optional[str] = None,
        on_date: Optional[date] = None,
    ) -> DailyProgressRecord:
        """
        Upsert the (plan, day) record with one completion event.

        Raises RecordNotFoundError when the plan is not the user's or the
        day lies outside 1..duration.
        """
        plan = self.plans.get_plan(user_id, plan_id)
        self._check_day(plan, day_number)
        event = dict(
            kind=kind,
            calories_burned=calories_burned,
            workout_duration_seconds=workout_duration_seconds,
            exercises=exercises,
            on_date=on_date or datetime.now(timezone.utc).date(),
        )

        try:
            updated = self._upsert_day(plan, user_id, day_number, notes, **event)
        except IntegrityError:
            # Concurrent first touch on the same day: the other writer's row wins,
            # replay this event on top of it once.
            self.db.rollback()
            logger.warning(f"Concurrent upsert on plan {plan.id} day {day_number}; retrying")
            updated = self._upsert_day(plan, user_id, day_number, notes, **event)

        delete_cache(progress_cache_key(plan.id))

        logger.info(
            f"Recorded {CompletionKind(kind).value} completion for plan {plan.id} day {day_number}",
            extra={"extra_fields": {
                "user_id": user_id,
                "plan_id": str(plan.id),
                "day_number": day_number,
                "state": updated.state.value,
                "calories_delta": calories_burned,
            }},
        )
        return updated

    def get_aggregate(self, user_id: str, plan_id: Union[str, UUID]) -> AggregateProgress:
        plan = self.plans.get_plan(user_id, plan_id)
        key = progress_cache_key(plan.id)

        cached = get_cache(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key}")
            return AggregateProgress.from_dict(cached)

        rows = self.plans.get_daily_progress(plan.id)
        result = aggregate(row.to_record() for row in rows)
        set_cache(key, result.to_dict(), ttl=settings.CACHE_TTL_PROGRESS)
        return result
