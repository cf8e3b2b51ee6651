"""
Plan lifecycle: create, look up, and supersede generated plans.

Usage:
    svc = PlanService(db)
    plan = svc.create_plan(user_id, duration=30, subscription_tier="monthly")
    plan = svc.upgrade_plan(user_id, "annual")   # carries progress by day number
"""

import logging
from typing import List, Optional, Union
from uuid import UUID

from sqlalchemy.orm import Session

from core.exceptions import RecordNotFoundError
from models import DailyProgress, UserPlan
from services.plan_content import EntitlementsService, RandomSource, generate_plan

logger = logging.getLogger(__name__)


def plan_name(duration: int) -> str:
    return f"{duration}-Day Fitness Plan"


def _as_uuid(value: Union[str, UUID]) -> Optional[UUID]:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


class PlanService:
    def __init__(
        self,
        db: Session,
        rng: Optional[RandomSource] = None,
        entitlements: Optional[EntitlementsService] = None,
    ):
        self.db = db
        self.rng = rng
        self.entitlements = entitlements or EntitlementsService()

    def get_user_plans(self, user_id: str) -> List[UserPlan]:
        """All plans for a user, newest first."""
        return (
            self.db.query(UserPlan)
            .filter(UserPlan.user_id == user_id)
            .order_by(UserPlan.created_at.desc())
            .all()
        )

    def get_active_plan(self, user_id: str) -> Optional[UserPlan]:
        return (
            self.db.query(UserPlan)
            .filter(UserPlan.user_id == user_id, UserPlan.is_active.is_(True))
            .order_by(UserPlan.created_at.desc())
            .first()
        )

    def get_plan(self, user_id: str, plan_id: Union[str, UUID]) -> UserPlan:
        """Fetch a plan owned by user_id. Another user's plan reads as missing."""
        plan_uuid = _as_uuid(plan_id)
        plan = None
        if plan_uuid is not None:
            plan = (
                self.db.query(UserPlan)
                .filter(UserPlan.id == plan_uuid, UserPlan.user_id == user_id)
                .first()
            )
        if plan is None:
            raise RecordNotFoundError("Plan", plan_id)
        return plan

    def _deactivate_all(self, user_id: str) -> None:
        (
            self.db.query(UserPlan)
            .filter(UserPlan.user_id == user_id, UserPlan.is_active.is_(True))
            .update({UserPlan.is_active: False}, synchronize_session=False)
        )

    def _new_plan(self, user_id: str, duration: int, subscription_tier: str, current_day: int = 1) -> UserPlan:
        content = generate_plan(duration, rng=self.rng)
        plan = UserPlan(
            user_id=user_id,
            name=plan_name(duration),
            duration=duration,
            subscription_tier=subscription_tier,
            is_active=True,
            current_day=current_day,
            content=content.to_dict(),
        )
        self.db.add(plan)
        self.db.flush()
        return plan

    def create_plan(self, user_id: str, duration: int, subscription_tier: str = "free-trial") -> UserPlan:
        """
        Generate and store a new active plan. Any previously active plan is
        deactivated; its progress stays attached to it.
        """
        self._deactivate_all(user_id)
        plan = self._new_plan(user_id, duration, subscription_tier)
        self.db.commit()
        self.db.refresh(plan)

        logger.info(
            f"Created {duration}-day plan for user {user_id}",
            extra={"extra_fields": {"user_id": user_id, "plan_id": str(plan.id), "tier": subscription_tier}},
        )
        return plan

    def create_plan_for_tier(self, user_id: str, subscription_tier: str) -> UserPlan:
        duration = self.entitlements.plan_duration_for_tier(subscription_tier)
        return self.create_plan(user_id, duration, subscription_tier)

    def upgrade_plan(self, user_id: str, subscription_tier: str) -> UserPlan:
        """
        Supersede the active plan with one sized for the new tier.

        Progress is carried forward by day number, not by content: day 2 of
        the old plan becomes day 2 of the new one even though the workouts
        differ.
        """
        current = self.get_active_plan(user_id)
        duration = self.entitlements.plan_duration_for_tier(subscription_tier)

        self._deactivate_all(user_id)
        upgraded = self._new_plan(
            user_id,
            duration,
            subscription_tier,
            current_day=current.current_day if current else 1,
        )

        carried = 0
        if current is not None:
            for old in self.get_daily_progress(current.id):
                if old.day_number > duration:
                    continue
                self.db.add(DailyProgress(
                    user_id=user_id,
                    user_plan_id=upgraded.id,
                    day_number=old.day_number,
                    date=old.date,
                    workout_completed=old.workout_completed,
                    meal_completed=old.meal_completed,
                    calories_burned=old.calories_burned,
                    workout_duration_seconds=old.workout_duration_seconds,
                    exercises=list(old.exercises or []),
                    notes=old.notes,
                    completed_at=old.completed_at,
                ))
                carried += 1

        self.db.commit()
        self.db.refresh(upgraded)

        logger.info(
            f"Upgraded plan for user {user_id} to {subscription_tier}",
            extra={"extra_fields": {
                "user_id": user_id,
                "plan_id": str(upgraded.id),
                "previous_plan_id": str(current.id) if current else None,
                "progress_records_carried": carried,
            }},
        )
        return upgraded

    def get_daily_progress(self, plan_id: Union[str, UUID]) -> List[DailyProgress]:
        return (
            self.db.query(DailyProgress)
            .filter(DailyProgress.user_plan_id == _as_uuid(plan_id))
            .order_by(DailyProgress.day_number.asc())
            .all()
        )
