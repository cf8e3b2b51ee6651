from sqlalchemy import Column, Integer, Boolean, CheckConstraint, Float, Date, DateTime, ForeignKey, Text, Index, UniqueConstraint, Uuid, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func
from core.database import Base
import uuid
from datetime import datetime, timezone

from services.plan_content import PlanContent
from services.progress import DailyProgressRecord

# JSONB on Postgres, plain JSON elsewhere (sqlite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Subscriber(Base):
    """
    Subscription + trial state for one identity-provider user.

    user_id is the provider's opaque subject; there is no local user table.
    """
    __tablename__ = "subscribers"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, unique=True, nullable=False, index=True)
    email = Column(Text, nullable=True)

    # --- TRIAL ---
    # One trial per user; has_used_trial never goes back to False.
    has_used_trial = Column(Boolean, default=False, nullable=False)
    trial_started_at = Column(DateTime(timezone=True), nullable=True)

    # --- PAID SUBSCRIPTION ---
    subscribed = Column(Boolean, default=False, nullable=False)
    subscription_tier = Column(Text, nullable=True)  # 'free-trial' | 'monthly' | 'semi-annual' | 'annual'
    subscription_end = Column(DateTime(timezone=True), nullable=True)
    plan_duration = Column(Integer, nullable=True)
    amount_paid = Column(Integer, nullable=True)  # minor units (kobo)
    currency = Column(Text, nullable=True)
    payment_reference = Column(Text, unique=True, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class UserPlan(Base):
    """
    A generated plan. Content is written once; a tier upgrade supersedes the
    plan with a new row instead of editing it.
    """
    __tablename__ = "user_plans"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    name = Column(Text, nullable=False)
    duration = Column(Integer, nullable=False)
    subscription_tier = Column(Text, nullable=False, default="free-trial")
    is_active = Column(Boolean, nullable=False, default=True)
    current_day = Column(Integer, nullable=False, default=1)

    # {"workouts": [...], "meals": [...]} as produced by PlanContent.to_dict()
    content = Column(JSONType, nullable=False)

    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    progress_records = relationship(
        "DailyProgress",
        back_populates="user_plan",
        order_by="DailyProgress.day_number",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        CheckConstraint("duration > 0", name="ck_user_plans_duration_positive"),
        Index("ix_user_plans_user_active", "user_id", "is_active"),
    )

    def get_content(self) -> PlanContent:
        return PlanContent.from_dict(self.content or {})


class DailyProgress(Base):
    """One completion record per (plan, day). Upserted, never deleted."""
    __tablename__ = "daily_progress"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    user_plan_id = Column(Uuid, ForeignKey("user_plans.id"), nullable=False, index=True)
    day_number = Column(Integer, nullable=False)
    date = Column(Date, nullable=True)

    workout_completed = Column(Boolean, nullable=False, default=False)
    meal_completed = Column(Boolean, nullable=False, default=False)
    calories_burned = Column(Float, nullable=False, default=0)
    workout_duration_seconds = Column(Integer, nullable=False, default=0)
    exercises = Column(JSONType, nullable=False, default=list)
    notes = Column(Text, nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user_plan = relationship("UserPlan", back_populates="progress_records")

    __table_args__ = (
        UniqueConstraint("user_plan_id", "day_number", name="uq_daily_progress_plan_day"),
        CheckConstraint("day_number > 0", name="ck_daily_progress_day_positive"),
    )

    def to_record(self) -> DailyProgressRecord:
        return DailyProgressRecord(
            day_number=self.day_number,
            date=self.date,
            workout_completed=bool(self.workout_completed),
            meal_completed=bool(self.meal_completed),
            calories_burned=self.calories_burned or 0,
            workout_duration_seconds=self.workout_duration_seconds or 0,
            exercises=tuple(self.exercises or ()),
        )

    def apply_record(self, record: DailyProgressRecord) -> None:
        self.date = record.date
        self.workout_completed = record.workout_completed
        self.meal_completed = record.meal_completed
        self.calories_burned = record.calories_burned
        self.workout_duration_seconds = record.workout_duration_seconds
        self.exercises = list(record.exercises)
