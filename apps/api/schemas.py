from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime, date as date_type
from uuid import UUID
from typing import Optional, List, Literal


# ========== Plan content ==========

class ExerciseAssignmentResponse(BaseModel):
    name: str
    sets: int
    reps: int
    rest: str


class DayWorkoutResponse(BaseModel):
    day: int
    exercises: List[ExerciseAssignmentResponse]


class DayMealResponse(BaseModel):
    day: int
    breakfast: str
    mid_morning_snack: str
    lunch: str
    afternoon_snack: str
    dinner: str


class PlanContentResponse(BaseModel):
    workouts: List[DayWorkoutResponse]
    meals: List[DayMealResponse]


class UserPlanSummary(BaseModel):
    """Plan row without content, for list views"""
    id: UUID
    name: str
    duration: int
    subscription_tier: str
    is_active: bool
    current_day: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserPlanResponse(UserPlanSummary):
    content: PlanContentResponse
    accessible_days: int


class GeneratePlanRequest(BaseModel):
    plan_id: str = Field(..., description="Subscription plan id: free-trial, monthly, semi-annual, annual")


# ========== Progress ==========

class DailyProgressResponse(BaseModel):
    day_number: int
    date: Optional[date_type] = None
    workout_completed: bool = False
    meal_completed: bool = False
    calories_burned: float = 0
    workout_duration_seconds: int = 0
    exercises: List[str] = []
    state: str


class CompleteDayRequest(BaseModel):
    """One completion event for a plan day"""
    kind: Literal["workout", "meal"]
    calories_burned: Optional[float] = Field(default=None, ge=0)
    workout_duration_seconds: Optional[int] = Field(default=None, ge=0)
    exercises: Optional[List[str]] = None
    notes: Optional[str] = Field(default=None, max_length=2000)
    date: Optional[date_type] = None


class AggregateProgressResponse(BaseModel):
    plan_id: UUID
    total_calories_burned: float
    completed_days: int
    current_streak: int
    completion_percentage: int
    daily_progress: List[DailyProgressResponse]


# ========== Billing ==========

class SubscriptionPlanResponse(BaseModel):
    id: str
    name: str
    amount: int  # kobo
    duration: int
    description: str
    display_name: str
    plan_days: int


class SubscriptionStatusResponse(BaseModel):
    active: bool
    plan: Optional[str] = None
    expires_at: Optional[datetime] = None
    trial_started_at: Optional[datetime] = None
    is_trial_expired: bool = False


class StartTrialResponse(BaseModel):
    success: bool
    trial_started_at: datetime
    trial_ends_at: datetime


class VerifyPaymentRequest(BaseModel):
    plan_id: str
    reference: str = Field(..., min_length=1)


class VerifyPaymentResponse(BaseModel):
    success: bool
    subscription: SubscriptionStatusResponse
    plan: UserPlanSummary
