"""
Plans API Router

Endpoints for:
- Listing a user's plans and fetching the active one
- Fetching a plan with its workout + meal content
- Generating a plan for a selected subscription plan
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.auth import CurrentUser, get_current_user
from core.database import get_db
from core.exceptions import NotFoundError
from models import UserPlan
from schemas import GeneratePlanRequest, UserPlanResponse, UserPlanSummary
from services.plan_content import EntitlementsService
from services.plan_generation_service import PlanGenerationService
from services.plan_service import PlanService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/plans", tags=["plans"])


def _plan_response(plan: UserPlan, entitlements: EntitlementsService) -> UserPlanResponse:
    return UserPlanResponse(
        id=plan.id,
        name=plan.name,
        duration=plan.duration,
        subscription_tier=plan.subscription_tier,
        is_active=plan.is_active,
        current_day=plan.current_day,
        created_at=plan.created_at,
        content=plan.get_content().to_dict(),
        accessible_days=entitlements.accessible_days(plan.subscription_tier, plan.duration),
    )


@router.get("", response_model=List[UserPlanSummary])
def list_plans(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """All of the user's plans, newest first."""
    return PlanService(db).get_user_plans(current_user.user_id)


@router.get("/active", response_model=UserPlanResponse)
def get_active_plan(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = PlanService(db)
    plan = svc.get_active_plan(current_user.user_id)
    if plan is None:
        raise NotFoundError("Active plan", current_user.user_id)
    return _plan_response(plan, svc.entitlements)


@router.get("/{plan_id}", response_model=UserPlanResponse)
def get_plan(
    plan_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = PlanService(db)
    plan = svc.get_plan(current_user.user_id, plan_id)
    return _plan_response(plan, svc.entitlements)


@router.post("/generate", response_model=UserPlanResponse, status_code=status.HTTP_201_CREATED)
def generate_plan(
    request: GeneratePlanRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Generate a plan for the selected subscription plan.

    Returns 402 when a paid plan is selected without an active payment,
    409 when the free trial was already used.
    """
    svc = PlanGenerationService(db)
    plan = svc.generate_for_selection(current_user, request.plan_id)
    return _plan_response(plan, svc.plans.entitlements)
