from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from core.auth import CurrentUser, get_current_user
from core.database import get_db
from schemas import (
    StartTrialResponse,
    SubscriptionPlanResponse,
    SubscriptionStatusResponse,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from services.plan_generation_service import PlanGenerationService
from services.subscription_service import SUBSCRIPTION_PLANS, SubscriptionService


router = APIRouter(prefix="/v1/billing", tags=["billing"])


@router.get("/plans", response_model=List[SubscriptionPlanResponse])
def list_subscription_plans():
    """Public plan catalog. Amounts are in kobo."""
    return [plan.to_dict() for plan in SUBSCRIPTION_PLANS.values()]


@router.get("/subscription", response_model=SubscriptionStatusResponse)
def get_subscription(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return SubscriptionService(db).check_subscription(current_user.user_id).to_dict()


@router.post("/trial/start", response_model=StartTrialResponse)
def start_trial(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Start the free trial without generating a plan.

    Policy:
    - One trial per user (has_used_trial is never reset)
    - Cannot start a trial while a paid subscription is active
    """
    sub = SubscriptionService(db).start_free_trial(current_user)
    return {
        "success": True,
        "trial_started_at": sub.trial_started_at,
        "trial_ends_at": sub.subscription_end,
    }


@router.post("/verify", response_model=VerifyPaymentResponse)
def verify_payment(
    request: VerifyPaymentRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Verify a Paystack payment reference and upgrade the subscription.

    The active plan is replaced by one sized for the paid tier; progress
    carries over by day number.
    """
    svc = PlanGenerationService(db)
    try:
        plan = svc.complete_payment(current_user, request.plan_id, request.reference)
    except RuntimeError as e:
        raise HTTPException(status_code=503, detail=str(e))

    return {
        "success": True,
        "subscription": svc.subscriptions.check_subscription(current_user.user_id).to_dict(),
        "plan": plan,
    }
