"""
Plan selection flow.

Ties a user's chosen subscription plan to plan generation:

    free-trial + active subscription  -> plan sized for that subscription
    free-trial, trial already used    -> 409
    free-trial                        -> start trial, 7-day plan (3 days open)
    paid plan, already active         -> plan sized for the paid tier
    paid plan, not active             -> 402, pay first
    unknown plan id                   -> 422

Payment completion verifies the reference with Paystack, and checks that the
amount and currency cover the chosen plan, before anything is written.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from core.auth import CurrentUser
from core.config import settings
from core.exceptions import (
    ConflictError,
    PaymentRequiredError,
    PaymentVerificationError,
    ValidationError,
)
from models import UserPlan
from services.paystack_service import PaystackService
from services.plan_content import RandomSource, SubscriptionTier
from services.plan_service import PlanService
from services.subscription_service import SubscriptionService, get_subscription_plan

logger = logging.getLogger(__name__)


class PlanGenerationService:
    def __init__(
        self,
        db: Session,
        subscriptions: Optional[SubscriptionService] = None,
        paystack: Optional[PaystackService] = None,
        rng: Optional[RandomSource] = None,
    ):
        self.db = db
        self.plans = PlanService(db, rng=rng)
        self.subscriptions = subscriptions or SubscriptionService(db)
        self._paystack = paystack

    @property
    def paystack(self) -> PaystackService:
        # Built lazily: a missing secret key must only fail payment calls.
        if self._paystack is None:
            self._paystack = PaystackService()
        return self._paystack

    def generate_for_selection(self, user: CurrentUser, selected_plan: str) -> UserPlan:
        plan = get_subscription_plan(selected_plan)
        if plan is None:
            raise ValidationError(f"Unknown subscription plan: {selected_plan}", field="plan_id")

        status = self.subscriptions.check_subscription(user.user_id)

        if plan.is_trial:
            if status.active and status.plan:
                return self.plans.create_plan_for_tier(user.user_id, status.plan)
            if self.subscriptions.has_used_free_trial(user.user_id):
                raise ConflictError("Free trial already used")
            # Trial and its plan land in one commit; a failed plan keeps the trial unused.
            try:
                self.subscriptions.start_free_trial(user, commit=False)
                return self.plans.create_plan_for_tier(user.user_id, SubscriptionTier.FREE_TRIAL)
            except Exception:
                self.db.rollback()
                raise

        if status.active and status.plan == plan.id:
            return self.plans.create_plan_for_tier(user.user_id, plan.id)

        logger.info(
            f"Payment required for {plan.id} (user {user.user_id})",
            extra={"extra_fields": {"user_id": user.user_id, "plan": plan.id, "current": status.plan}},
        )
        raise PaymentRequiredError(plan.id)

    def complete_payment(self, user: CurrentUser, plan_id: str, reference: str) -> UserPlan:
        """
        Verify a Paystack reference, then upgrade the subscriber and the
        active plan. Nothing is written when verification fails.
        """
        plan = get_subscription_plan(plan_id)
        if plan is None or plan.is_trial:
            raise ValidationError(f"Not a paid subscription plan: {plan_id}", field="plan_id")

        verification = self.paystack.verify_transaction(reference)
        if not verification.success:
            logger.warning(
                f"Payment verification failed for user {user.user_id}",
                extra={"extra_fields": {"user_id": user.user_id, "reference": reference, "plan": plan.id}},
            )
            raise PaymentVerificationError(reference, verification.message or "Payment verification failed")

        if verification.currency != settings.DEFAULT_CURRENCY or (verification.amount or 0) < plan.amount:
            logger.warning(
                f"Payment for {plan.id} does not cover the plan price (user {user.user_id})",
                extra={"extra_fields": {
                    "user_id": user.user_id,
                    "reference": reference,
                    "plan": plan.id,
                    "amount": verification.amount,
                    "currency": verification.currency,
                    "expected_amount": plan.amount,
                }},
            )
            raise PaymentVerificationError(reference, "Payment amount does not match the selected plan")

        self.subscriptions.upgrade_user(
            user,
            plan,
            reference,
            amount_paid=verification.amount,
            currency=verification.currency,
        )
        return self.plans.upgrade_plan(user.user_id, plan.id)
