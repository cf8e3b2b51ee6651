"""
Subscription Service

Trial and paid-subscription state for a user, keyed by the identity
provider's subject. Payment capture happens client-side; this service only
records the outcome of a verified payment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from types import MappingProxyType
from typing import Mapping, Optional

from sqlalchemy.orm import Session

from core.auth import CurrentUser
from core.config import settings
from core.exceptions import ConflictError
from models import Subscriber
from services.plan_content import SubscriptionTier, TIER_PLAN_DURATIONS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubscriptionPlan:
    id: str
    name: str
    amount: int  # minor units (kobo)
    duration: int  # days of access
    description: str
    display_name: str

    @property
    def is_trial(self) -> bool:
        return self.id == SubscriptionTier.FREE_TRIAL.value

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "amount": self.amount,
            "duration": self.duration,
            "description": self.description,
            "display_name": self.display_name,
            "plan_days": TIER_PLAN_DURATIONS[SubscriptionTier(self.id)],
        }


SUBSCRIPTION_PLANS: Mapping[str, SubscriptionPlan] = MappingProxyType({
    "free-trial": SubscriptionPlan(
        id="free-trial",
        name="Free Trial",
        amount=0,
        duration=3,
        description="Try the first 3 days of a personalized plan",
        display_name="3-Day Free Trial",
    ),
    "monthly": SubscriptionPlan(
        id="monthly",
        name="Monthly",
        amount=780000,
        duration=30,
        description="30 days of workouts and meal plans",
        display_name="Monthly Plan",
    ),
    "semi-annual": SubscriptionPlan(
        id="semi-annual",
        name="Semi-Annual",
        amount=3900000,
        duration=180,
        description="6 months of workouts and meal plans",
        display_name="6-Month Plan",
    ),
    "annual": SubscriptionPlan(
        id="annual",
        name="Annual",
        amount=7600000,
        duration=365,
        description="A full year of workouts and meal plans",
        display_name="Annual Plan",
    ),
})


def get_subscription_plan(plan_id: str) -> Optional[SubscriptionPlan]:
    return SUBSCRIPTION_PLANS.get(plan_id)


def _as_aware(value: Optional[datetime]) -> Optional[datetime]:
    # sqlite hands back naive datetimes; everything stored is UTC
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


@dataclass
class SubscriptionStatus:
    active: bool
    plan: Optional[str] = None
    expires_at: Optional[datetime] = None
    trial_started_at: Optional[datetime] = None
    is_trial_expired: bool = False

    def to_dict(self) -> dict:
        return {
            "active": self.active,
            "plan": self.plan,
            "expires_at": self.expires_at,
            "trial_started_at": self.trial_started_at,
            "is_trial_expired": self.is_trial_expired,
        }


class SubscriptionService:
    def __init__(self, db: Session, now: Optional[datetime] = None):
        self.db = db
        # Fixed clock for tests; None means wall clock.
        self._now = now

    def now(self) -> datetime:
        return self._now or datetime.now(timezone.utc)

    def get_subscriber(self, user_id: str) -> Optional[Subscriber]:
        return self.db.query(Subscriber).filter(Subscriber.user_id == user_id).first()

    def _get_or_create(self, user_id: str, email: Optional[str] = None) -> Subscriber:
        sub = self.get_subscriber(user_id)
        if sub is None:
            sub = Subscriber(user_id=user_id, email=email)
            self.db.add(sub)
        elif email and not sub.email:
            sub.email = email
        return sub

    def has_used_free_trial(self, user_id: str) -> bool:
        sub = self.get_subscriber(user_id)
        return bool(sub and sub.has_used_trial)

    def mark_trial_as_used(self, user_id: str, email: Optional[str] = None) -> Subscriber:
        sub = self._get_or_create(user_id, email)
        sub.has_used_trial = True
        self.db.commit()
        self.db.refresh(sub)
        return sub

    def _has_paid_access(self, sub: Optional[Subscriber]) -> bool:
        if sub is None or not sub.subscribed:
            return False
        if sub.subscription_tier in (None, SubscriptionTier.FREE_TRIAL.value):
            return False
        end = _as_aware(sub.subscription_end)
        return end is not None and end > self.now()

    def start_free_trial(self, user: CurrentUser, commit: bool = True) -> Subscriber:
        """
        Start the one-time free trial.

        With commit=False the row is only flushed; the caller owns the commit.

        Policy:
        - One trial per user (has_used_trial never resets)
        - No trial on top of paid access
        """
        sub = self.get_subscriber(user.user_id)
        if sub is not None and (sub.has_used_trial or sub.trial_started_at is not None):
            raise ConflictError("Trial already used")
        if self._has_paid_access(sub):
            raise ConflictError("Already has paid access")

        sub = self._get_or_create(user.user_id, user.email)
        now = self.now()
        sub.has_used_trial = True
        sub.trial_started_at = now
        sub.subscribed = True
        sub.subscription_tier = SubscriptionTier.FREE_TRIAL.value
        sub.subscription_end = now + timedelta(days=settings.TRIAL_ACCESS_DAYS)
        sub.plan_duration = settings.TRIAL_ACCESS_DAYS
        sub.amount_paid = 0
        sub.currency = settings.DEFAULT_CURRENCY
        if commit:
            self.db.commit()
            self.db.refresh(sub)
        else:
            self.db.flush()

        logger.info(
            f"Started free trial for user {user.user_id}",
            extra={"extra_fields": {"user_id": user.user_id, "trial_ends_at": sub.subscription_end.isoformat()}},
        )
        return sub

    def check_subscription(self, user_id: str) -> SubscriptionStatus:
        sub = self.get_subscriber(user_id)
        if sub is None:
            return SubscriptionStatus(active=False)

        now = self.now()
        trial_started_at = _as_aware(sub.trial_started_at)
        is_trial_expired = bool(
            trial_started_at
            and now > trial_started_at + timedelta(days=settings.TRIAL_ACCESS_DAYS)
        )

        expires_at = _as_aware(sub.subscription_end)
        if sub.subscription_tier == SubscriptionTier.FREE_TRIAL.value:
            active = bool(sub.subscribed) and trial_started_at is not None and not is_trial_expired
        else:
            active = self._has_paid_access(sub)

        return SubscriptionStatus(
            active=active,
            plan=sub.subscription_tier if sub.subscribed else None,
            expires_at=expires_at,
            trial_started_at=trial_started_at,
            is_trial_expired=is_trial_expired,
        )

    def upgrade_user(
        self,
        user: CurrentUser,
        plan: SubscriptionPlan,
        reference: str,
        amount_paid: Optional[int] = None,
        currency: Optional[str] = None,
    ) -> Subscriber:
        """Record a verified payment: the subscription runs plan.duration days from now."""
        existing = (
            self.db.query(Subscriber)
            .filter(Subscriber.payment_reference == reference)
            .first()
        )
        if existing is not None:
            raise ConflictError("Payment reference already used")

        sub = self._get_or_create(user.user_id, user.email)
        now = self.now()
        sub.subscribed = True
        sub.subscription_tier = plan.id
        sub.subscription_end = now + timedelta(days=plan.duration)
        sub.plan_duration = plan.duration
        sub.amount_paid = plan.amount if amount_paid is None else amount_paid
        sub.currency = currency or settings.DEFAULT_CURRENCY
        sub.payment_reference = reference
        self.db.commit()
        self.db.refresh(sub)

        logger.info(
            f"Upgraded user {user.user_id} to {plan.id}",
            extra={"extra_fields": {
                "user_id": user.user_id,
                "plan": plan.id,
                "reference": reference,
                "subscription_end": sub.subscription_end.isoformat(),
            }},
        )
        return sub
