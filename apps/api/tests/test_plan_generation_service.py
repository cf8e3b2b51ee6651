"""
Tests for the plan selection flow and payment completion.
"""
from unittest.mock import MagicMock

import pytest

from core.auth import CurrentUser
from core.exceptions import (
    ConflictError,
    PaymentRequiredError,
    PaymentVerificationError,
    ValidationError,
)
from services.paystack_service import PaymentVerification
from services.plan_generation_service import PlanGenerationService
from services.progress import CompletionKind
from services.progress_service import ProgressService
from services.subscription_service import SubscriptionService, get_subscription_plan

USER = CurrentUser(user_id="user-selection", email="select@example.com")


def _paystack(success=True, amount=780000):
    paystack = MagicMock()
    paystack.verify_transaction.side_effect = lambda reference: PaymentVerification(
        reference=reference,
        success=success,
        amount=amount if success else None,
        currency="NGN" if success else None,
        message="Payment verified successfully" if success else "Payment verification failed",
    )
    return paystack


def test_free_trial_selection_starts_trial_with_seven_day_plan(db_session):
    svc = PlanGenerationService(db_session)
    plan = svc.generate_for_selection(USER, "free-trial")

    assert plan.duration == 7
    assert plan.subscription_tier == "free-trial"
    assert svc.subscriptions.has_used_free_trial(USER.user_id) is True
    assert svc.subscriptions.check_subscription(USER.user_id).active is True


def test_free_trial_cannot_be_selected_twice_after_it_lapses(db_session):
    SubscriptionService(db_session).mark_trial_as_used(USER.user_id)
    with pytest.raises(ConflictError):
        PlanGenerationService(db_session).generate_for_selection(USER, "free-trial")


def test_free_trial_with_active_paid_subscription_uses_paid_duration(db_session):
    SubscriptionService(db_session).upgrade_user(USER, get_subscription_plan("annual"), "ref-annual")
    plan = PlanGenerationService(db_session).generate_for_selection(USER, "free-trial")
    assert plan.duration == 365
    assert plan.subscription_tier == "annual"


def test_paid_selection_without_payment_requires_payment(db_session):
    with pytest.raises(PaymentRequiredError) as exc:
        PlanGenerationService(db_session).generate_for_selection(USER, "monthly")
    assert exc.value.status_code == 402


def test_paid_selection_with_matching_subscription_generates(db_session):
    SubscriptionService(db_session).upgrade_user(USER, get_subscription_plan("monthly"), "ref-monthly")
    plan = PlanGenerationService(db_session).generate_for_selection(USER, "monthly")
    assert plan.duration == 30


def test_unknown_plan_id(db_session):
    with pytest.raises(ValidationError):
        PlanGenerationService(db_session).generate_for_selection(USER, "weekly")


def test_complete_payment_upgrades_subscription_and_plan(db_session):
    svc = PlanGenerationService(db_session, paystack=_paystack())
    trial_plan = svc.generate_for_selection(USER, "free-trial")
    ProgressService(db_session).record_completion(USER.user_id, trial_plan.id, 1, CompletionKind.MEAL)

    plan = svc.complete_payment(USER, "monthly", "ref-pay-1")

    assert plan.duration == 30
    assert plan.subscription_tier == "monthly"
    assert [r.day_number for r in svc.plans.get_daily_progress(plan.id)] == [1]

    status = svc.subscriptions.check_subscription(USER.user_id)
    assert status.active is True
    assert status.plan == "monthly"
    sub = svc.subscriptions.get_subscriber(USER.user_id)
    assert sub.payment_reference == "ref-pay-1"
    assert sub.amount_paid == 780000


def test_failed_verification_writes_nothing(db_session):
    svc = PlanGenerationService(db_session, paystack=_paystack(success=False))
    with pytest.raises(PaymentVerificationError):
        svc.complete_payment(USER, "monthly", "ref-bad")

    assert svc.subscriptions.get_subscriber(USER.user_id) is None
    assert svc.plans.get_active_plan(USER.user_id) is None


def test_complete_payment_rejects_trial_plan(db_session):
    paystack = _paystack()
    svc = PlanGenerationService(db_session, paystack=paystack)
    with pytest.raises(ValidationError):
        svc.complete_payment(USER, "free-trial", "ref-x")
    paystack.verify_transaction.assert_not_called()


def test_underpaid_reference_is_rejected_before_any_write(db_session):
    svc = PlanGenerationService(db_session, paystack=_paystack(amount=100))
    with pytest.raises(PaymentVerificationError) as exc:
        svc.complete_payment(USER, "annual", "ref-cheap")

    assert exc.value.reference == "ref-cheap"
    assert svc.subscriptions.get_subscriber(USER.user_id) is None
    assert svc.plans.get_active_plan(USER.user_id) is None


def test_payment_in_another_currency_is_rejected(db_session):
    paystack = MagicMock()
    paystack.verify_transaction.return_value = PaymentVerification(
        reference="ref-usd", success=True, amount=7600000, currency="USD",
    )
    svc = PlanGenerationService(db_session, paystack=paystack)
    with pytest.raises(PaymentVerificationError):
        svc.complete_payment(USER, "annual", "ref-usd")

    assert svc.subscriptions.check_subscription(USER.user_id).active is False


def test_reused_reference_cannot_upgrade_again(db_session):
    svc = PlanGenerationService(db_session, paystack=_paystack(amount=7600000))
    first = svc.complete_payment(USER, "monthly", "ref-once")
    assert first.duration == 30

    with pytest.raises(ConflictError):
        svc.complete_payment(USER, "annual", "ref-once")

    assert svc.subscriptions.check_subscription(USER.user_id).plan == "monthly"
    assert svc.plans.get_active_plan(USER.user_id).duration == 30


def test_failed_trial_plan_leaves_trial_unused(db_session, monkeypatch):
    svc = PlanGenerationService(db_session)

    def broken_plan(user_id, tier):
        raise RuntimeError("plan generation failed")

    monkeypatch.setattr(svc.plans, "create_plan_for_tier", broken_plan)
    with pytest.raises(RuntimeError):
        svc.generate_for_selection(USER, "free-trial")

    assert svc.subscriptions.has_used_free_trial(USER.user_id) is False
    monkeypatch.undo()
    plan = PlanGenerationService(db_session).generate_for_selection(USER, "free-trial")
    assert plan.duration == 7
