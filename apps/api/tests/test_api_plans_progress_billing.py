"""
API tests for /v1/plans, /v1/progress and /v1/billing.
"""
from unittest.mock import patch

from conftest import make_auth_headers
from services.paystack_service import PaymentVerification


def _generate(client, headers, plan_id="free-trial"):
    return client.post("/v1/plans/generate", json={"plan_id": plan_id}, headers=headers)


class TestHealth:

    def test_ping(self, client):
        assert client.get("/ping").json() == {"pong": True}

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"


class TestAuth:

    def test_missing_token(self, client):
        resp = client.get("/v1/plans")
        assert resp.status_code == 401
        assert resp.json()["error_code"] == "UNAUTHORIZED"

    def test_invalid_token(self, client):
        resp = client.get("/v1/plans", headers={"Authorization": "Bearer not-a-jwt"})
        assert resp.status_code == 401


class TestPlans:

    def test_generate_trial_plan(self, client, auth_headers):
        resp = _generate(client, auth_headers)
        assert resp.status_code == 201
        data = resp.json()
        assert data["duration"] == 7
        assert data["accessible_days"] == 3
        assert len(data["content"]["workouts"]) == 7
        assert len(data["content"]["meals"]) == 7
        assert len(data["content"]["workouts"][0]["exercises"]) == 4

    def test_generate_trial_twice_conflicts_once_lapsed(self, client, auth_headers, db_session):
        from services.subscription_service import SubscriptionService

        SubscriptionService(db_session).mark_trial_as_used("user-123")
        resp = _generate(client, auth_headers)
        assert resp.status_code == 409

    def test_generate_paid_plan_requires_payment(self, client, auth_headers):
        resp = _generate(client, auth_headers, "annual")
        assert resp.status_code == 402
        assert resp.json()["error_code"] == "PAYMENT_REQUIRED"

    def test_generate_unknown_plan(self, client, auth_headers):
        assert _generate(client, auth_headers, "weekly").status_code == 422

    def test_list_active_and_get(self, client, auth_headers):
        created = _generate(client, auth_headers).json()

        listed = client.get("/v1/plans", headers=auth_headers).json()
        assert [p["id"] for p in listed] == [created["id"]]
        assert "content" not in listed[0]

        active = client.get("/v1/plans/active", headers=auth_headers).json()
        assert active["id"] == created["id"]

        fetched = client.get(f"/v1/plans/{created['id']}", headers=auth_headers)
        assert fetched.status_code == 200
        assert fetched.json()["content"] == created["content"]

    def test_no_active_plan(self, client, auth_headers):
        assert client.get("/v1/plans/active", headers=auth_headers).status_code == 404

    def test_other_users_plan_is_not_found(self, client, auth_headers):
        created = _generate(client, auth_headers).json()
        resp = client.get(f"/v1/plans/{created['id']}", headers=make_auth_headers("someone-else"))
        assert resp.status_code == 404


class TestProgress:

    def _complete(self, client, headers, plan_id, day, **body):
        return client.post(f"/v1/progress/{plan_id}/days/{day}/complete", json=body, headers=headers)

    def test_complete_day_and_aggregate(self, client, auth_headers):
        plan_id = _generate(client, auth_headers).json()["id"]

        r1 = self._complete(client, auth_headers, plan_id, 1, kind="workout", calories_burned=100, date="2026-04-01")
        assert r1.status_code == 200
        assert r1.json()["state"] == "workout_only"
        r2 = self._complete(client, auth_headers, plan_id, 1, kind="meal", date="2026-04-01")
        assert r2.json()["state"] == "both_complete"
        self._complete(client, auth_headers, plan_id, 2, kind="workout", calories_burned=50, date="2026-04-02")

        data = client.get(f"/v1/progress/{plan_id}", headers=auth_headers).json()
        assert data["total_calories_burned"] == 150
        assert data["completion_percentage"] == 50
        assert data["current_streak"] == 0
        assert data["completed_days"] == 1
        assert [d["day_number"] for d in data["daily_progress"]] == [1, 2]

    def test_calories_estimated_from_duration(self, client, auth_headers):
        plan_id = _generate(client, auth_headers).json()["id"]

        resp = self._complete(
            client, auth_headers, plan_id, 1,
            kind="workout", workout_duration_seconds=1200, exercises=["Push-ups", "Squats"],
        )
        # 10 min Push-ups at 8/min + 10 min Squats at 7/min
        assert resp.json()["calories_burned"] == 150

    def test_calories_estimated_from_plan_exercises(self, client, auth_headers):
        plan_id = _generate(client, auth_headers).json()["id"]
        resp = self._complete(client, auth_headers, plan_id, 1, kind="workout", workout_duration_seconds=600)
        assert resp.json()["calories_burned"] > 0

    def test_trial_locked_day_is_forbidden(self, client, auth_headers):
        plan_id = _generate(client, auth_headers).json()["id"]
        resp = self._complete(client, auth_headers, plan_id, 5, kind="meal")
        assert resp.status_code == 403

    def test_day_outside_plan_is_not_found(self, client, auth_headers):
        plan_id = _generate(client, auth_headers).json()["id"]
        assert self._complete(client, auth_headers, plan_id, 8, kind="meal").status_code == 404

    def test_unknown_plan_is_not_found(self, client, auth_headers):
        resp = client.get("/v1/progress/00000000-0000-0000-0000-000000000000", headers=auth_headers)
        assert resp.status_code == 404

    def test_invalid_kind(self, client, auth_headers):
        plan_id = _generate(client, auth_headers).json()["id"]
        assert self._complete(client, auth_headers, plan_id, 1, kind="sleep").status_code == 422

    def test_get_single_day(self, client, auth_headers):
        plan_id = _generate(client, auth_headers).json()["id"]
        self._complete(client, auth_headers, plan_id, 2, kind="meal")

        resp = client.get(f"/v1/progress/{plan_id}/days/2", headers=auth_headers)
        assert resp.json()["state"] == "meal_only"
        untouched = client.get(f"/v1/progress/{plan_id}/days/3", headers=auth_headers)
        assert untouched.json()["state"] == "not_started"


class TestBilling:

    def test_list_plans_is_public(self, client):
        resp = client.get("/v1/billing/plans")
        assert resp.status_code == 200
        assert [p["id"] for p in resp.json()] == ["free-trial", "monthly", "semi-annual", "annual"]

    def test_subscription_status_defaults_inactive(self, client, auth_headers):
        data = client.get("/v1/billing/subscription", headers=auth_headers).json()
        assert data["active"] is False

    def test_start_trial_then_conflict(self, client, auth_headers):
        first = client.post("/v1/billing/trial/start", headers=auth_headers)
        assert first.status_code == 200
        assert first.json()["success"] is True

        second = client.post("/v1/billing/trial/start", headers=auth_headers)
        assert second.status_code == 409

    def test_verify_payment_upgrades_plan(self, client, auth_headers):
        _generate(client, auth_headers)
        ok = PaymentVerification(reference="ref-api", success=True, amount=3900000, currency="NGN")

        with patch("services.paystack_service.PaystackService.verify_transaction", return_value=ok):
            resp = client.post(
                "/v1/billing/verify",
                json={"plan_id": "semi-annual", "reference": "ref-api"},
                headers=auth_headers,
            )

        assert resp.status_code == 200
        data = resp.json()
        assert data["success"] is True
        assert data["subscription"]["plan"] == "semi-annual"
        assert data["plan"]["duration"] == 180

        active = client.get("/v1/plans/active", headers=auth_headers).json()
        assert active["accessible_days"] == 180

    def test_verify_payment_failure_is_402(self, client, auth_headers):
        failed = PaymentVerification(reference="ref-bad", success=False, message="Payment verification failed")

        with patch("services.paystack_service.PaystackService.verify_transaction", return_value=failed):
            resp = client.post(
                "/v1/billing/verify",
                json={"plan_id": "monthly", "reference": "ref-bad"},
                headers=auth_headers,
            )

        assert resp.status_code == 402
        assert resp.json()["error_code"] == "PAYMENT_VERIFICATION_FAILED"

    def test_verify_without_paystack_key_is_503(self, client, auth_headers, monkeypatch):
        from core.config import settings

        monkeypatch.setattr(settings, "PAYSTACK_SECRET_KEY", None)
        resp = client.post(
            "/v1/billing/verify",
            json={"plan_id": "monthly", "reference": "ref-x"},
            headers=auth_headers,
        )
        assert resp.status_code == 503

    def test_verify_underpaid_reference_is_402(self, client, auth_headers):
        cheap = PaymentVerification(reference="ref-cheap", success=True, amount=100, currency="NGN")

        with patch("services.paystack_service.PaystackService.verify_transaction", return_value=cheap):
            resp = client.post(
                "/v1/billing/verify",
                json={"plan_id": "annual", "reference": "ref-cheap"},
                headers=auth_headers,
            )

        assert resp.status_code == 402
        assert resp.json()["error_code"] == "PAYMENT_VERIFICATION_FAILED"
        assert client.get("/v1/billing/subscription", headers=auth_headers).json()["active"] is False
