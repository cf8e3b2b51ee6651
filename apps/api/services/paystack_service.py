from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from core.config import settings
from core.exceptions import PaymentVerificationError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaystackConfig:
    secret_key: str
    base_url: str
    timeout_s: int


def _get_paystack_config() -> PaystackConfig:
    """
    Load Paystack config via Settings.

    Fail closed: without a secret key there is nothing to verify against.
    """
    secret_key = getattr(settings, "PAYSTACK_SECRET_KEY", None)
    if not secret_key:
        raise RuntimeError("Paystack not configured (missing: PAYSTACK_SECRET_KEY)")

    return PaystackConfig(
        secret_key=str(secret_key),
        base_url=str(settings.PAYSTACK_BASE_URL).rstrip("/"),
        timeout_s=int(settings.PAYSTACK_TIMEOUT_S),
    )


@dataclass
class PaymentVerification:
    reference: str
    success: bool
    amount: Optional[int] = None  # minor units (kobo)
    currency: Optional[str] = None
    gateway_status: Optional[str] = None
    message: str = ""
    data: Dict[str, Any] = field(default_factory=dict)


class PaystackService:
    def __init__(self, session: Optional[requests.Session] = None) -> None:
        self.cfg = _get_paystack_config()
        self.http = session or requests.Session()

    def verify_transaction(self, reference: str) -> PaymentVerification:
        """
        Ask Paystack whether a transaction reference settled.

        success is True only when the HTTP call succeeds, the envelope's
        status is true, and the transaction status is "success".

        Raises:
            ValidationError: empty reference
            PaymentVerificationError: transport failure or non-JSON reply
        """
        if not reference:
            raise ValidationError("Payment reference is required", field="reference")

        url = f"{self.cfg.base_url}/transaction/verify/{reference}"
        try:
            resp = self.http.get(
                url,
                headers={
                    "Authorization": f"Bearer {self.cfg.secret_key}",
                    "Content-Type": "application/json",
                },
                timeout=self.cfg.timeout_s,
            )
            body = resp.json()
        except requests.RequestException as e:
            logger.error(f"Paystack verification request failed for {reference}: {e}")
            raise PaymentVerificationError(reference, "Payment gateway unreachable") from e
        except ValueError as e:
            logger.error(f"Paystack returned a non-JSON body for {reference}")
            raise PaymentVerificationError(reference, "Invalid response from payment gateway") from e

        data = body.get("data") or {}
        if not resp.ok:
            logger.warning(
                f"Paystack verification failed for {reference}",
                extra={"extra_fields": {"reference": reference, "status_code": resp.status_code}},
            )
            return PaymentVerification(
                reference=reference,
                success=False,
                message=body.get("message") or "Payment verification failed",
                data=data,
            )

        success = bool(body.get("status")) and data.get("status") == "success"
        logger.info(
            f"Paystack verification for {reference}: {'success' if success else 'failed'}",
            extra={"extra_fields": {"reference": reference, "gateway_status": data.get("status")}},
        )
        return PaymentVerification(
            reference=reference,
            success=success,
            amount=data.get("amount"),
            currency=data.get("currency"),
            gateway_status=data.get("status"),
            message="Payment verified successfully" if success else "Payment verification failed",
            data=data,
        )
