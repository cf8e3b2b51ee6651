"""
Custom exception classes and error handling.

Two families live here:

- Domain errors (plain exceptions) raised by the plan content generator,
  the progress services and payment verification. They carry no HTTP
  semantics; main.py maps them to responses.
- API errors (HTTPException subclasses) raised directly by routers and
  orchestration services for consistent error responses.
"""
from fastapi import HTTPException, status
from typing import Optional, Dict, Any


# ========== Domain errors ==========

class PlanContentError(Exception):
    """Base class for plan content generation failures."""


class InvalidPoolError(PlanContentError):
    """A required exercise category or meal slot pool is empty."""

    def __init__(self, pool: str, detail: Optional[str] = None):
        self.pool = pool
        super().__init__(detail or f"Pool is empty: {pool}")


class InvalidDurationError(PlanContentError):
    """Plan duration is not a positive integer number of days."""

    def __init__(self, duration: Any):
        self.duration = duration
        super().__init__(f"Plan duration must be a positive integer, got {duration!r}")


class RecordNotFoundError(Exception):
    """A plan or plan day referenced by a progress update does not exist."""

    def __init__(self, resource: str, identifier: Any):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class PaymentVerificationError(Exception):
    """The payment gateway did not confirm the transaction."""

    def __init__(self, reference: str, detail: str = "Payment verification failed"):
        self.reference = reference
        super().__init__(detail)


# ========== API errors ==========

class APIException(HTTPException):
    """Base API exception with consistent structure."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class NotFoundError(APIException):
    """Resource not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found: {identifier}",
            error_code="NOT_FOUND"
        )


class ValidationError(APIException):
    """Validation error."""

    def __init__(self, detail: str, field: Optional[str] = None):
        error_code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
            error_code=error_code
        )


class UnauthorizedError(APIException):
    """Authentication required."""

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="UNAUTHORIZED",
            headers={"WWW-Authenticate": "Bearer"}
        )


class PaymentRequiredError(APIException):
    """The requested plan needs a verified payment first."""

    def __init__(self, plan_id: str):
        super().__init__(
            status_code=status.HTTP_402_PAYMENT_REQUIRED,
            detail=f"Payment required for plan: {plan_id}",
            error_code="PAYMENT_REQUIRED"
        )


class ForbiddenError(APIException):
    """Access denied."""

    def __init__(self, detail: str = "Access denied"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code="FORBIDDEN"
        )


class ConflictError(APIException):
    """Resource conflict (e.g., duplicate entry)."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            error_code="CONFLICT"
        )
