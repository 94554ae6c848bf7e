"""Exception hierarchy for AOZ Core.

Every AOZ-specific exception inherits from AozException, which carries:
- error_code: machine-readable code (e.g., "VALIDATION_ERROR")
- http_status: HTTP status the API layer responds with
- message: human-readable message, sent as ``error`` in responses
- details: optional additional context

The API layer converts these into ``{"error": ..., "details": ...}`` bodies.
"""
from __future__ import annotations

from typing import Any, Optional


class AozException(Exception):
    """Base exception for all AOZ errors."""

    error_code: str = "AOZ_ERROR"
    http_status: int = 500

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response format."""
        result: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            result["details"] = self.details
        return result


# =============================================================================
# Input errors
# =============================================================================

class ValidationError(AozException):
    """Malformed or missing input."""

    error_code = "VALIDATION_ERROR"
    http_status = 400


class NotFoundError(AozException):
    """Requested entity does not exist."""

    error_code = "NOT_FOUND"
    http_status = 404

    def __init__(self, resource_type: str, resource_id: Any = None) -> None:
        super().__init__(f"{resource_type} not found")
        self.resource_type = resource_type
        self.resource_id = resource_id


class InvalidStateError(AozException):
    """Operation not allowed in the entity's current state."""

    error_code = "INVALID_STATE"
    http_status = 400


class InvalidTransitionError(ValueError):
    """Raised by stores when a status change breaks the lifecycle."""

    def __init__(self, entity: str, current: str, requested: str) -> None:
        super().__init__(f"{entity} cannot move from {current} to {requested}")
        self.entity = entity
        self.current = current
        self.requested = requested


# =============================================================================
# Payment errors
# =============================================================================

class PaymentRequiredError(AozException):
    """No payment proof was supplied for a gated resource."""

    error_code = "PAYMENT_REQUIRED"
    http_status = 402

    def __init__(self, challenge: dict[str, Any]) -> None:
        super().__init__("Payment required")
        self.challenge = challenge

    def to_dict(self) -> dict[str, Any]:
        return dict(self.challenge)


class PaymentVerificationError(AozException):
    """Payment proof was rejected, malformed, or not verified in time."""

    error_code = "PAYMENT_INVALID"
    http_status = 402

    def __init__(
        self,
        reason: str,
        transaction_id: Optional[str] = None,
        message: str = "Invalid payment",
    ) -> None:
        super().__init__(message, details=reason)
        self.reason = reason
        self.transaction_id = transaction_id

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.transaction_id:
            result["transactionId"] = self.transaction_id
        return result


class FacilitatorError(PaymentVerificationError):
    """The payment facilitator could not be reached or answered garbage."""

    error_code = "FACILITATOR_ERROR"
    http_status = 500

    def __init__(self, reason: str, transaction_id: Optional[str] = None) -> None:
        super().__init__(reason, transaction_id, message="Payment facilitator error")


# =============================================================================
# External service errors
# =============================================================================

class AIExecutionError(AozException):
    """The language-model completion call failed."""

    error_code = "AI_EXECUTION_FAILED"
    http_status = 500

    def __init__(self, reason: str) -> None:
        super().__init__(f"AI execution failed: {reason}")
        self.reason = reason


class ConfigurationError(AozException):
    """Invalid or missing configuration."""

    error_code = "CONFIGURATION_ERROR"
    http_status = 500

    def __init__(self, message: str, setting: Optional[str] = None) -> None:
        super().__init__(message, details={"setting": setting} if setting else None)
        self.setting = setting


class TaskExecutionError(AozException):
    """A task ran and failed; the failed task is returned to the caller."""

    error_code = "TASK_EXECUTION_FAILED"
    http_status = 500

    def __init__(self, reason: str, task: dict[str, Any]) -> None:
        super().__init__("AI execution failed", details=reason)
        self.reason = reason
        self.task = task

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["task"] = self.task
        return result
