"""Payment transaction model for x402 agent-creation payments."""

import time
import uuid
from enum import Enum
from typing import Optional

from pydantic import Field

from aoz_core.exceptions import InvalidTransitionError
from .base import AozModel


class PaymentStatus(str, Enum):
    """Status of a payment in the transaction ledger."""
    PENDING = "pending"
    VERIFIED = "verified"
    SETTLED = "settled"
    FAILED = "failed"


_PAYMENT_TRANSITIONS = {
    PaymentStatus.PENDING: {PaymentStatus.VERIFIED, PaymentStatus.FAILED},
    PaymentStatus.VERIFIED: {PaymentStatus.SETTLED, PaymentStatus.FAILED},
    PaymentStatus.SETTLED: set(),
    PaymentStatus.FAILED: set(),
}


def _now_ms() -> int:
    return int(time.time() * 1000)


class PaymentTransaction(AozModel):
    """
    A single x402 payment attempt.

    Status only moves forward: pending -> verified -> settled, with a
    side path to failed from pending or verified. The record lives in
    process memory only.
    """

    id: str = Field(default_factory=lambda: f"x402_{uuid.uuid4().hex}")
    wallet_address: str

    # Amount in the asset's smallest unit (string for precision)
    amount: str

    status: PaymentStatus = PaymentStatus.PENDING
    timestamp: int = Field(default_factory=_now_ms)  # Unix epoch, milliseconds

    # Chain signature of the settlement transaction
    signature: Optional[str] = None
    error_message: Optional[str] = None

    def _move_to(self, new_status: PaymentStatus) -> None:
        if new_status not in _PAYMENT_TRANSITIONS[self.status]:
            raise InvalidTransitionError("payment", self.status.value, new_status.value)
        self.status = new_status

    def mark_verified(self) -> None:
        self._move_to(PaymentStatus.VERIFIED)

    def mark_settled(self, signature: Optional[str] = None) -> None:
        self._move_to(PaymentStatus.SETTLED)
        self.signature = signature

    def mark_failed(self, error: str) -> None:
        """Mark the payment as failed with an error message."""
        self._move_to(PaymentStatus.FAILED)
        self.error_message = error

    @property
    def is_final(self) -> bool:
        return self.status in (PaymentStatus.SETTLED, PaymentStatus.FAILED)
