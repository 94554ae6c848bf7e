"""x402 payment gate for paid resource creation."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from aoz_core.exceptions import (
    FacilitatorError,
    PaymentRequiredError,
    PaymentVerificationError,
)
from aoz_core.ledger import BaseLedger
from aoz_core.models import PaymentTransaction
from aoz_core.x402 import (
    Facilitator,
    PaymentPayload,
    PaymentRequirements,
    SettleResult,
    build_challenge,
    create_payment_requirements,
    decode_payment_header,
    extract_payment,
)

logger = logging.getLogger(__name__)


@dataclass
class VerifiedPayment:
    """A payment that passed verification and awaits settlement."""
    transaction: PaymentTransaction
    payment: PaymentPayload
    requirements: PaymentRequirements
    settlement: Optional[SettleResult] = None


class PaymentGate:
    """
    Gate that charges for a resource before it is created.

    Per request:
    1. Build payment requirements for the resource
    2. No X-PAYMENT header -> PaymentRequiredError (402 challenge),
       nothing is recorded
    3. Header present -> a pending transaction is recorded and verified
       with the facilitator, bounded by ``verification_timeout``
    4. Rejection, malformed header or timeout -> transaction failed,
       PaymentVerificationError carrying the transaction id
    5. Success -> transaction verified; the caller creates the resource
       and then calls ``settle``

    Settlement failure never undoes the created resource: the transaction
    is marked failed and the error is logged.
    """

    def __init__(
        self,
        ledger: BaseLedger,
        facilitator: Optional[Facilitator],
        *,
        enabled: bool,
        price: str,
        asset_address: str,
        asset_decimals: int,
        network: str,
        pay_to: str,
        description: str,
        verification_timeout: float = 15.0,
    ):
        self._ledger = ledger
        self._facilitator = facilitator
        self._enabled = enabled
        self.price = price
        self.asset_address = asset_address
        self.asset_decimals = asset_decimals
        self.network = network
        self.pay_to = pay_to
        self.description = description
        self.verification_timeout = verification_timeout

    @classmethod
    def from_settings(cls, settings, ledger: BaseLedger, facilitator: Optional[Facilitator]) -> "PaymentGate":
        return cls(
            ledger,
            facilitator,
            enabled=settings.x402_enabled,
            price=settings.agent_creation_price,
            asset_address=settings.usdc_mint,
            asset_decimals=settings.usdc_decimals,
            network=settings.solana_network,
            pay_to=settings.treasury_wallet_address,
            description=settings.payment_description,
            verification_timeout=settings.payment_verification_timeout,
        )

    @property
    def enabled(self) -> bool:
        return self._enabled and self._facilitator is not None

    def requirements_for(self, resource: str) -> PaymentRequirements:
        """Build payment requirements for a resource URL."""
        return create_payment_requirements(
            amount=self.price,
            asset_address=self.asset_address,
            decimals=self.asset_decimals,
            network=self.network,
            pay_to=self.pay_to,
            resource=resource,
            description=self.description,
        )

    async def require_payment(
        self,
        headers: Mapping[str, str],
        resource: str,
        wallet_address: str,
    ) -> Optional[VerifiedPayment]:
        """
        Enforce payment for one request.

        Returns:
            None when the gate is disabled, otherwise the verified payment

        Raises:
            PaymentRequiredError: No payment header was sent
            PaymentVerificationError: The payment was malformed, rejected or
                not verified within the timeout
            FacilitatorError: The facilitator could not be reached
        """
        if not self.enabled:
            return None

        requirements = self.requirements_for(resource)

        header = extract_payment(headers)
        if header is None:
            raise PaymentRequiredError(build_challenge(requirements))

        tx = await self._ledger.create(wallet_address, requirements.amount)

        try:
            payment = decode_payment_header(header)
        except ValueError as e:
            await self._ledger.mark_failed(tx.id, str(e))
            raise PaymentVerificationError("invalid_payment_header", tx.id) from e

        try:
            result = await asyncio.wait_for(
                self._facilitator.verify(payment, requirements),
                timeout=self.verification_timeout,
            )
        except asyncio.TimeoutError as e:
            # wait_for cancels the facilitator call; its result is discarded
            await self._ledger.mark_failed(tx.id, "verification_timeout")
            raise PaymentVerificationError(
                f"Payment verification timed out after {self.verification_timeout:g}s",
                tx.id,
            ) from e
        except FacilitatorError as e:
            await self._ledger.mark_failed(tx.id, e.reason)
            raise FacilitatorError(e.reason, tx.id) from e
        except Exception as e:
            logger.error(f"Error verifying x402 payment {tx.id}: {e}")
            await self._ledger.mark_failed(tx.id, f"verification_error: {e}")
            raise FacilitatorError(str(e), tx.id) from e

        if not result.is_valid:
            reason = result.invalid_reason or "payment_rejected"
            await self._ledger.mark_failed(tx.id, reason)
            raise PaymentVerificationError(
                "Payment verification failed. Please try again.",
                tx.id,
            )

        await self._ledger.mark_verified(tx.id)
        return VerifiedPayment(transaction=tx, payment=payment, requirements=requirements)

    async def settle(self, verified: VerifiedPayment) -> PaymentTransaction:
        """
        Settle a verified payment.

        Never raises: failures are logged and recorded on the transaction.
        """
        tx = verified.transaction
        try:
            result = await self._facilitator.settle(verified.payment, verified.requirements)
        except Exception as e:
            logger.error(f"Error settling x402 payment {tx.id}: {e}")
            return await self._ledger.mark_failed(tx.id, f"settlement_error: {e}")

        verified.settlement = result
        if not result.success:
            logger.error(f"x402 settlement rejected for {tx.id}: {result.error_reason}")
            return await self._ledger.mark_failed(tx.id, result.error_reason or "settlement_failed")

        return await self._ledger.mark_settled(tx.id, result.transaction)
