"""HTTP client for an x402 payment facilitator.

The facilitator verifies payment proofs and settles them on-chain on
behalf of this backend. Only the two calls the payment gate needs are
implemented: ``POST /verify`` and ``POST /settle``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

import httpx

from aoz_core.exceptions import FacilitatorError
from .protocol import X402_VERSION, PaymentPayload, PaymentRequirements

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class VerifyResult:
    """Facilitator answer to a verification request."""
    is_valid: bool
    invalid_reason: str | None = None
    payer: str | None = None


@dataclass(slots=True)
class SettleResult:
    """Facilitator answer to a settlement request."""
    success: bool
    transaction: str | None = None  # Chain signature
    network: str | None = None
    error_reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "transaction": self.transaction,
            "network": self.network,
            "errorReason": self.error_reason,
        }


class Facilitator(Protocol):
    """What the payment gate needs from a facilitator."""

    async def verify(self, payment: PaymentPayload, requirements: PaymentRequirements) -> VerifyResult:
        ...

    async def settle(self, payment: PaymentPayload, requirements: PaymentRequirements) -> SettleResult:
        ...


class HTTPFacilitatorClient:
    """Facilitator reached over HTTP."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def _post(self, path: str, payment: PaymentPayload, requirements: PaymentRequirements) -> dict:
        body = {
            "x402Version": X402_VERSION,
            "paymentPayload": payment.to_dict(),
            "paymentRequirements": requirements.to_dict(),
        }
        try:
            response = await self.client.post(path, json=body)
        except httpx.HTTPError as exc:
            raise FacilitatorError(f"facilitator {path} request failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise FacilitatorError(
                f"facilitator {path} returned non-JSON response ({response.status_code})"
            ) from exc

        if response.status_code >= 500:
            raise FacilitatorError(f"facilitator {path} returned {response.status_code}")
        if not isinstance(data, dict):
            raise FacilitatorError(f"facilitator {path} returned unexpected payload")
        return data

    async def verify(self, payment: PaymentPayload, requirements: PaymentRequirements) -> VerifyResult:
        """Ask the facilitator whether a payment proof satisfies the requirements."""
        data = await self._post("/verify", payment, requirements)
        return VerifyResult(
            is_valid=bool(data.get("isValid")),
            invalid_reason=data.get("invalidReason"),
            payer=data.get("payer"),
        )

    async def settle(self, payment: PaymentPayload, requirements: PaymentRequirements) -> SettleResult:
        """Ask the facilitator to submit a verified payment on-chain."""
        data = await self._post("/settle", payment, requirements)
        result = SettleResult(
            success=bool(data.get("success")),
            transaction=data.get("transaction"),
            network=data.get("network"),
            error_reason=data.get("errorReason"),
        )
        logger.debug("Facilitator settle: success=%s tx=%s", result.success, result.transaction)
        return result

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
