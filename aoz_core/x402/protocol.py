"""x402 HTTP 402 Payment Required protocol pieces used by the payment gate.

Implements:
- Payment requirements for a gated resource (server -> client)
- The 402 challenge body
- X-PAYMENT header decoding (client -> server)
- X-PAYMENT-RESPONSE header encoding (server -> client, after settlement)

Reference: https://www.x402.org/
"""
from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass, field
from typing import Any, Mapping

X402_VERSION = 1
X402_SCHEME_EXACT = "exact"

X402_PAYMENT_HEADER = "X-PAYMENT"
X402_PAYMENT_RESPONSE_HEADER = "X-PAYMENT-RESPONSE"
TRANSACTION_ID_HEADER = "X-Transaction-Id"


@dataclass(slots=True)
class PaymentAsset:
    """Token the price is denominated in."""
    address: str  # SPL mint address
    decimals: int


@dataclass(slots=True)
class PaymentRequirements:
    """What a client must pay to access one resource."""
    network: str  # "solana" or "solana-devnet"
    amount: str  # Amount in smallest unit (string for precision)
    asset: PaymentAsset
    pay_to: str
    resource: str
    description: str
    mime_type: str = "application/json"
    max_timeout_seconds: int = 60
    scheme: str = X402_SCHEME_EXACT
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Wire form, as accepted by facilitators."""
        return {
            "scheme": self.scheme,
            "network": self.network,
            "maxAmountRequired": self.amount,
            "resource": self.resource,
            "description": self.description,
            "mimeType": self.mime_type,
            "payTo": self.pay_to,
            "maxTimeoutSeconds": self.max_timeout_seconds,
            "asset": self.asset.address,
            "extra": {
                "decimals": self.asset.decimals,
                **self.extra,
            },
        }


@dataclass(slots=True)
class PaymentPayload:
    """Decoded X-PAYMENT header."""
    x402_version: int
    scheme: str
    network: str
    payload: dict[str, Any]
    raw: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return dict(self.raw) or {
            "x402Version": self.x402_version,
            "scheme": self.scheme,
            "network": self.network,
            "payload": self.payload,
        }


def create_payment_requirements(
    amount: str,
    asset_address: str,
    decimals: int,
    network: str,
    pay_to: str,
    resource: str,
    description: str,
) -> PaymentRequirements:
    """Build payment requirements for a resource."""
    return PaymentRequirements(
        network=network,
        amount=amount,
        asset=PaymentAsset(address=asset_address, decimals=decimals),
        pay_to=pay_to,
        resource=resource,
        description=description,
    )


def build_challenge(requirements: PaymentRequirements, error: str = "Payment required") -> dict[str, Any]:
    """
    Build the 402 response body.

    The ``accepts`` list carries the facilitator-facing requirements;
    ``price``, ``asset`` and ``resource`` are repeated at top level for
    clients that only render the price.
    """
    return {
        "x402Version": X402_VERSION,
        "error": error,
        "accepts": [requirements.to_dict()],
        "price": {
            "amount": requirements.amount,
            "asset": {
                "address": requirements.asset.address,
                "decimals": requirements.asset.decimals,
            },
        },
        "asset": requirements.asset.address,
        "resource": requirements.resource,
        "network": requirements.network,
        "payTo": requirements.pay_to,
    }


def extract_payment(headers: Mapping[str, str]) -> str | None:
    """Return the raw X-PAYMENT header value, or None when absent or blank."""
    value = headers.get(X402_PAYMENT_HEADER) or headers.get(X402_PAYMENT_HEADER.lower())
    if value is None or not value.strip():
        return None
    return value.strip()


def decode_payment_header(header_value: str) -> PaymentPayload:
    """
    Decode an X-PAYMENT header (base64-encoded JSON).

    Raises:
        ValueError: If the header is not base64 JSON with the expected fields
    """
    try:
        data = json.loads(base64.b64decode(header_value, validate=True))
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"invalid_payment_header: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError("invalid_payment_header: expected a JSON object")

    missing = [key for key in ("scheme", "network", "payload") if key not in data]
    if missing:
        raise ValueError(f"invalid_payment_header: missing {', '.join(missing)}")

    return PaymentPayload(
        x402_version=int(data.get("x402Version", X402_VERSION)),
        scheme=data["scheme"],
        network=data["network"],
        payload=data["payload"],
        raw=data,
    )


def encode_payment_header(payload: dict[str, Any]) -> str:
    """Encode a payment payload as an X-PAYMENT header value."""
    return base64.b64encode(json.dumps(payload, separators=(",", ":")).encode()).decode()


def build_payment_response_header(settlement: dict[str, Any]) -> dict[str, str]:
    """Build the X-PAYMENT-RESPONSE header for a settled payment."""
    encoded = base64.b64encode(json.dumps(settlement, separators=(",", ":")).encode()).decode()
    return {X402_PAYMENT_RESPONSE_HEADER: encoded}


__all__ = [
    "X402_VERSION",
    "X402_SCHEME_EXACT",
    "X402_PAYMENT_HEADER",
    "X402_PAYMENT_RESPONSE_HEADER",
    "TRANSACTION_ID_HEADER",
    "PaymentAsset",
    "PaymentRequirements",
    "PaymentPayload",
    "create_payment_requirements",
    "build_challenge",
    "extract_payment",
    "decode_payment_header",
    "encode_payment_header",
    "build_payment_response_header",
]
