"""x402 payment protocol and facilitator client."""

from .facilitator import Facilitator, HTTPFacilitatorClient, SettleResult, VerifyResult
from .protocol import (
    TRANSACTION_ID_HEADER,
    X402_PAYMENT_HEADER,
    X402_PAYMENT_RESPONSE_HEADER,
    X402_VERSION,
    PaymentAsset,
    PaymentPayload,
    PaymentRequirements,
    build_challenge,
    build_payment_response_header,
    create_payment_requirements,
    decode_payment_header,
    encode_payment_header,
    extract_payment,
)

__all__ = [
    "Facilitator",
    "HTTPFacilitatorClient",
    "SettleResult",
    "VerifyResult",
    "TRANSACTION_ID_HEADER",
    "X402_PAYMENT_HEADER",
    "X402_PAYMENT_RESPONSE_HEADER",
    "X402_VERSION",
    "PaymentAsset",
    "PaymentPayload",
    "PaymentRequirements",
    "build_challenge",
    "build_payment_response_header",
    "create_payment_requirements",
    "decode_payment_header",
    "encode_payment_header",
    "extract_payment",
]
