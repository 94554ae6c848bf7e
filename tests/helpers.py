"""Test doubles and request builders shared across the suite."""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock

from aoz_core.x402 import SettleResult, VerifyResult, encode_payment_header

TREASURY = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"
MINTER = "9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM"
OTHER_MINTER = "HN7cABqLq46Es1jh92dQQisAq662SmxELLLsHHe4YWrH"


class FakeFacilitator:
    """Facilitator double with scripted answers."""

    def __init__(
        self,
        verify_result: VerifyResult | None = None,
        settle_result: SettleResult | None = None,
        verify_delay: float = 0.0,
        verify_error: Exception | None = None,
        settle_error: Exception | None = None,
    ):
        self.verify_result = verify_result or VerifyResult(is_valid=True, payer=MINTER)
        self.settle_result = settle_result or SettleResult(
            success=True, transaction="5sig", network="solana-devnet"
        )
        self.verify_delay = verify_delay
        self.verify_error = verify_error
        self.settle_error = settle_error
        self.verify_calls = 0
        self.settle_calls = 0
        self.closed = False

    async def verify(self, payment, requirements):
        self.verify_calls += 1
        if self.verify_delay:
            await asyncio.sleep(self.verify_delay)
        if self.verify_error:
            raise self.verify_error
        return self.verify_result

    async def settle(self, payment, requirements):
        self.settle_calls += 1
        if self.settle_error:
            raise self.settle_error
        return self.settle_result

    async def close(self):
        self.closed = True


def make_completion(content="Generated answer", prompt=12, completion=30, model="gpt-4o-mini"):
    """Shape of an OpenAI chat completion, as far as the executor reads it."""
    usage = None
    if prompt is not None:
        usage = SimpleNamespace(
            prompt_tokens=prompt,
            completion_tokens=completion,
            total_tokens=prompt + completion,
        )
    return SimpleNamespace(
        model=model,
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=usage,
    )


def make_openai_client(completion=None, error: Exception | None = None):
    """AsyncOpenAI stand-in whose chat.completions.create is an AsyncMock."""
    if error is not None:
        create = AsyncMock(side_effect=error)
    else:
        create = AsyncMock(return_value=completion or make_completion())
    return SimpleNamespace(
        chat=SimpleNamespace(completions=SimpleNamespace(create=create)),
        close=AsyncMock(),
    )


def payment_header(**overrides) -> str:
    """A well-formed X-PAYMENT header value."""
    payload = {
        "x402Version": 1,
        "scheme": "exact",
        "network": "solana-devnet",
        "payload": {"transaction": "AQAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA"},
    }
    payload.update(overrides)
    return encode_payment_header(payload)


def agent_body(**overrides) -> dict:
    body = {
        "agentName": "ResearchBot",
        "agentType": "TRANSACTION",
        "description": "Finds and summarizes on-chain research",
        "settlementAddress": MINTER,
        "oathDescription": "Deliver a weekly research digest",
        "fulfillmentDescription": "Receive 5 USDC per digest",
    }
    body.update(overrides)
    return body
