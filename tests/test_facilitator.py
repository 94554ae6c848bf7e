"""Tests for the HTTP facilitator client."""

import json

import httpx
import pytest

from aoz_core.exceptions import FacilitatorError
from aoz_core.x402 import HTTPFacilitatorClient, create_payment_requirements, decode_payment_header

from helpers import TREASURY, payment_header


@pytest.fixture
def payment():
    return decode_payment_header(payment_header())


@pytest.fixture
def requirements():
    return create_payment_requirements(
        amount="1000000",
        asset_address="4zMMC9srt5Ri5X14GAgXhaHii3GnPAEERYPJgZJDncDU",
        decimals=6,
        network="solana-devnet",
        pay_to=TREASURY,
        resource="http://testserver/api/agents",
        description="Create AI Agent on AOZ Platform",
    )


def facilitator_for(handler) -> HTTPFacilitatorClient:
    return HTTPFacilitatorClient("https://facilitator.test/", transport=httpx.MockTransport(handler))


class TestHTTPFacilitatorClient:
    """Tests for /verify and /settle calls."""

    @pytest.mark.asyncio
    async def test_verify_sends_payload_and_requirements(self, payment, requirements):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"isValid": True, "payer": "payer1"})

        client = facilitator_for(handler)
        result = await client.verify(payment, requirements)
        await client.close()

        assert result.is_valid is True
        assert result.payer == "payer1"
        assert seen["url"] == "https://facilitator.test/verify"
        assert seen["body"]["x402Version"] == 1
        assert seen["body"]["paymentPayload"]["scheme"] == "exact"
        assert seen["body"]["paymentRequirements"]["payTo"] == TREASURY

    @pytest.mark.asyncio
    async def test_verify_rejection(self, payment, requirements):
        client = facilitator_for(
            lambda request: httpx.Response(400, json={"isValid": False, "invalidReason": "invalid_signature"})
        )

        result = await client.verify(payment, requirements)

        assert result.is_valid is False
        assert result.invalid_reason == "invalid_signature"

    @pytest.mark.asyncio
    async def test_settle(self, payment, requirements):
        client = facilitator_for(
            lambda request: httpx.Response(
                200, json={"success": True, "transaction": "5sig", "network": "solana-devnet"}
            )
        )

        result = await client.settle(payment, requirements)

        assert result.success is True
        assert result.transaction == "5sig"
        assert result.to_dict()["errorReason"] is None

    @pytest.mark.asyncio
    async def test_server_error(self, payment, requirements):
        client = facilitator_for(lambda request: httpx.Response(502, json={"error": "bad gateway"}))

        with pytest.raises(FacilitatorError):
            await client.verify(payment, requirements)

    @pytest.mark.asyncio
    async def test_non_json_response(self, payment, requirements):
        client = facilitator_for(lambda request: httpx.Response(200, text="<html>oops</html>"))

        with pytest.raises(FacilitatorError) as exc_info:
            await client.settle(payment, requirements)

        assert "non-JSON" in exc_info.value.reason

    @pytest.mark.asyncio
    async def test_network_error(self, payment, requirements):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = facilitator_for(handler)

        with pytest.raises(FacilitatorError) as exc_info:
            await client.verify(payment, requirements)

        assert exc_info.value.http_status == 500
