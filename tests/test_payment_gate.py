"""Tests for the x402 payment gate state machine."""

import pytest

from aoz_core.exceptions import FacilitatorError, PaymentRequiredError, PaymentVerificationError
from aoz_core.ledger import InMemoryLedger
from aoz_core.models import PaymentStatus
from aoz_core.services import PaymentGate
from aoz_core.x402 import SettleResult, VerifyResult

from helpers import MINTER, TREASURY, FakeFacilitator, payment_header

RESOURCE = "http://testserver/api/agents"


@pytest.fixture
def ledger():
    return InMemoryLedger()


def make_gate(ledger, facilitator, enabled=True, timeout=15.0) -> PaymentGate:
    return PaymentGate(
        ledger,
        facilitator,
        enabled=enabled,
        price="1000000",
        asset_address="4zMMC9srt5Ri5X14GAgXhaHii3GnPAEERYPJgZJDncDU",
        asset_decimals=6,
        network="solana-devnet",
        pay_to=TREASURY,
        description="Create AI Agent on AOZ Platform",
        verification_timeout=timeout,
    )


class TestRequirePayment:
    """Tests for verification before creation."""

    @pytest.mark.asyncio
    async def test_disabled_gate_passes(self, ledger):
        gate = make_gate(ledger, FakeFacilitator(), enabled=False)

        assert await gate.require_payment({}, RESOURCE, MINTER) is None
        assert await ledger.list_by_wallet(MINTER) == []

    @pytest.mark.asyncio
    async def test_enabled_without_facilitator_is_disabled(self, ledger):
        gate = make_gate(ledger, None)

        assert gate.enabled is False
        assert await gate.require_payment({}, RESOURCE, MINTER) is None

    @pytest.mark.asyncio
    async def test_missing_header_raises_challenge(self, ledger):
        gate = make_gate(ledger, FakeFacilitator())

        with pytest.raises(PaymentRequiredError) as exc_info:
            await gate.require_payment({}, RESOURCE, MINTER)

        challenge = exc_info.value.to_dict()
        assert challenge["resource"] == RESOURCE
        assert challenge["price"]["amount"] == "1000000"
        assert exc_info.value.http_status == 402
        assert await ledger.list_by_wallet(MINTER) == []

    @pytest.mark.asyncio
    async def test_valid_payment_is_verified(self, ledger):
        facilitator = FakeFacilitator()
        gate = make_gate(ledger, facilitator)

        verified = await gate.require_payment({"X-PAYMENT": payment_header()}, RESOURCE, MINTER)

        assert verified.transaction.status == PaymentStatus.VERIFIED
        assert verified.requirements.resource == RESOURCE
        assert verified.payment.scheme == "exact"
        assert facilitator.verify_calls == 1

    @pytest.mark.asyncio
    async def test_rejected_payment(self, ledger):
        gate = make_gate(
            ledger, FakeFacilitator(verify_result=VerifyResult(is_valid=False, invalid_reason="expired"))
        )

        with pytest.raises(PaymentVerificationError) as exc_info:
            await gate.require_payment({"X-PAYMENT": payment_header()}, RESOURCE, MINTER)

        tx = await ledger.get(exc_info.value.transaction_id)
        assert tx.status == PaymentStatus.FAILED
        assert tx.error_message == "expired"

    @pytest.mark.asyncio
    async def test_timeout(self, ledger):
        gate = make_gate(ledger, FakeFacilitator(verify_delay=1.0), timeout=0.01)

        with pytest.raises(PaymentVerificationError) as exc_info:
            await gate.require_payment({"X-PAYMENT": payment_header()}, RESOURCE, MINTER)

        assert exc_info.value.http_status == 402
        tx = await ledger.get(exc_info.value.transaction_id)
        assert tx.status == PaymentStatus.FAILED
        assert tx.error_message == "verification_timeout"

    @pytest.mark.asyncio
    async def test_facilitator_error_carries_transaction(self, ledger):
        gate = make_gate(ledger, FakeFacilitator(verify_error=FacilitatorError("down")))

        with pytest.raises(FacilitatorError) as exc_info:
            await gate.require_payment({"X-PAYMENT": payment_header()}, RESOURCE, MINTER)

        assert exc_info.value.http_status == 500
        assert exc_info.value.to_dict()["transactionId"] == exc_info.value.transaction_id
        tx = await ledger.get(exc_info.value.transaction_id)
        assert tx.error_message == "down"

    @pytest.mark.asyncio
    async def test_unexpected_verify_error_fails_transaction(self, ledger):
        gate = make_gate(ledger, FakeFacilitator(verify_error=RuntimeError("boom")))

        with pytest.raises(FacilitatorError) as exc_info:
            await gate.require_payment({"X-PAYMENT": payment_header()}, RESOURCE, MINTER)

        assert exc_info.value.reason == "boom"
        tx = await ledger.get(exc_info.value.transaction_id)
        assert tx.status == PaymentStatus.FAILED
        assert tx.error_message == "verification_error: boom"

    @pytest.mark.asyncio
    async def test_malformed_header(self, ledger):
        facilitator = FakeFacilitator()
        gate = make_gate(ledger, facilitator)

        with pytest.raises(PaymentVerificationError) as exc_info:
            await gate.require_payment({"X-PAYMENT": "garbage"}, RESOURCE, MINTER)

        assert exc_info.value.reason == "invalid_payment_header"
        assert (await ledger.get(exc_info.value.transaction_id)).status == PaymentStatus.FAILED
        assert facilitator.verify_calls == 0


class TestSettle:
    """Tests for settlement after creation."""

    @pytest.mark.asyncio
    async def test_settles(self, ledger):
        gate = make_gate(ledger, FakeFacilitator())
        verified = await gate.require_payment({"X-PAYMENT": payment_header()}, RESOURCE, MINTER)

        tx = await gate.settle(verified)

        assert tx.status == PaymentStatus.SETTLED
        assert tx.signature == "5sig"
        assert verified.settlement.success is True

    @pytest.mark.asyncio
    async def test_rejected_settlement_marks_failed(self, ledger):
        gate = make_gate(
            ledger, FakeFacilitator(settle_result=SettleResult(success=False, error_reason="insufficient_funds"))
        )
        verified = await gate.require_payment({"X-PAYMENT": payment_header()}, RESOURCE, MINTER)

        tx = await gate.settle(verified)

        assert tx.status == PaymentStatus.FAILED
        assert tx.error_message == "insufficient_funds"

    @pytest.mark.asyncio
    async def test_settlement_exception_never_raises(self, ledger):
        gate = make_gate(ledger, FakeFacilitator(settle_error=RuntimeError("reset")))
        verified = await gate.require_payment({"X-PAYMENT": payment_header()}, RESOURCE, MINTER)

        tx = await gate.settle(verified)

        assert tx.status == PaymentStatus.FAILED
        assert tx.error_message == "settlement_error: reset"
        assert verified.settlement is None
