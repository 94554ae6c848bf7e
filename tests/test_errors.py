"""Tests for exception-to-response mapping."""

from aoz_core.api.errors import format_validation_errors
from aoz_core.exceptions import (
    AIExecutionError,
    InvalidStateError,
    NotFoundError,
    PaymentVerificationError,
    TaskExecutionError,
)


class TestExceptions:
    """Tests for exception bodies and statuses."""

    def test_not_found(self):
        exc = NotFoundError("Agent", 7)

        assert exc.http_status == 404
        assert exc.to_dict() == {"error": "Agent not found"}

    def test_invalid_state(self):
        exc = InvalidStateError("Task already processed", details="Task status is completed")

        assert exc.http_status == 400
        assert exc.to_dict() == {"error": "Task already processed", "details": "Task status is completed"}

    def test_payment_verification_carries_transaction(self):
        exc = PaymentVerificationError("verification_timeout", "x402_abc")

        assert exc.http_status == 402
        assert exc.to_dict() == {
            "error": "Invalid payment",
            "details": "verification_timeout",
            "transactionId": "x402_abc",
        }

    def test_task_execution_carries_task(self):
        exc = TaskExecutionError("AI execution failed: boom", {"id": 1, "status": "failed"})

        assert exc.http_status == 500
        assert exc.to_dict()["task"] == {"id": 1, "status": "failed"}

    def test_ai_execution(self):
        assert AIExecutionError("boom").message == "AI execution failed: boom"


class TestValidationFormatting:
    """Tests for readable validation details."""

    def test_strips_value_error_prefix(self):
        details = format_validation_errors([
            {"loc": ("body", "settlementAddress"), "msg": "Value error, Invalid Solana address"},
        ])

        assert details == 'Invalid Solana address at "settlementAddress"'

    def test_joins_errors(self):
        details = format_validation_errors([
            {"loc": ("body", "agentName"), "msg": "Field required"},
            {"loc": ("body",), "msg": "Input should be a valid dictionary"},
        ])

        assert details == 'Field required at "agentName"; Input should be a valid dictionary'


class TestUnexpectedErrors:
    """Tests for the catch-all handler."""

    def test_unexpected_error_is_500(self, make_client):
        client = make_client(raise_server_exceptions=False)
        client.container.storage.list_agents = _explode

        response = client.get("/api/agents")

        assert response.status_code == 500
        assert response.json()["error"] == "Internal server error"
        assert "RuntimeError" in response.json()["details"]

    def test_production_hides_details(self, make_client):
        client = make_client(raise_server_exceptions=False, environment="production")
        client.container.storage.list_agents = _explode

        response = client.get("/api/agents")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}


async def _explode():
    raise RuntimeError("storage offline")
