"""API client for the AOZ CLI."""
from __future__ import annotations

from typing import Any, Dict, Optional

import click
import httpx

WALLET_ADDRESS_HEADER = "X-Wallet-Address"
PAYMENT_HEADER = "X-PAYMENT"
TRANSACTION_ID_HEADER = "X-Transaction-Id"


class APIError(Exception):
    """API error with status code and message."""

    def __init__(self, status_code: int, message: str, details: Any = None, body: Any = None):
        self.status_code = status_code
        self.message = message
        self.details = details
        self.body = body
        super().__init__(f"[{status_code}] {message}")


class PaymentRequired(APIError):
    """The server answered 402 with an x402 challenge."""

    def __init__(self, challenge: Dict[str, Any]):
        super().__init__(402, challenge.get("error", "Payment required"), body=challenge)
        self.challenge = challenge


class AozAPIClient:
    """HTTP client for the AOZ API."""

    def __init__(
        self,
        base_url: str,
        wallet_address: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.wallet_address = wallet_address
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            headers = {"Content-Type": "application/json"}
            if self.wallet_address:
                headers[WALLET_ADDRESS_HEADER] = self.wallet_address

            self._client = httpx.Client(
                base_url=self.base_url,
                headers=headers,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    def _handle_response(self, response: httpx.Response) -> Any:
        """Handle API response and raise errors if needed."""
        if response.status_code >= 400:
            try:
                error_data = response.json()
            except ValueError:
                raise APIError(response.status_code, response.text or "Unknown error")

            if response.status_code == 402 and "accepts" in error_data:
                raise PaymentRequired(error_data)
            raise APIError(
                response.status_code,
                error_data.get("error", "Unknown error"),
                details=error_data.get("details"),
                body=error_data,
            )

        return response.json()

    def get(self, path: str, params: Optional[Dict] = None) -> Any:
        """Make GET request."""
        response = self.client.get(path, params=params)
        return self._handle_response(response)

    def post(self, path: str, data: Optional[Dict] = None) -> Any:
        """Make POST request."""
        response = self.client.post(path, json=data)
        return self._handle_response(response)

    def create_agent(self, data: Dict[str, Any], payment: Optional[str] = None) -> tuple[Dict[str, Any], Optional[str]]:
        """
        Mint an agent, attaching an x402 payment proof when given.

        Returns:
            Tuple of (agent, transaction id or None)

        Raises:
            PaymentRequired: The gate is on and no proof was sent
            APIError: Any other failure
        """
        headers = {PAYMENT_HEADER: payment} if payment else None
        response = self.client.post("/api/agents", json=data, headers=headers)
        agent = self._handle_response(response)
        return agent, response.headers.get(TRANSACTION_ID_HEADER)

    def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            self._client.close()
            self._client = None


def get_client(ctx) -> AozAPIClient:
    """Get API client from context."""
    config = ctx.obj["config"]
    return AozAPIClient(
        base_url=config.get("api_base_url", "http://localhost:5000"),
        wallet_address=config.get("wallet_address"),
        transport=ctx.obj.get("transport"),
    )


def require_wallet(ctx) -> str:
    """Connected wallet address, or a usage error."""
    wallet = ctx.obj["config"].get("wallet_address")
    if not wallet:
        raise click.ClickException("Wallet not connected. Run 'aoz wallet connect <address>' first.")
    return wallet
