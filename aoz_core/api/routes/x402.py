"""x402 transaction and gate configuration routes."""

from typing import Optional

from fastapi import APIRouter, Depends, Request

from aoz_core.api.dependencies import get_ledger, get_payment_gate
from aoz_core.api.schemas import X402ConfigResponse
from aoz_core.constants import WALLET_ADDRESS_HEADER
from aoz_core.exceptions import NotFoundError, ValidationError
from aoz_core.ledger import BaseLedger
from aoz_core.presentation import format_usdc
from aoz_core.services import PaymentGate

router = APIRouter(prefix="/x402", tags=["x402"])


@router.get(
    "/transactions",
    summary="List wallet transactions",
    description=(
        "List the x402 payment transactions of a wallet, newest first. The "
        "wallet comes from the ``wallet`` query parameter or X-Wallet-Address."
    ),
)
async def list_transactions(
    request: Request,
    wallet: Optional[str] = None,
    ledger: BaseLedger = Depends(get_ledger),
) -> dict:
    wallet_address = wallet or request.headers.get(WALLET_ADDRESS_HEADER)
    if not wallet_address:
        raise ValidationError(
            "Wallet address required",
            details="Pass ?wallet=<address> or the X-Wallet-Address header",
        )
    transactions = await ledger.list_by_wallet(wallet_address)
    return {"transactions": [tx.to_api() for tx in transactions]}


@router.get(
    "/transactions/{transaction_id}",
    summary="Get transaction",
    description="Poll one payment transaction by id."
)
async def get_transaction(
    transaction_id: str,
    ledger: BaseLedger = Depends(get_ledger),
) -> dict:
    tx = await ledger.get(transaction_id)
    if tx is None:
        raise NotFoundError("Transaction", transaction_id)
    return tx.to_api()


@router.get(
    "/config",
    summary="Payment gate configuration",
    description="Whether agent creation is paid, and the price, network and asset."
)
async def get_config(
    gate: PaymentGate = Depends(get_payment_gate),
) -> dict:
    config = X402ConfigResponse(
        enabled=gate.enabled,
        price=gate.price,
        price_display=format_usdc(gate.price, gate.asset_decimals) if gate.enabled else None,
        network=gate.network,
        asset=gate.asset_address,
        decimals=gate.asset_decimals,
        pay_to=gate.pay_to,
    )
    return config.to_api()
