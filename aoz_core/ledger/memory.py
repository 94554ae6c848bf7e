"""In-memory x402 transaction ledger."""

import logging
from typing import Optional

from aoz_core.models import PaymentTransaction
from .base import BaseLedger

logger = logging.getLogger(__name__)


class InMemoryLedger(BaseLedger):
    """
    In-memory implementation of the transaction ledger.

    Records are never persisted or evicted; they live until the process
    restarts. A client polling an id after a restart gets "not found".
    """

    def __init__(self):
        self._transactions: dict[str, PaymentTransaction] = {}
        # Insertion sequence breaks ties between equal millisecond timestamps
        self._sequence: dict[str, int] = {}

    def _require(self, tx_id: str) -> PaymentTransaction:
        tx = self._transactions.get(tx_id)
        if tx is None:
            raise ValueError(f"Transaction {tx_id} not found")
        return tx

    async def create(self, wallet_address: str, amount: str) -> PaymentTransaction:
        tx = PaymentTransaction(wallet_address=wallet_address, amount=amount)
        self._transactions[tx.id] = tx
        self._sequence[tx.id] = len(self._sequence)
        logger.info("x402 transaction %s pending for wallet %s", tx.id, wallet_address)
        return tx

    async def get(self, tx_id: str) -> Optional[PaymentTransaction]:
        return self._transactions.get(tx_id)

    async def list_by_wallet(self, wallet_address: str) -> list[PaymentTransaction]:
        wallet_txs = [
            tx for tx in self._transactions.values()
            if tx.wallet_address == wallet_address
        ]
        wallet_txs.sort(key=lambda tx: (tx.timestamp, self._sequence[tx.id]), reverse=True)
        return wallet_txs

    async def mark_verified(self, tx_id: str) -> PaymentTransaction:
        tx = self._require(tx_id)
        tx.mark_verified()
        logger.info("x402 transaction %s verified", tx_id)
        return tx

    async def mark_settled(self, tx_id: str, signature: Optional[str] = None) -> PaymentTransaction:
        tx = self._require(tx_id)
        tx.mark_settled(signature)
        logger.info("x402 transaction %s settled: sig=%s", tx_id, signature)
        return tx

    async def mark_failed(self, tx_id: str, error: str) -> PaymentTransaction:
        tx = self._require(tx_id)
        tx.mark_failed(error)
        logger.warning("x402 transaction %s failed: %s", tx_id, error)
        return tx
