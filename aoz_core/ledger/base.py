"""Abstract base class for payment transaction ledgers."""

from abc import ABC, abstractmethod
from typing import Optional

from aoz_core.models import PaymentTransaction


class BaseLedger(ABC):
    """
    Abstract base class for the x402 transaction ledger.

    The ledger records every payment attempt and its status transitions
    so clients can poll a transaction by id or list a wallet's history.
    """

    @abstractmethod
    async def create(self, wallet_address: str, amount: str) -> PaymentTransaction:
        """
        Record a new pending payment.

        Args:
            wallet_address: Paying wallet
            amount: Amount in the asset's smallest unit

        Returns:
            The pending transaction with its generated id
        """
        pass

    @abstractmethod
    async def get(self, tx_id: str) -> Optional[PaymentTransaction]:
        """
        Retrieve a transaction by ID.

        Returns:
            The transaction if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_by_wallet(self, wallet_address: str) -> list[PaymentTransaction]:
        """
        List a wallet's transactions.

        Returns:
            Transactions whose wallet exactly matches, newest first
        """
        pass

    @abstractmethod
    async def mark_verified(self, tx_id: str) -> PaymentTransaction:
        pass

    @abstractmethod
    async def mark_settled(self, tx_id: str, signature: Optional[str] = None) -> PaymentTransaction:
        pass

    @abstractmethod
    async def mark_failed(self, tx_id: str, error: str) -> PaymentTransaction:
        """
        Move a transaction to failed.

        Raises:
            ValueError: If the transaction does not exist
            InvalidTransitionError: If it is already settled or failed
        """
        pass
