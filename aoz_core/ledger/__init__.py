"""Ledger of x402 payment transactions."""

from .base import BaseLedger
from .memory import InMemoryLedger

__all__ = ["BaseLedger", "InMemoryLedger"]
