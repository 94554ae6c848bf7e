"""CLI command modules."""
from . import agents, tasks, transactions, wallet

__all__ = ["agents", "tasks", "transactions", "wallet"]
