"""API route handlers."""

from . import agents, tasks, x402

__all__ = ["agents", "tasks", "x402"]
