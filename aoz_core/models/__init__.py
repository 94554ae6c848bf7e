"""Data models for AOZ Core."""

from .agent import Agent, AgentDraft, AgentType, OathStatus, FulfillmentStatus
from .task import AgentTask, TaskDraft, TaskType, TaskStatus
from .transaction import PaymentTransaction, PaymentStatus
from .user import User, UserDraft

__all__ = [
    "Agent",
    "AgentDraft",
    "AgentType",
    "OathStatus",
    "FulfillmentStatus",
    "AgentTask",
    "TaskDraft",
    "TaskType",
    "TaskStatus",
    "PaymentTransaction",
    "PaymentStatus",
    "User",
    "UserDraft",
]
