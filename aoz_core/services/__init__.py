"""Business logic services for AOZ Core."""

from .agent_service import AgentService
from .ai_service import AgentContext, AITaskExecutor, AITaskResult, build_prompts
from .payment_gate import PaymentGate, VerifiedPayment
from .task_service import TaskService

__all__ = [
    "AgentService",
    "AgentContext",
    "AITaskExecutor",
    "AITaskResult",
    "build_prompts",
    "PaymentGate",
    "VerifiedPayment",
    "TaskService",
]
