"""Task model for AI work requested against an agent."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import Field

from .base import AozModel


class TaskType(str, Enum):
    """Kinds of AI work a task can request."""
    TEXT_GENERATION = "text_generation"
    ANALYSIS = "analysis"
    SUMMARIZATION = "summarization"
    QUESTION_ANSWER = "question_answer"


class TaskStatus(str, Enum):
    """Lifecycle of a task: pending -> processing -> completed | failed."""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (TaskStatus.COMPLETED, TaskStatus.FAILED)

    def can_transition_to(self, new_status: "TaskStatus") -> bool:
        return new_status in _TASK_TRANSITIONS[self]


_TASK_TRANSITIONS = {
    TaskStatus.PENDING: {TaskStatus.PROCESSING},
    TaskStatus.PROCESSING: {TaskStatus.COMPLETED, TaskStatus.FAILED},
    TaskStatus.COMPLETED: set(),
    TaskStatus.FAILED: set(),
}


class TaskDraft(AozModel):
    """Fields supplied when a task is created."""

    agent_id: int
    task_type: TaskType
    task_description: str
    ai_result: Optional[str] = None
    error_message: Optional[str] = None


class AgentTask(AozModel):
    """
    A unit of AI work owned by an agent.

    ``ai_result`` holds the executor result encoded as a JSON string.
    """

    id: int
    agent_id: int
    task_type: TaskType
    task_description: str
    status: TaskStatus = TaskStatus.PENDING
    ai_result: Optional[str] = None
    error_message: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: Optional[datetime] = None
