"""Abstract base class for entity storage implementations."""

from abc import ABC, abstractmethod
from typing import Optional

from aoz_core.models import (
    Agent,
    AgentDraft,
    AgentTask,
    TaskDraft,
    TaskStatus,
    User,
    UserDraft,
)


class BaseStorage(ABC):
    """
    Abstract base class for entity storage.

    This interface allows swapping the in-memory maps for a database
    backend without touching the services that use it.
    """

    # ---- Users ----

    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[User]:
        pass

    @abstractmethod
    async def create_user(self, user: UserDraft) -> User:
        pass

    # ---- Agents ----

    @abstractmethod
    async def list_agents(self) -> list[Agent]:
        """
        List all agents.

        Returns:
            Agents sorted by descending id (newest first)
        """
        pass

    @abstractmethod
    async def create_agent(self, agent: AgentDraft, wallet_address: str) -> Agent:
        """
        Create an agent minted by ``wallet_address``.

        Args:
            agent: The minter-supplied fields
            wallet_address: Address of the creating wallet

        Returns:
            The stored agent with its assigned id and derived fields
        """
        pass

    @abstractmethod
    async def get_agent(self, agent_id: int) -> Optional[Agent]:
        pass

    # ---- Tasks ----

    @abstractmethod
    async def list_tasks_by_agent(self, agent_id: int) -> list[AgentTask]:
        """List tasks of one agent, newest first."""
        pass

    @abstractmethod
    async def create_task(self, task: TaskDraft) -> AgentTask:
        pass

    @abstractmethod
    async def get_task(self, task_id: int) -> Optional[AgentTask]:
        pass

    @abstractmethod
    async def update_task_status(
        self,
        task_id: int,
        status: TaskStatus,
        ai_result: Optional[str] = None,
        error_message: Optional[str] = None,
    ) -> Optional[AgentTask]:
        """
        Update a task's status, merging only the fields supplied.

        ``completed_at`` is stamped when the new status is terminal.

        Args:
            task_id: The task to update
            status: New status
            ai_result: JSON-encoded executor result, if any
            error_message: Failure reason, if any

        Returns:
            The updated task, or None if it does not exist

        Raises:
            InvalidTransitionError: If the move breaks the task lifecycle
        """
        pass
