"""Task service: creating AI tasks and running them through the executor."""

import json
import logging

from aoz_core.exceptions import (
    AIExecutionError,
    InvalidStateError,
    NotFoundError,
    TaskExecutionError,
)
from aoz_core.models import AgentTask, TaskDraft, TaskStatus
from aoz_core.storage import BaseStorage
from aoz_core.services.ai_service import AgentContext, AITaskExecutor

logger = logging.getLogger(__name__)


class TaskService:
    """
    Service for the task lifecycle: pending -> processing -> completed | failed.

    A task executes at most once. Anything other than a pending task is
    refused without touching its state.
    """

    def __init__(self, storage: BaseStorage, executor: AITaskExecutor):
        self._storage = storage
        self._executor = executor

    @property
    def executor_configured(self) -> bool:
        return self._executor.is_configured

    async def list_tasks(self, agent_id: int) -> list[AgentTask]:
        """Tasks of one agent, newest first."""
        return await self._storage.list_tasks_by_agent(agent_id)

    async def get_task(self, task_id: int) -> AgentTask:
        task = await self._storage.get_task(task_id)
        if task is None:
            raise NotFoundError("Task", task_id)
        return task

    async def create_task(self, draft: TaskDraft) -> AgentTask:
        """
        Create a pending task for an existing agent.

        Raises:
            NotFoundError: If the agent does not exist
        """
        agent = await self._storage.get_agent(draft.agent_id)
        if agent is None:
            raise NotFoundError("Agent", draft.agent_id)

        task = await self._storage.create_task(
            TaskDraft(
                agent_id=draft.agent_id,
                task_type=draft.task_type,
                task_description=draft.task_description,
            )
        )
        logger.info("Task %s (%s) created for agent %s", task.id, task.task_type.value, agent.id)
        return task

    async def execute_task(self, task_id: int) -> AgentTask:
        """
        Execute a pending task with the AI executor.

        Returns:
            The completed task, with the executor result JSON-encoded in ``ai_result``

        Raises:
            NotFoundError: If the task or its agent does not exist
            InvalidStateError: If the task is not pending
            TaskExecutionError: If the executor failed; the task is marked failed
        """
        task = await self.get_task(task_id)

        if task.status != TaskStatus.PENDING:
            raise InvalidStateError(
                "Task already processed",
                details=f"Task status is {task.status.value}",
            )

        agent = await self._storage.get_agent(task.agent_id)
        if agent is None:
            raise NotFoundError("Agent", task.agent_id)

        await self._storage.update_task_status(task_id, TaskStatus.PROCESSING)

        try:
            result = await self._executor.execute(
                task.task_type,
                task.task_description,
                AgentContext(
                    name=agent.agent_name,
                    type=agent.agent_type.value,
                    description=agent.description,
                ),
            )
        except AIExecutionError as e:
            raise await self._fail(task_id, e) from e
        except Exception as e:
            logger.exception("Unexpected error executing task %s", task_id)
            raise await self._fail(task_id, AIExecutionError(str(e))) from e

        completed = await self._storage.update_task_status(
            task_id,
            TaskStatus.COMPLETED,
            ai_result=json.dumps(result.to_dict()),
        )
        logger.info("Task %s completed (%d tokens)", task_id, result.total_tokens)
        return completed

    async def _fail(self, task_id: int, error: AIExecutionError) -> TaskExecutionError:
        """Mark a processing task failed and build the error for the caller."""
        failed = await self._storage.update_task_status(
            task_id,
            TaskStatus.FAILED,
            error_message=error.message,
        )
        logger.warning("Task %s failed: %s", task_id, error.reason)
        return TaskExecutionError(error.message, failed.to_api())
