"""Task API routes."""

from fastapi import APIRouter, Depends, status

from aoz_core.api.dependencies import get_task_service
from aoz_core.api.routes.agents import parse_id
from aoz_core.api.schemas import CreateTaskRequest
from aoz_core.services import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
    description="Queue a pending AI task for an existing agent."
)
async def create_task(
    body: CreateTaskRequest,
    task_service: TaskService = Depends(get_task_service)
) -> dict:
    task = await task_service.create_task(body.to_draft())
    return task.to_api()


@router.post(
    "/{task_id}/execute",
    summary="Execute a task",
    description=(
        "Run a pending task through the AI executor. On failure the task is "
        "marked failed and returned in a 500 body."
    ),
)
async def execute_task(
    task_id: str,
    task_service: TaskService = Depends(get_task_service)
) -> dict:
    task = await task_service.execute_task(parse_id(task_id, "Invalid task ID"))
    return task.to_api()
