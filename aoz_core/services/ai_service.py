"""AI task executor: one chat completion per task through the OpenAI API."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from openai import AsyncOpenAI

from aoz_core.ai.prompts import (
    AGENT_CONTEXT_TEMPLATE,
    BASE_SYSTEM_PROMPT,
    EMPTY_COMPLETION,
    TASK_INSTRUCTIONS,
)
from aoz_core.exceptions import AIExecutionError
from aoz_core.models import TaskType

logger = logging.getLogger(__name__)


@dataclass
class AgentContext:
    """Who the task is being executed for."""
    name: str
    type: str
    description: str


@dataclass
class AITaskResult:
    """Generated text plus token usage, stored on the task as JSON."""
    content: str
    model: str
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": self.content,
            "model": self.model,
            "tokens": {
                "prompt": self.prompt_tokens,
                "completion": self.completion_tokens,
                "total": self.total_tokens,
            },
        }


def build_prompts(
    task_type: TaskType,
    task_description: str,
    agent_context: Optional[AgentContext] = None,
) -> tuple[str, str]:
    """
    Compose the system and user prompts for a task.

    Args:
        task_type: Kind of work requested
        task_description: Free text from the requester, sent as the user turn
        agent_context: Owning agent, mentioned in the system prompt

    Returns:
        Tuple of (system_prompt, user_prompt)
    """
    system_prompt = BASE_SYSTEM_PROMPT
    if agent_context:
        system_prompt += AGENT_CONTEXT_TEMPLATE.format(
            agent_name=agent_context.name,
            agent_type=agent_context.type,
            agent_description=agent_context.description,
        )

    instruction = TASK_INSTRUCTIONS.get(TaskType(task_type).value)
    if instruction:
        system_prompt += f"\n\n{instruction}"

    return system_prompt, task_description


class AITaskExecutor:
    """
    Stateless pass-through to an OpenAI-compatible completion API.

    One request per task, fixed sampling parameters, no retry. Failures
    surface as AIExecutionError; the caller decides what to record.
    """

    def __init__(
        self,
        client: Optional[AsyncOpenAI] = None,
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        max_tokens: int = 1000,
    ):
        self._client = client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    @classmethod
    def from_settings(cls, settings) -> "AITaskExecutor":
        client = None
        if settings.openai_api_key:
            client = AsyncOpenAI(
                api_key=settings.openai_api_key,
                base_url=settings.openai_base_url,
            )
        return cls(
            client=client,
            model=settings.ai_model,
            temperature=settings.ai_temperature,
            max_tokens=settings.ai_max_tokens,
        )

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()

    async def execute(
        self,
        task_type: TaskType,
        task_description: str,
        agent_context: Optional[AgentContext] = None,
    ) -> AITaskResult:
        """
        Run one completion for a task.

        Raises:
            AIExecutionError: If the service is not configured or the call fails
        """
        if self._client is None:
            raise AIExecutionError("AI service not configured (missing API key)")

        system_prompt, user_prompt = build_prompts(task_type, task_description, agent_context)

        try:
            completion = await self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            logger.error(f"AI task execution error: {e}")
            raise AIExecutionError(str(e) or type(e).__name__) from e

        content = None
        if completion.choices:
            content = completion.choices[0].message.content
        usage = completion.usage

        return AITaskResult(
            content=content or EMPTY_COMPLETION,
            model=completion.model or self.model,
            prompt_tokens=getattr(usage, "prompt_tokens", 0) or 0,
            completion_tokens=getattr(usage, "completion_tokens", 0) or 0,
            total_tokens=getattr(usage, "total_tokens", 0) or 0,
        )
