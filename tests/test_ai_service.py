"""Tests for prompt building and the AI task executor."""

import pytest

from aoz_core.config import Settings
from aoz_core.exceptions import AIExecutionError
from aoz_core.models import TaskType
from aoz_core.services import AgentContext, AITaskExecutor, build_prompts

from helpers import make_completion, make_openai_client


@pytest.fixture
def context():
    return AgentContext(name="SwapBot", type="TRANSACTION", description="MEV-resistant swaps")


class TestBuildPrompts:
    """Tests for system/user prompt composition."""

    def test_includes_agent_and_instruction(self, context):
        system, user = build_prompts(TaskType.ANALYSIS, "Analyze slippage on SOL/USDC", context)

        assert system.startswith("You are an AI assistant")
        assert '"SwapBot", a TRANSACTION agent' in system
        assert "MEV-resistant swaps" in system
        assert "analyze the provided information" in system
        assert user == "Analyze slippage on SOL/USDC"

    def test_without_context(self):
        system, _ = build_prompts(TaskType.QUESTION_ANSWER, "What is x402?")

        assert "You are working as part of" not in system
        assert "answer questions" in system

    @pytest.mark.parametrize("task_type", list(TaskType))
    def test_every_type_has_instruction(self, task_type):
        system, _ = build_prompts(task_type, "Some task description")

        assert "Your task is to" in system


class TestAITaskExecutor:
    """Tests for completion calls."""

    @pytest.mark.asyncio
    async def test_execute(self, context):
        client = make_openai_client(make_completion(content="Summary", prompt=5, completion=7))
        executor = AITaskExecutor(client=client)

        result = await executor.execute(TaskType.SUMMARIZATION, "Summarize this", context)

        assert result.to_dict() == {
            "content": "Summary",
            "model": "gpt-4o-mini",
            "tokens": {"prompt": 5, "completion": 7, "total": 12},
        }
        kwargs = client.chat.completions.create.await_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["temperature"] == 0.7
        assert kwargs["max_tokens"] == 1000

    @pytest.mark.asyncio
    async def test_missing_usage_counts_zero(self):
        executor = AITaskExecutor(client=make_openai_client(make_completion(prompt=None)))

        result = await executor.execute(TaskType.TEXT_GENERATION, "Write a haiku")

        assert result.total_tokens == 0
        assert result.prompt_tokens == 0

    @pytest.mark.asyncio
    async def test_remote_failure(self):
        client = make_openai_client(error=TimeoutError("read timeout"))
        executor = AITaskExecutor(client=client)

        with pytest.raises(AIExecutionError) as exc_info:
            await executor.execute(TaskType.ANALYSIS, "Analyze this")

        assert exc_info.value.reason == "read timeout"
        assert exc_info.value.message == "AI execution failed: read timeout"
        client.chat.completions.create.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_not_configured(self):
        executor = AITaskExecutor()

        assert executor.is_configured is False
        with pytest.raises(AIExecutionError, match="not configured"):
            await executor.execute(TaskType.ANALYSIS, "Analyze this")

    def test_from_settings_without_key(self):
        executor = AITaskExecutor.from_settings(Settings(openai_api_key=None, ai_model="gpt-4o"))

        assert executor.is_configured is False
        assert executor.model == "gpt-4o"

    def test_from_settings_with_key(self):
        executor = AITaskExecutor.from_settings(Settings(openai_api_key="sk-test", ai_max_tokens=200))

        assert executor.is_configured is True
        assert executor.max_tokens == 200
