"""Pydantic schemas for API request/response validation."""

import re
from typing import Optional

from pydantic import Field, StrictInt, field_validator

from aoz_core.constants import SOLANA_ADDRESS_REGEX
from aoz_core.models import AgentDraft, AgentType, TaskDraft, TaskType
from aoz_core.models.base import AozModel


# ========== Agent Schemas ==========

class CreateAgentRequest(AozModel):
    """Request to mint a new agent oath."""
    agent_name: str = Field(..., min_length=1, max_length=100)
    agent_type: AgentType
    description: str = Field(..., min_length=10, max_length=500)
    settlement_address: str = Field(..., min_length=32, max_length=44)
    oath_description: str = Field(..., min_length=10, max_length=500)
    fulfillment_description: str = Field(..., min_length=10, max_length=500)
    tee_url: Optional[str] = None
    holder_url: Optional[str] = None
    open_sea_url: Optional[str] = None

    @field_validator("settlement_address")
    @classmethod
    def check_solana_address(cls, v: str) -> str:
        if not re.fullmatch(SOLANA_ADDRESS_REGEX, v):
            raise ValueError("Invalid Solana address")
        return v

    def to_draft(self) -> AgentDraft:
        return AgentDraft(**self.model_dump())


# ========== Task Schemas ==========

class CreateTaskRequest(AozModel):
    """Request to queue an AI task for an agent."""
    agent_id: StrictInt = Field(..., gt=0)
    task_type: TaskType
    task_description: str = Field(..., min_length=10, max_length=1000)

    def to_draft(self) -> TaskDraft:
        return TaskDraft(
            agent_id=self.agent_id,
            task_type=self.task_type,
            task_description=self.task_description,
        )


# ========== x402 Schemas ==========

class X402ConfigResponse(AozModel):
    """Public payment gate configuration."""
    enabled: bool
    price: str
    price_display: Optional[str] = None
    network: str
    asset: str
    decimals: int
    pay_to: str
