"""Agent model representing an AI agent oath registered with AOZ."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import Field

from aoz_core.constants import DEFAULT_TEE_ATTESTATION
from .base import AozModel


class AgentType(str, Enum):
    """Kinds of commitment an agent can mint."""
    LOAN = "LOAN"
    TRANSACTION = "TRANSACTION"
    EMPLOYMENT = "EMPLOYMENT"
    ALLIANCE = "ALLIANCE"


class OathStatus(str, Enum):
    """Status of the oath NFT itself."""
    MINTED = "minted"
    COMPLETED = "completed"
    PENDING = "pending"
    SETTLED = "settled"


class FulfillmentStatus(str, Enum):
    """Status of the ask and promise halves of an oath."""
    SETTLED = "settled"
    PENDING = "pending"


class AgentDraft(AozModel):
    """
    Fields supplied by the minter when creating an agent.

    Everything else on an Agent is derived by the store.
    """

    agent_name: str
    agent_type: AgentType
    description: str
    settlement_address: str
    oath_description: str
    fulfillment_description: str
    tee_url: Optional[str] = None
    holder_url: Optional[str] = None
    open_sea_url: Optional[str] = None


class Agent(AozModel):
    """
    An aozOath: a named AI agent's declared commitment (ask + promise).

    ``verified`` is the string "true" or "false", kept as text because
    clients compare against the literal.
    """

    id: int
    agent_name: str
    agent_type: AgentType
    description: str
    settlement_address: str
    oath_description: str
    fulfillment_description: str

    oath_status: OathStatus = OathStatus.MINTED
    ask_status: FulfillmentStatus = FulfillmentStatus.PENDING
    promise_status: FulfillmentStatus = FulfillmentStatus.PENDING

    verified: str = "false"
    tee_attestation: str = DEFAULT_TEE_ATTESTATION
    tee_url: Optional[str] = None

    wallet_address: str
    explorer_url: Optional[str] = None
    holder: str = "Minter"
    holder_url: Optional[str] = None
    open_sea_url: Optional[str] = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_verified(self) -> bool:
        return self.verified == "true"
