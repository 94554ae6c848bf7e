"""Agent service: listing, lookup and minting of agent oaths."""

import logging

from aoz_core.exceptions import NotFoundError
from aoz_core.models import Agent, AgentDraft
from aoz_core.storage import BaseStorage

logger = logging.getLogger(__name__)


class AgentService:
    """
    Service for registering and looking up agent oaths.
    """

    def __init__(self, storage: BaseStorage):
        self._storage = storage

    async def list_agents(self) -> list[Agent]:
        """All agents, newest first."""
        return await self._storage.list_agents()

    async def get_agent(self, agent_id: int) -> Agent:
        """
        Get an agent by id.

        Raises:
            NotFoundError: If no agent has this id
        """
        agent = await self._storage.get_agent(agent_id)
        if agent is None:
            raise NotFoundError("Agent", agent_id)
        return agent

    async def create_agent(self, draft: AgentDraft, wallet_address: str) -> Agent:
        """
        Register a new agent oath minted by ``wallet_address``.

        Args:
            draft: Minter-supplied fields, already validated
            wallet_address: Creating wallet; decides the verified flag

        Returns:
            The stored agent
        """
        agent = await self._storage.create_agent(draft, wallet_address)
        logger.info(
            "Agent %s (%s) created by %s verified=%s",
            agent.id, agent.agent_name, wallet_address, agent.verified,
        )
        return agent
