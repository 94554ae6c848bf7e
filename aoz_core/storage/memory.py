"""In-memory entity storage."""

import logging
from datetime import datetime, timezone
from typing import Optional

from aoz_core.constants import VERIFIED_ADDRESS
from aoz_core.exceptions import InvalidTransitionError
from aoz_core.links import explorer_url, marketplace_url
from aoz_core.models import (
    Agent,
    AgentDraft,
    AgentTask,
    AgentType,
    FulfillmentStatus,
    OathStatus,
    TaskDraft,
    TaskStatus,
    User,
    UserDraft,
)
from .base import BaseStorage

logger = logging.getLogger(__name__)


_DEMO_AGENTS = [
    {
        "name": "LoanMaster3000",
        "type": AgentType.LOAN,
        "desc": "Automated micro-lending agent for DeFi protocols",
        "oath": "Provide instant loans with 5% APR for verified collateral",
        "fulfillment": "Secure 10 SOL in verified lending pool",
        "wallet": "3Q9ZqJ8VEkpJ3wKG7xdM2VxH8c9QKyNbC1rW4sD5tPu8",
    },
    {
        "name": "SwapBot",
        "type": AgentType.TRANSACTION,
        "desc": "MEV-resistant token swap execution agent",
        "oath": "Execute swaps with minimal slippage and front-run protection",
        "fulfillment": "Complete 50 successful swaps with <0.5% slippage",
        "wallet": "7xK2pW8vN4mQ3hJ9dT5fC6bV1eR8sL9tY3nX4cZ2aM7w",
    },
    {
        "name": "DevOps Assistant",
        "type": AgentType.EMPLOYMENT,
        "desc": "Autonomous agent for monitoring and maintaining smart contracts",
        "oath": "Monitor contract health and auto-respond to critical issues",
        "fulfillment": "Maintain 99.9% uptime for monitored contracts",
        "wallet": "5tR9wX2nK4vP8mL6jC3bH1eY7dT4sW9fN6qZ8cV5aM3x",
    },
]


class InMemoryStorage(BaseStorage):
    """
    In-memory implementation of entity storage.

    Data is lost on restart and ids restart at 1. All maps are owned by
    a single event loop and every mutation is one dict operation, so no
    lock is taken. A multi-threaded host would need one per map.
    """

    def __init__(
        self,
        verified_address: str = VERIFIED_ADDRESS,
        seed_demo_agents: bool = True,
    ):
        self._verified_address = verified_address
        self._users: dict[str, User] = {}
        self._agents: dict[int, Agent] = {}
        self._tasks: dict[int, AgentTask] = {}
        self._next_agent_id = 1
        self._next_task_id = 1

        if seed_demo_agents:
            self._seed_demo_agents()

    def _allocate_agent_id(self) -> int:
        agent_id = self._next_agent_id
        self._next_agent_id += 1
        return agent_id

    def _seed_demo_agents(self) -> None:
        """Populate the registry with one verified and three community agents."""
        verified = self._verified_address
        dealer = Agent(
            id=self._allocate_agent_id(),
            agent_name="aozAgentDealer",
            agent_type=AgentType.ALLIANCE,
            description="Official AOZ agent dealer managing verified AI agents on Solana",
            settlement_address=verified,
            oath_description="Facilitate trustless AI agent transactions through verified TEE execution",
            fulfillment_description="Complete 100 verified agent transactions",
            oath_status=OathStatus.MINTED,
            ask_status=FulfillmentStatus.SETTLED,
            promise_status=FulfillmentStatus.SETTLED,
            verified="true",
            tee_url="https://phala.network",
            wallet_address=verified,
            explorer_url=explorer_url(verified),
            holder="AOZ Treasury",
            holder_url=explorer_url(verified),
            open_sea_url=marketplace_url(verified),
        )
        self._agents[dealer.id] = dealer

        for demo in _DEMO_AGENTS:
            agent = Agent(
                id=self._allocate_agent_id(),
                agent_name=demo["name"],
                agent_type=demo["type"],
                description=demo["desc"],
                settlement_address=demo["wallet"],
                oath_description=demo["oath"],
                fulfillment_description=demo["fulfillment"],
                verified="false",
                wallet_address=demo["wallet"],
                explorer_url=explorer_url(demo["wallet"]),
                holder="Community",
                open_sea_url=marketplace_url(demo["wallet"]),
            )
            self._agents[agent.id] = agent

        logger.debug("Seeded %d demo agents", len(self._agents))

    # ---- Users ----

    async def get_user(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        return next(
            (user for user in self._users.values() if user.username == username),
            None,
        )

    async def create_user(self, user: UserDraft) -> User:
        stored = User(username=user.username, password=user.password)
        self._users[stored.id] = stored
        return stored

    # ---- Agents ----

    async def list_agents(self) -> list[Agent]:
        return sorted(self._agents.values(), key=lambda a: a.id, reverse=True)

    async def create_agent(self, agent: AgentDraft, wallet_address: str) -> Agent:
        """Store a new agent; only the configured address is marked verified."""
        is_verified = wallet_address == self._verified_address

        stored = Agent(
            id=self._allocate_agent_id(),
            agent_name=agent.agent_name,
            agent_type=agent.agent_type,
            description=agent.description,
            settlement_address=agent.settlement_address,
            oath_description=agent.oath_description,
            fulfillment_description=agent.fulfillment_description,
            oath_status=OathStatus.MINTED,
            ask_status=FulfillmentStatus.PENDING,
            promise_status=FulfillmentStatus.PENDING,
            verified="true" if is_verified else "false",
            tee_url=agent.tee_url,
            wallet_address=wallet_address,
            explorer_url=explorer_url(wallet_address),
            holder="Minter",
            holder_url=explorer_url(agent.settlement_address),
            open_sea_url=marketplace_url(wallet_address),
        )
        self._agents[stored.id] = stored
        return stored

    async def get_agent(self, agent_id: int) -> Optional[Agent]:
        return self._agents.get(agent_id)

    # ---- Tasks ----

    async def list_tasks_by_agent(self, agent_id: int) -> list[AgentTask]:
        tasks = [task for task in self._tasks.values() if task.agent_id == agent_id]
        return sorted(tasks, key=lambda t: t.id, reverse=True)

    async def create_task(self, task: TaskDraft) -> AgentTask:
        task_id = self._next_task_id
        self._next_task_id += 1

        stored = AgentTask(
            id=task_id,
            agent_id=task.agent_id,
            task_type=task.task_type,
            task_description=task.task_description,
            status=TaskStatus.PENDING,
            ai_result=task.ai_result,
            error_message=task.error_message,
        )
        self._tasks[task_id] = stored
        return stored

    async def get_task(self, task_id: int) -> Optional[AgentTask]:
        return self._tasks.get(task_id)

    async def update_task_status(
        self,
        task_id: int,
        status: TaskStatus,
        ai_result: Optional[str] = None,
        error_message: Optional[str] = None,
    ) -> Optional[AgentTask]:
        task = self._tasks.get(task_id)
        if task is None:
            return None

        status = TaskStatus(status)
        if not task.status.can_transition_to(status):
            raise InvalidTransitionError("task", task.status.value, status.value)

        updated = task.model_copy(
            update={
                "status": status,
                "ai_result": ai_result if ai_result is not None else task.ai_result,
                "error_message": error_message if error_message is not None else task.error_message,
                "completed_at": datetime.now(timezone.utc) if status.is_terminal else task.completed_at,
            }
        )
        self._tasks[task_id] = updated
        return updated
