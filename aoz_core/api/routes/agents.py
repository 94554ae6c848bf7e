"""Agent API routes."""

import logging

from fastapi import APIRouter, Depends, Request, Response, status

from aoz_core.api.dependencies import get_agent_service, get_payment_gate, get_task_service
from aoz_core.api.schemas import CreateAgentRequest
from aoz_core.constants import WALLET_ADDRESS_HEADER
from aoz_core.exceptions import ValidationError
from aoz_core.services import AgentService, PaymentGate, TaskService
from aoz_core.x402 import TRANSACTION_ID_HEADER, build_payment_response_header

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/agents", tags=["agents"])


def parse_id(value: str, message: str) -> int:
    """Parse a path id, raising a 400 with ``message`` when it is not an integer."""
    try:
        return int(value)
    except ValueError:
        raise ValidationError(message, details=f"'{value}' is not a valid id")


@router.get(
    "",
    summary="List agents",
    description="List all agents, newest first."
)
async def list_agents(
    agent_service: AgentService = Depends(get_agent_service)
) -> list[dict]:
    agents = await agent_service.list_agents()
    return [agent.to_api() for agent in agents]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Mint a new agent",
    description=(
        "Create an agent oath for the wallet in X-Wallet-Address. When the "
        "x402 gate is enabled the request must carry an X-PAYMENT proof, "
        "otherwise a 402 challenge is returned."
    ),
)
async def create_agent(
    body: CreateAgentRequest,
    request: Request,
    response: Response,
    agent_service: AgentService = Depends(get_agent_service),
    gate: PaymentGate = Depends(get_payment_gate),
) -> dict:
    """Mint an agent, charging for it first when the payment gate is on."""
    wallet_address = (request.headers.get(WALLET_ADDRESS_HEADER) or "").strip()
    if not wallet_address:
        raise ValidationError(
            "Wallet address required",
            details="Please connect your Phantom wallet",
        )

    verified = await gate.require_payment(request.headers, str(request.url), wallet_address)

    agent = await agent_service.create_agent(body.to_draft(), wallet_address)

    if verified is not None:
        tx = await gate.settle(verified)
        response.headers[TRANSACTION_ID_HEADER] = tx.id
        if verified.settlement is not None:
            summary = {**verified.settlement.to_dict(), "transactionId": tx.id}
            response.headers.update(build_payment_response_header(summary))

    return agent.to_api()


@router.get(
    "/{agent_id}",
    summary="Get agent by ID",
    description="Retrieve a single agent."
)
async def get_agent(
    agent_id: str,
    agent_service: AgentService = Depends(get_agent_service)
) -> dict:
    agent = await agent_service.get_agent(parse_id(agent_id, "Invalid agent ID"))
    return agent.to_api()


@router.get(
    "/{agent_id}/tasks",
    summary="List agent tasks",
    description="List the tasks of one agent, newest first."
)
async def list_agent_tasks(
    agent_id: str,
    task_service: TaskService = Depends(get_task_service)
) -> list[dict]:
    tasks = await task_service.list_tasks(parse_id(agent_id, "Invalid agent ID"))
    return [task.to_api() for task in tasks]
