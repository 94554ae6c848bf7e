"""View models for rendering oaths, transactions and payment progress.

These turn API records into what a client shows: oath cards, filtered
listings, status badges, USDC amounts and the x402 payment steps.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from aoz_core.links import explorer_url
from aoz_core.models import Agent

ALL_AGENTS = "all-agents"
ALL_STATUS = "all-status"


@dataclass
class OathAsk:
    text: str
    status: str


@dataclass
class OathPromise:
    text: str
    details: str
    status: str


@dataclass
class OathAgent:
    name: str
    verified: bool
    tee_attestation: str
    wallet_address: str
    explorer_url: str
    holder: str
    tee_url: Optional[str] = None
    holder_url: Optional[str] = None


@dataclass
class OathCard:
    """One agent rendered as an oath card."""
    id: int
    type: str
    status: str
    ask: OathAsk
    promise: OathPromise
    agent: OathAgent
    open_sea_url: Optional[str] = None


def _get(agent: Union[Agent, Mapping[str, Any]], name: str, alias: str) -> Any:
    if isinstance(agent, Agent):
        value = getattr(agent, name)
        return value.value if hasattr(value, "value") else value
    return agent.get(alias)


def transform_agent_to_oath(agent: Union[Agent, Mapping[str, Any]]) -> OathCard:
    """
    Build an oath card from an agent.

    Accepts a model or the camelCase dict returned by the API. The ask
    is the fulfillment description and the promise is the oath itself.
    """
    wallet = _get(agent, "wallet_address", "walletAddress")
    return OathCard(
        id=_get(agent, "id", "id"),
        type=_get(agent, "agent_type", "agentType"),
        status=_get(agent, "oath_status", "oathStatus"),
        ask=OathAsk(
            text=_get(agent, "fulfillment_description", "fulfillmentDescription"),
            status=_get(agent, "ask_status", "askStatus"),
        ),
        promise=OathPromise(
            text=_get(agent, "oath_description", "oathDescription"),
            details=f"Settlement address: {_get(agent, 'settlement_address', 'settlementAddress')}",
            status=_get(agent, "promise_status", "promiseStatus"),
        ),
        agent=OathAgent(
            name=_get(agent, "agent_name", "agentName"),
            verified=_get(agent, "verified", "verified") == "true",
            tee_attestation=_get(agent, "tee_attestation", "teeAttestation"),
            tee_url=_get(agent, "tee_url", "teeUrl") or None,
            wallet_address=wallet,
            explorer_url=_get(agent, "explorer_url", "explorerUrl") or explorer_url(wallet),
            holder=_get(agent, "holder", "holder"),
            holder_url=_get(agent, "holder_url", "holderUrl") or None,
        ),
        open_sea_url=_get(agent, "open_sea_url", "openSeaUrl") or None,
    )


def filter_oaths(
    oaths: list[OathCard],
    agent: str = ALL_AGENTS,
    status: str = ALL_STATUS,
    mine: bool = False,
    wallet_address: Optional[str] = None,
) -> list[OathCard]:
    """
    Apply the registry listing filters.

    Args:
        oaths: Cards to filter, order is kept
        agent: Agent name to keep, or ``all-agents``
        status: Oath status to keep, or ``all-status``
        mine: Hide completed oaths, and keep only oaths minted by
            ``wallet_address`` when one is given
        wallet_address: Connected wallet
    """
    result = []
    for oath in oaths:
        if agent != ALL_AGENTS and oath.agent.name != agent:
            continue
        if status != ALL_STATUS and oath.status != status:
            continue
        if mine:
            if oath.status == "completed":
                continue
            if wallet_address and oath.agent.wallet_address != wallet_address:
                continue
        result.append(oath)
    return result


def format_usdc(micro_units: Union[str, int], decimals: int = 6) -> str:
    """Format a smallest-unit USDC amount, e.g. ``"1000000"`` -> ``"$1.00 USDC"``."""
    amount = Decimal(int(micro_units)) / (Decimal(10) ** decimals)
    return f"${amount:.2f} USDC"


def truncate_address(address: str) -> str:
    """Shorten a wallet address to ``abcdef...wxyz``."""
    if len(address) <= 13:
        return address
    return f"{address[:6]}...{address[-4:]}"


# ========== Badges ==========

@dataclass(frozen=True)
class BadgeConfig:
    label: str
    style: str  # rich style


OATH_STATUS_BADGES: dict[str, BadgeConfig] = {
    "minted": BadgeConfig("MINTED", "magenta"),
    "completed": BadgeConfig("COMPLETED", "green"),
    "pending": BadgeConfig("PENDING", "yellow"),
    "settled": BadgeConfig("SETTLED", "blue"),
}

AGENT_TYPE_BADGES: dict[str, BadgeConfig] = {
    "LOAN": BadgeConfig("LOAN", "cyan"),
    "TRANSACTION": BadgeConfig("TRANSACTION", "white"),
    "EMPLOYMENT": BadgeConfig("EMPLOYMENT", "magenta"),
    "ALLIANCE": BadgeConfig("ALLIANCE", "bright_magenta"),
}

TRANSACTION_STATUS_BADGES: dict[str, BadgeConfig] = {
    "pending": BadgeConfig("Pending", "yellow"),
    "verified": BadgeConfig("Verified", "blue"),
    "settled": BadgeConfig("Settled", "green"),
    "failed": BadgeConfig("Failed", "red"),
}


def transaction_badge(status: str) -> BadgeConfig:
    """Badge for a payment status; unknown statuses render as-is."""
    return TRANSACTION_STATUS_BADGES.get(status, BadgeConfig(status, "dim"))


def oath_badge(status: str) -> BadgeConfig:
    return OATH_STATUS_BADGES.get(status, BadgeConfig(status.upper(), "dim"))


# ========== Payment progress ==========

PAYMENT_FLOW = ("idle", "wallet_confirm", "submitting", "verifying", "completed")

_STEP_LABELS = (
    ("wallet_confirm", "Confirm in Wallet"),
    ("submitting", "Submitting Payment"),
    ("verifying", "Verifying Transaction"),
    ("completed", "Agent Created"),
)


@dataclass
class PaymentStep:
    id: str
    label: str
    status: str  # pending | active | completed


def payment_steps(current_step: str) -> list[PaymentStep]:
    """
    Progress of an x402 payment for ``current_step``.

    Steps before the current one are completed and the current one is
    active. ``completed`` marks every step completed; ``idle`` leaves all
    pending.

    Raises:
        ValueError: If ``current_step`` is not part of the flow
    """
    if current_step not in PAYMENT_FLOW:
        raise ValueError(f"Unknown payment step: {current_step}")

    position = PAYMENT_FLOW.index(current_step)
    steps = []
    for step_id, label in _STEP_LABELS:
        step_position = PAYMENT_FLOW.index(step_id)
        if current_step == "completed" or step_position < position:
            status = "completed"
        elif step_position == position:
            status = "active"
        else:
            status = "pending"
        steps.append(PaymentStep(id=step_id, label=label, status=status))
    return steps


@dataclass
class PaymentProgress:
    """Everything shown while a payment is in flight."""
    current_step: str
    amount: Optional[str] = None
    transaction_id: Optional[str] = None
    decimals: int = 6
    steps: list[PaymentStep] = field(default_factory=list)

    @classmethod
    def at(cls, current_step: str, amount: Optional[str] = None,
           transaction_id: Optional[str] = None, decimals: int = 6) -> "PaymentProgress":
        return cls(current_step, amount, transaction_id, decimals, payment_steps(current_step))

    @property
    def amount_display(self) -> Optional[str]:
        return format_usdc(self.amount, self.decimals) if self.amount else None
