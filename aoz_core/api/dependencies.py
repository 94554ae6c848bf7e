"""Dependency injection for FastAPI routes."""

from typing import Optional

from fastapi import Depends, Request

from aoz_core.config import Settings, settings as default_settings
from aoz_core.ledger import BaseLedger, InMemoryLedger
from aoz_core.services import AgentService, AITaskExecutor, PaymentGate, TaskService
from aoz_core.storage import BaseStorage, InMemoryStorage
from aoz_core.x402 import Facilitator, HTTPFacilitatorClient


class Container:
    """
    Simple dependency container for services.

    One container per application. Any collaborator can be passed in
    explicitly; the rest are built from settings.
    """

    _instance = None

    def __init__(
        self,
        settings: Optional[Settings] = None,
        storage: Optional[BaseStorage] = None,
        ledger: Optional[BaseLedger] = None,
        facilitator: Optional[Facilitator] = None,
        executor: Optional[AITaskExecutor] = None,
    ):
        self._settings = settings or default_settings

        self._storage = storage or InMemoryStorage(
            verified_address=self._settings.verified_wallet_address,
            seed_demo_agents=self._settings.seed_demo_agents,
        )
        self._ledger = ledger or InMemoryLedger()

        # The facilitator is only reached when the gate is switched on
        if facilitator is None and self._settings.x402_enabled:
            facilitator = HTTPFacilitatorClient(
                self._settings.facilitator_url,
                timeout=self._settings.facilitator_timeout,
            )
        self._facilitator = facilitator

        self._executor = executor or AITaskExecutor.from_settings(self._settings)

        # Initialize services
        self._agent_service = AgentService(self._storage)
        self._task_service = TaskService(self._storage, self._executor)
        self._payment_gate = PaymentGate.from_settings(
            self._settings,
            self._ledger,
            self._facilitator,
        )

    @classmethod
    def get_instance(cls, settings: Optional[Settings] = None) -> "Container":
        """Get or create the singleton container."""
        if cls._instance is None:
            cls._instance = cls(settings)
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the container (useful for testing)."""
        cls._instance = None

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def storage(self) -> BaseStorage:
        return self._storage

    @property
    def ledger(self) -> BaseLedger:
        return self._ledger

    @property
    def agent_service(self) -> AgentService:
        return self._agent_service

    @property
    def task_service(self) -> TaskService:
        return self._task_service

    @property
    def payment_gate(self) -> PaymentGate:
        return self._payment_gate

    async def close(self) -> None:
        """Release HTTP clients held by the facilitator and AI executor."""
        close_facilitator = getattr(self._facilitator, "close", None)
        if close_facilitator is not None:
            await close_facilitator()
        await self._executor.close()


def get_container(request: Request) -> Container:
    """Get the dependency container of the running application."""
    return request.app.state.container


def get_settings(container: Container = Depends(get_container)) -> Settings:
    """Dependency for settings."""
    return container.settings


def get_agent_service(container: Container = Depends(get_container)) -> AgentService:
    """Dependency for agent service."""
    return container.agent_service


def get_task_service(container: Container = Depends(get_container)) -> TaskService:
    """Dependency for task service."""
    return container.task_service


def get_payment_gate(container: Container = Depends(get_container)) -> PaymentGate:
    """Dependency for the x402 payment gate."""
    return container.payment_gate


def get_ledger(container: Container = Depends(get_container)) -> BaseLedger:
    """Dependency for ledger."""
    return container.ledger
