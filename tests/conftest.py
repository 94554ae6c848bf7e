import pytest
from fastapi.testclient import TestClient

from aoz_core.api.dependencies import Container
from aoz_core.api.main import create_app
from aoz_core.config import Settings
from aoz_core.constants import VERIFIED_ADDRESS
from aoz_core.services import AITaskExecutor

from helpers import TREASURY, FakeFacilitator, make_openai_client


@pytest.fixture(autouse=True)
def reset_container():
    """Reset the dependency container before each test."""
    Container.reset()
    yield
    Container.reset()


@pytest.fixture
def openai_client():
    return make_openai_client()


@pytest.fixture
def facilitator():
    return FakeFacilitator()


@pytest.fixture
def make_client(openai_client, facilitator):
    """
    Factory for a TestClient over a fresh app.

    Keyword arguments become Settings fields; ``facilitator`` and
    ``openai_client`` replace the fixtures of the same name.
    """
    clients = []

    def _make(facilitator=facilitator, openai_client=openai_client, raise_server_exceptions=True, **overrides):
        overrides.setdefault("treasury_wallet_address", TREASURY)
        overrides.setdefault("verified_wallet_address", VERIFIED_ADDRESS)
        settings = Settings(**overrides)
        container = Container(
            settings=settings,
            facilitator=facilitator,
            executor=AITaskExecutor(client=openai_client),
        )
        client = TestClient(
            create_app(container=container),
            raise_server_exceptions=raise_server_exceptions,
        )
        client.__enter__()
        client.container = container
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client):
    """Client with the payment gate off and demo agents seeded."""
    return make_client()


@pytest.fixture
def paid_client(make_client):
    """Client with the payment gate on."""
    return make_client(x402_enabled=True)
