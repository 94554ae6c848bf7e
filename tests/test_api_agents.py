"""Tests for the agent routes with the payment gate off."""

from aoz_core.constants import VERIFIED_ADDRESS

from helpers import MINTER, OTHER_MINTER, agent_body


def create(client, wallet=MINTER, **overrides):
    return client.post(
        "/api/agents",
        json=agent_body(**overrides),
        headers={"X-Wallet-Address": wallet},
    )


class TestListAgents:
    """Tests for GET /api/agents."""

    def test_lists_seeded_agents_newest_first(self, client):
        response = client.get("/api/agents")

        assert response.status_code == 200
        agents = response.json()
        assert [a["id"] for a in agents] == [4, 3, 2, 1]
        assert agents[-1]["agentName"] == "aozAgentDealer"
        assert agents[-1]["verified"] == "true"
        assert all(a["verified"] == "false" for a in agents[:-1])

    def test_empty_registry(self, make_client):
        client = make_client(seed_demo_agents=False)

        assert client.get("/api/agents").json() == []

    def test_new_agent_listed_first(self, client):
        created = create(client).json()

        agents = client.get("/api/agents").json()
        assert agents[0]["id"] == created["id"]


class TestCreateAgent:
    """Tests for POST /api/agents."""

    def test_creates_agent(self, client):
        response = create(client)

        assert response.status_code == 201
        agent = response.json()
        assert agent["agentName"] == "ResearchBot"
        assert agent["walletAddress"] == MINTER
        assert agent["oathStatus"] == "minted"
        assert agent["askStatus"] == "pending"
        assert agent["promiseStatus"] == "pending"
        assert agent["holder"] == "Minter"
        assert agent["teeAttestation"] == "#0400...0000"
        assert agent["explorerUrl"] == f"https://solscan.io/account/{MINTER}"
        assert agent["openSeaUrl"] == f"https://magiceden.io/item-details/{MINTER}"
        assert "createdAt" in agent

    def test_ids_strictly_increase(self, client):
        ids = [create(client).json()["id"] for _ in range(5)]

        assert ids == sorted(ids)
        assert len(set(ids)) == 5
        assert ids[0] > 4  # after the seeded agents

    def test_verified_only_for_configured_wallet(self, client):
        verified = create(client, wallet=VERIFIED_ADDRESS).json()
        other = create(client, wallet=OTHER_MINTER).json()

        assert verified["verified"] == "true"
        assert other["verified"] == "false"

    def test_verified_address_is_configurable(self, make_client):
        client = make_client(verified_wallet_address=OTHER_MINTER)

        assert create(client, wallet=OTHER_MINTER).json()["verified"] == "true"
        assert create(client, wallet=VERIFIED_ADDRESS).json()["verified"] == "false"

    def test_requires_wallet_header(self, client):
        response = client.post("/api/agents", json=agent_body())

        assert response.status_code == 400
        assert response.json() == {
            "error": "Wallet address required",
            "details": "Please connect your Phantom wallet",
        }
        assert len(client.get("/api/agents").json()) == 4

    def test_never_asks_for_payment_when_gate_disabled(self, client):
        response = create(client)

        assert response.status_code == 201
        assert "X-Transaction-Id" not in response.headers

    def test_rejects_short_description(self, client):
        response = create(client, description="too short")

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation failed"
        assert '"description"' in body["details"]

    def test_rejects_empty_name(self, client):
        response = create(client, agentName="")

        assert response.status_code == 400
        assert '"agentName"' in response.json()["details"]

    def test_rejects_invalid_settlement_address(self, client):
        response = create(client, settlementAddress="0" * 40)

        assert response.status_code == 400
        assert response.json()["details"] == 'Invalid Solana address at "settlementAddress"'

    def test_rejects_unknown_agent_type(self, client):
        response = create(client, agentType="LOTTERY")

        assert response.status_code == 400
        assert '"agentType"' in response.json()["details"]

    def test_rejects_malformed_json(self, client):
        response = client.post(
            "/api/agents",
            content=b"{not json",
            headers={"X-Wallet-Address": MINTER, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"


class TestGetAgent:
    """Tests for GET /api/agents/{id}."""

    def test_get_agent(self, client):
        response = client.get("/api/agents/1")

        assert response.status_code == 200
        assert response.json()["agentName"] == "aozAgentDealer"

    def test_unknown_agent(self, client):
        response = client.get("/api/agents/999")

        assert response.status_code == 404
        assert response.json() == {"error": "Agent not found"}

    def test_invalid_agent_id(self, client):
        response = client.get("/api/agents/abc")

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid agent ID"


class TestHealth:
    """Tests for the service health endpoints."""

    def test_root(self, client):
        body = client.get("/").json()

        assert body["service"] == "AOZ API"
        assert body["status"] == "healthy"

    def test_health_reports_components(self, client):
        body = client.get("/health").json()

        assert body["status"] == "healthy"
        assert body["components"]["x402"] == "disabled"
        assert body["components"]["ai"] == "configured"

    def test_request_id_is_echoed(self, client):
        response = client.get("/api/agents", headers={"X-Request-ID": "req_test"})

        assert response.headers["X-Request-ID"] == "req_test"

    def test_request_id_is_generated(self, client):
        response = client.get("/api/agents")

        assert response.headers["X-Request-ID"].startswith("req_")
