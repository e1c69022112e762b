"""Tests for API endpoints."""

import pytest
from eth_utils import to_checksum_address
from httpx import ASGITransport, AsyncClient

from lendlink.api.app import create_app
from lendlink.config import Settings
from lendlink.protocol.aave_v3 import PLACEHOLDER_ADDRESS, POOL_ADDRESS, TOKENS

from tests.conftest import APPROVAL_HASH, TX_HASH, USDC, WETH


def create_body(action="supply", token=USDC, amount="100"):
    return {"payload": {"action": action, "tokenAddress": token, "amount": amount}}


async def create_link(client, **kwargs) -> str:
    response = await client.post("/tx/create", json=create_body(**kwargs))
    assert response.status_code == 200
    return response.json()["id"]


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    @pytest.mark.asyncio
    async def test_health_check(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "lendlink"}

    @pytest.mark.asyncio
    async def test_detailed_health(self, client):
        response = await client.get("/health/detailed")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data
        assert data["config"]["environment"] == "test"
        assert data["config"]["chain"]["chain_id"] == 11155111


class TestCreateTransaction:
    """Tests for POST /tx/create."""

    @pytest.mark.asyncio
    async def test_create_supply(self, client):
        response = await client.post("/tx/create", json=create_body())

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert len(data["id"]) == 8
        assert data["url"] == f"http://test/transaction/{data['id']}"
        assert data["message"] == (
            f"Transaction created, ask the user to approve it in 15 minutes at {data['url']}"
        )

    @pytest.mark.asyncio
    async def test_public_base_url_used_for_link(self, database, store):
        settings = Settings(
            environment="test",
            database_url="sqlite+aiosqlite:///:memory:",
            public_base_url="https://links.example.org/",
        )
        app = create_app(settings, database)
        app.state.store = store

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            response = await ac.post("/tx/create", json=create_body())

        data = response.json()
        assert data["url"] == f"https://links.example.org/transaction/{data['id']}"

    @pytest.mark.asyncio
    async def test_unsupported_token(self, client):
        response = await client.post("/tx/create", json=create_body(token="0x" + "11" * 20))

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["code"] == "UnsupportedToken"
        assert data["error"].startswith("Unsupported token")

    @pytest.mark.asyncio
    async def test_invalid_action(self, client):
        response = await client.post("/tx/create", json=create_body(action="stake"))

        assert response.status_code == 400
        assert response.json()["code"] == "InvalidAction"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", ["0", "-1", "abc", "1.0000001"])
    async def test_invalid_amount(self, client, amount):
        response = await client.post("/tx/create", json=create_body(amount=amount))

        assert response.status_code == 400
        assert response.json()["code"] == "InvalidAmount"

    @pytest.mark.asyncio
    async def test_max_rejected_for_supply(self, client):
        response = await client.post("/tx/create", json=create_body(amount="max"))

        assert response.status_code == 400
        assert response.json()["code"] == "InvalidAmount"

    @pytest.mark.asyncio
    async def test_malformed_json(self, client):
        response = await client.post(
            "/tx/create",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "InvalidRequest"

    @pytest.mark.asyncio
    async def test_body_must_be_object(self, client):
        response = await client.post("/tx/create", json=["supply"])

        assert response.status_code == 400
        assert response.json()["code"] == "InvalidRequest"


class TestTransactionData:
    """Tests for GET /tx/data/{id}."""

    @pytest.mark.asyncio
    async def test_get_data(self, client):
        tx_id = await create_link(client, action="borrow", token=WETH, amount="1")

        response = await client.get(f"/tx/data/{tx_id}")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        data = body["data"]
        assert data["functionName"] == "borrow"
        assert data["contractAddress"] == POOL_ADDRESS
        assert data["params"] == [
            to_checksum_address(WETH),
            "1000000000000000000",
            2,
            0,
            PLACEHOLDER_ADDRESS,
        ]
        assert data["requiresApproval"] is False
        assert data["chainId"] == 11155111
        assert data["value"] == "0"
        assert isinstance(data["contractABI"], list)
        assert isinstance(data["createdAt"], int)

    @pytest.mark.asyncio
    async def test_unknown_id(self, client):
        response = await client.get("/tx/data/unknown1")

        assert response.status_code == 404
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Transaction not found or expired"
        assert data["code"] == "TransactionNotFound"

    @pytest.mark.asyncio
    async def test_expired_link(self, client, clock):
        tx_id = await create_link(client)

        clock.advance(900)
        response = await client.get(f"/tx/data/{tx_id}")

        assert response.status_code == 404


class TestConfirmTransaction:
    """Tests for POST /tx/confirm/{id}."""

    @pytest.mark.asyncio
    async def test_confirm(self, client, store):
        tx_id = await create_link(client)

        response = await client.post(
            f"/tx/confirm/{tx_id}",
            json={"txHash": TX_HASH, "approvalTxHash": APPROVAL_HASH},
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Transaction marked as successful"}

        record = await store.get(tx_id)
        assert record.success is True
        assert record.tx_hash == TX_HASH
        assert record.approval_tx_hash == APPROVAL_HASH

    @pytest.mark.asyncio
    async def test_confirm_without_approval_hash(self, client, store):
        tx_id = await create_link(client, action="borrow", token=WETH, amount="1")

        response = await client.post(f"/tx/confirm/{tx_id}", json={"txHash": TX_HASH})

        assert response.status_code == 200
        record = await store.get(tx_id)
        assert record.approval_tx_hash is None

    @pytest.mark.asyncio
    async def test_confirm_unknown_id(self, client):
        response = await client.post("/tx/confirm/unknown1", json={"txHash": TX_HASH})

        assert response.status_code == 404
        assert response.json()["code"] == "TransactionNotFound"

    @pytest.mark.asyncio
    async def test_missing_hash(self, client):
        tx_id = await create_link(client)

        response = await client.post(f"/tx/confirm/{tx_id}", json={})

        assert response.status_code == 400
        assert response.json()["code"] == "MissingTransactionHash"

    @pytest.mark.asyncio
    async def test_malformed_hash(self, client):
        tx_id = await create_link(client)

        response = await client.post(f"/tx/confirm/{tx_id}", json={"txHash": "0x1234"})

        assert response.status_code == 400
        assert response.json()["code"] == "MissingTransactionHash"

    @pytest.mark.asyncio
    async def test_malformed_approval_hash(self, client):
        tx_id = await create_link(client)

        response = await client.post(
            f"/tx/confirm/{tx_id}",
            json={"txHash": TX_HASH, "approvalTxHash": "nope"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "InvalidRequest"


class TestTokens:
    """Tests for the token catalog endpoints."""

    @pytest.mark.asyncio
    async def test_list_tokens(self, client):
        response = await client.get("/tokens")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["total"] == len(TOKENS)
        symbols = [token["symbol"] for token in data["tokens"]]
        assert symbols == sorted(symbols)
        assert "USDC" in symbols

    @pytest.mark.asyncio
    async def test_get_token_any_case(self, client):
        response = await client.get(f"/tokens/{USDC.upper().replace('0X', '0x')}")

        assert response.status_code == 200
        data = response.json()
        assert data["symbol"] == "USDC"
        assert data["decimals"] == 6
        assert data["address"] == to_checksum_address(USDC)

    @pytest.mark.asyncio
    async def test_unknown_token(self, client):
        response = await client.get("/tokens/0x" + "11" * 20)
        assert response.status_code == 404


class TestTransactionPage:
    """Tests for the wallet page."""

    @pytest.mark.asyncio
    async def test_page_embeds_config(self, client):
        response = await client.get("/transaction/abc12345")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert '"txId": "abc12345"' in response.text
        assert "__PAGE_CONFIG__" not in response.text

    @pytest.mark.asyncio
    async def test_page_escapes_markup(self, client):
        response = await client.get("/transaction/%3Cscript%3E")

        assert response.status_code == 200
        assert "<script>\"" not in response.text
        assert "\\u003cscript\\u003e" in response.text


class TestCors:
    """Tests for cross-origin access."""

    @pytest.mark.asyncio
    async def test_preflight(self, client):
        response = await client.options(
            "/tx/create",
            headers={
                "Origin": "https://agent.example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["access-control-max-age"] == "86400"
        methods = response.headers["access-control-allow-methods"]
        for method in ("GET", "POST", "PUT", "DELETE", "OPTIONS"):
            assert method in methods

    @pytest.mark.asyncio
    async def test_simple_request_allows_any_origin(self, client):
        response = await client.get("/health", headers={"Origin": "https://wallet.example.net"})

        assert response.headers["access-control-allow-origin"] == "*"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/tx/create", "/tx/confirm/abc12345", "/tokens", "/anything/else"])
    async def test_bare_options_on_any_route(self, client, path):
        response = await client.options(path)

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["access-control-max-age"] == "86400"
        assert "POST" in response.headers["access-control-allow-methods"]
        assert "x-api-version" in response.headers["access-control-allow-headers"].lower()

    @pytest.mark.asyncio
    async def test_preflight_with_unlisted_header(self, client):
        response = await client.options(
            "/tx/create",
            headers={
                "Origin": "https://agent.example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type, x-agent-id",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert "x-agent-id" not in response.headers["access-control-allow-headers"].lower()


class TestErrors:
    """Tests for the error envelope."""

    @pytest.mark.asyncio
    async def test_unexpected_error_is_masked(self, test_app):
        async def broken_get(tx_id):
            raise RuntimeError("database on fire")

        test_app.state.store.get = broken_get
        transport = ASGITransport(app=test_app, raise_app_exceptions=False)

        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.get("/tx/data/abc12345")

        assert response.status_code == 500
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Internal server error"
        assert "fire" not in response.text

    @pytest.mark.asyncio
    async def test_http_errors_use_envelope(self, client):
        response = await client.get("/tokens/0x" + "11" * 20)

        assert response.status_code == 404
        data = response.json()
        assert data["success"] is False
        assert data["error"].startswith("Token not found")
        assert "detail" not in data

    @pytest.mark.asyncio
    async def test_unknown_route_uses_envelope(self, client):
        response = await client.get("/no/such/route")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Not Found", "code": None}

    @pytest.mark.asyncio
    async def test_wrong_method_uses_envelope(self, client):
        response = await client.get("/tx/create")

        assert response.status_code == 405
        assert response.json()["success"] is False



class TestDevEndpoints:
    """Tests for development-only helpers."""

    @pytest.mark.asyncio
    async def test_list_and_clear(self, client):
        first = await create_link(client)
        second = await create_link(client, action="borrow", token=WETH, amount="1")

        response = await client.get("/tx/dev/list")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert {record["id"] for record in data["transactions"]} == {first, second}

        response = await client.delete("/tx/dev/clear")
        assert response.status_code == 200
        assert response.json() == {"success": True, "cleared": 2}

        response = await client.get(f"/tx/data/{first}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_hidden_in_production(self, database, store):
        settings = Settings(
            environment="production",
            database_url="sqlite+aiosqlite:///:memory:",
        )
        app = create_app(settings, database)
        app.state.store = store

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            response = await ac.get("/tx/dev/list")
            assert response.status_code == 404
            assert response.json()["success"] is False
            assert (await ac.delete("/tx/dev/clear")).status_code == 404
