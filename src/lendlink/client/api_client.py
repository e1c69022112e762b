"""httpx client for a LendLink server."""

import logging
from typing import Optional

import httpx

from lendlink.errors import ApiError
from lendlink.web.contracts.transactions import CreateTransactionResponse, TransactionPayload

logger = logging.getLogger(__name__)


class LinkClient:
    """Async client for /tx/create, /tx/data and /tx/confirm.

    Example:
        async with LinkClient("http://localhost:8000") as client:
            created = await client.create("supply", usdc, "100")
            payload = await client.fetch(created.id)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "LinkClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    @staticmethod
    def _raise_for_error(response: httpx.Response) -> None:
        if response.is_success:
            return
        try:
            body = response.json()
        except ValueError:
            body = {}
        message = body.get("error") or body.get("detail") or response.reason_phrase
        raise ApiError(response.status_code, str(message), body.get("code"))

    async def create(self, action: str, token_address: str, amount: str) -> CreateTransactionResponse:
        """Create a link; returns id and shareable URL."""
        response = await self._client.post(
            "/tx/create",
            json={"payload": {"action": action, "tokenAddress": token_address, "amount": amount}},
        )
        self._raise_for_error(response)
        return CreateTransactionResponse.model_validate(response.json())

    async def fetch(self, tx_id: str) -> TransactionPayload:
        """Get the payload behind a link."""
        response = await self._client.get(f"/tx/data/{tx_id}")
        self._raise_for_error(response)
        return TransactionPayload.model_validate(response.json()["data"])

    async def confirm(
        self,
        tx_id: str,
        tx_hash: str,
        approval_tx_hash: Optional[str] = None,
    ) -> bool:
        """Record submitted hashes on the server."""
        body = {"txHash": tx_hash}
        if approval_tx_hash:
            body["approvalTxHash"] = approval_tx_hash
        response = await self._client.post(f"/tx/confirm/{tx_id}", json=body)
        self._raise_for_error(response)
        logger.info(f"Confirmed link {tx_id}: {tx_hash}")
        return response.json().get("success", False)
