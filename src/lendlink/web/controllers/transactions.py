"""Transaction link endpoints.

These endpoints build, serve and confirm unsigned pool calls.
NO signing or broadcasting happens server-side.
"""

import logging
import re
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from lendlink.api.dependencies import get_app_settings, get_builder, get_store
from lendlink.config import Settings
from lendlink.errors import InvalidRequest, MissingTransactionHash, TransactionNotFound
from lendlink.ledger.store import TransactionStore
from lendlink.web.contracts.transactions import (
    ConfirmTransactionResponse,
    CreateTransactionResponse,
    TransactionDataResponse,
    TransactionListResponse,
)
from lendlink.web.services.transaction_builder import TransactionBuilder
from lendlink.web.services.validation import validate_request

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tx", tags=["transactions"])

TX_HASH_PATTERN = re.compile(r"^0x[0-9a-fA-F]{64}$")


async def read_json(request: Request) -> Any:
    """Decode the body, mapping bad JSON to a 400."""
    try:
        return await request.json()
    except ValueError:
        raise InvalidRequest("Request body must be valid JSON")


def link_origin(request: Request, settings: Settings) -> str:
    if settings.public_base_url:
        return settings.public_base_url.rstrip("/")
    return str(request.base_url).rstrip("/")


@router.post("/create", response_model=CreateTransactionResponse)
async def create_transaction(
    request: Request,
    store: TransactionStore = Depends(get_store),
    builder: TransactionBuilder = Depends(get_builder),
    settings: Settings = Depends(get_app_settings),
) -> CreateTransactionResponse:
    """Build a pool call and store it behind a shareable link.

    Body: ``{"payload": {"action", "tokenAddress", "amount"}}``
    """
    raw = await read_json(request)
    logger.debug(f"Received create body: {raw}")

    tx_request = validate_request(raw)
    payload = builder.build(tx_request)
    tx_id = await store.put(payload)

    url = f"{link_origin(request, settings)}/transaction/{tx_id}"
    return CreateTransactionResponse(
        message=(
            f"Transaction created, ask the user to approve it in "
            f"{settings.ttl_minutes} minutes at {url}"
        ),
        id=tx_id,
        url=url,
    )


@router.get("/data/{tx_id}", response_model=TransactionDataResponse)
async def get_transaction_data(
    tx_id: str,
    store: TransactionStore = Depends(get_store),
) -> TransactionDataResponse:
    """Get the payload behind a link (404 once expired)."""
    record = await store.get(tx_id)
    if record is None:
        raise TransactionNotFound(tx_id)
    return TransactionDataResponse(data=record.payload)


@router.post("/confirm/{tx_id}", response_model=ConfirmTransactionResponse)
async def confirm_transaction(
    tx_id: str,
    request: Request,
    store: TransactionStore = Depends(get_store),
) -> ConfirmTransactionResponse:
    """Record the hashes of a submitted transaction.

    Body: ``{"txHash": "0x...", "approvalTxHash": "0x..." (optional)}``
    """
    raw = await read_json(request)
    if not isinstance(raw, dict):
        raise InvalidRequest("Request body must be a JSON object")

    tx_hash = raw.get("txHash")
    if not tx_hash:
        raise MissingTransactionHash("Transaction hash (txHash) is required")
    if not isinstance(tx_hash, str) or not TX_HASH_PATTERN.match(tx_hash):
        raise MissingTransactionHash("Invalid transaction hash format")

    approval_tx_hash: Optional[str] = raw.get("approvalTxHash") or None
    if approval_tx_hash is not None and (
        not isinstance(approval_tx_hash, str) or not TX_HASH_PATTERN.match(approval_tx_hash)
    ):
        raise InvalidRequest("Invalid approval transaction hash format")

    if not await store.mark_confirmed(tx_id, tx_hash, approval_tx_hash):
        raise TransactionNotFound(tx_id)

    return ConfirmTransactionResponse()


# ======================
# Development helpers
# ======================


def require_development(settings: Settings = Depends(get_app_settings)) -> Settings:
    """Hide dev endpoints in production."""
    if settings.is_production:
        raise HTTPException(status_code=404, detail="Not Found")
    return settings


@router.get(
    "/dev/list",
    response_model=TransactionListResponse,
    dependencies=[Depends(require_development)],
)
async def list_transactions(
    store: TransactionStore = Depends(get_store),
) -> TransactionListResponse:
    """List unexpired links (development only)."""
    records = await store.list_active()
    return TransactionListResponse(transactions=records, total=len(records))


@router.delete("/dev/clear", dependencies=[Depends(require_development)])
async def clear_transactions(store: TransactionStore = Depends(get_store)) -> dict:
    """Delete every unexpired link (development only)."""
    cleared = await store.clear_active()
    logger.warning(f"Cleared {cleared} active links")
    return {"success": True, "cleared": cleared}
