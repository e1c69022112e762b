"""Browser page that loads a link and submits it through the user's wallet."""

import json
from functools import lru_cache
from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from lendlink.api.dependencies import get_app_settings
from lendlink.config import Settings
from lendlink.protocol.aave_v3 import ERC20_ABI, PLACEHOLDER_INDEX

router = APIRouter(tags=["pages"])

TEMPLATE_PATH = Path(__file__).resolve().parent.parent / "templates" / "transaction.html"


@lru_cache
def load_template() -> str:
    return TEMPLATE_PATH.read_text(encoding="utf-8")


def script_json(value) -> str:
    """JSON safe to inline inside a <script> element."""
    return json.dumps(value).replace("<", "\\u003c").replace(">", "\\u003e")


def render_transaction_page(tx_id: str, settings: Settings) -> str:
    page_config = {
        "txId": tx_id,
        "chainId": settings.chain_id,
        "explorerUrl": settings.explorer_url.rstrip("/"),
        "erc20Abi": ERC20_ABI,
        "placeholderIndex": {action.value: index for action, index in PLACEHOLDER_INDEX.items()},
        "debug": settings.debug and not settings.is_production,
    }
    return load_template().replace("__PAGE_CONFIG__", script_json(page_config))


@router.get("/transaction/{tx_id}", response_class=HTMLResponse)
async def transaction_page(
    tx_id: str,
    settings: Settings = Depends(get_app_settings),
) -> HTMLResponse:
    """Render the wallet page; data is fetched client-side from /tx/data."""
    return HTMLResponse(render_transaction_page(tx_id, settings))
