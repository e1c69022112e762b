#!/usr/bin/env python3
"""Execute a transaction link from the command line.

Fetches the payload from a LendLink server, submits it through a node that
manages the sending account (Anvil, Hardhat, Frame ...), then records the
hashes on the server.

Usage:
    python scripts/execute_link.py ID [--base-url URL] [--rpc-url URL] [--account ADDRESS]

Options:
    --base-url  LendLink server (default: http://localhost:8000)
    --rpc-url   Node RPC (default: SEPOLIA_RPC_URL)
    --account   Sending account (default: the node's first account)
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv

from lendlink.client.api_client import LinkClient
from lendlink.client.executor import ExecutionFlow
from lendlink.client.wallet import Web3WalletProvider
from lendlink.config import get_settings

load_dotenv()

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


def report(flow: ExecutionFlow) -> None:
    logger.info(f"Status: {flow.status.value}")


async def execute(tx_id: str, base_url: str, rpc_url: str, account: str = None) -> str:
    wallet = Web3WalletProvider.from_rpc(rpc_url, account)
    logger.info(f"Using account {wallet.address}")

    async with LinkClient(base_url) as client:
        payload = await client.fetch(tx_id)
        logger.info(payload.description)

        flow = ExecutionFlow(wallet, payload, on_change=report)
        tx_hash = await asyncio.to_thread(flow.run)

        await client.confirm(tx_id, tx_hash, flow.approval_tx_hash)
        return tx_hash


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Submit a transaction link")
    parser.add_argument("id", help="Link id")
    parser.add_argument("--base-url", default="http://localhost:8000")
    parser.add_argument("--rpc-url", default=settings.sepolia_rpc_url)
    parser.add_argument("--account", default=None)
    args = parser.parse_args()

    tx_hash = asyncio.run(execute(args.id, args.base_url, args.rpc_url, args.account))
    print(f"{settings.explorer_url.rstrip('/')}/tx/{tx_hash}")


if __name__ == "__main__":
    main()
