#!/usr/bin/env python3
"""Expired Link Cleanup Script.

Links stop being readable 15 minutes after creation but their rows stay
for audit. Run this periodically to delete them.

Usage:
    python scripts/purge_expired.py [--dry-run]

Options:
    --dry-run  Count expired links without deleting anything
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv

from lendlink.config import get_settings
from lendlink.ledger.database import Database
from lendlink.ledger.store import TransactionStore

load_dotenv()

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


async def purge(dry_run: bool) -> int:
    settings = get_settings()
    database = Database(settings.database_url)
    store = TransactionStore(database, ttl_seconds=settings.tx_ttl_seconds)

    try:
        await database.create_all()
        if dry_run:
            expired = await store.count_expired()
            logger.info(f"Dry run: {expired} expired links would be removed")
            return 0
        removed = await store.purge_expired()
        logger.info(f"Removed {removed} expired links")
        return removed
    finally:
        await database.dispose()


def main():
    parser = argparse.ArgumentParser(description="Delete expired transaction links")
    parser.add_argument("--dry-run", action="store_true", help="Do not delete anything")
    args = parser.parse_args()

    asyncio.run(purge(args.dry_run))


if __name__ == "__main__":
    main()
