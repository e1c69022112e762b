"""Persistence for transaction links."""

from lendlink.ledger.database import Database
from lendlink.ledger.store import TransactionStore

__all__ = ["Database", "TransactionStore"]
