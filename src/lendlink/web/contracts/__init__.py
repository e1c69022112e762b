"""Request and response contracts for the web layer.

These Pydantic models define the API interface for web clients.
"""

from lendlink.web.contracts.tokens import (
    TokenInfo,
    TokenListResponse,
)
from lendlink.web.contracts.transactions import (
    ConfirmTransactionResponse,
    CreateTransactionResponse,
    ErrorResponse,
    TransactionDataResponse,
    TransactionListResponse,
    TransactionPayload,
    TransactionRecord,
    TransactionRequest,
)

__all__ = [
    # Token contracts
    "TokenInfo",
    "TokenListResponse",
    # Transaction contracts
    "ConfirmTransactionResponse",
    "CreateTransactionResponse",
    "ErrorResponse",
    "TransactionDataResponse",
    "TransactionListResponse",
    "TransactionPayload",
    "TransactionRecord",
    "TransactionRequest",
]
