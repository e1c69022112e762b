"""Python counterpart of the browser page: fetch a link and submit it.

The web3 provider is imported from ``lendlink.client.wallet`` on demand.
"""

from lendlink.client.api_client import LinkClient
from lendlink.client.executor import ExecutionFlow, ExecutionStatus, WalletProvider, substitute_caller

__all__ = [
    "ExecutionFlow",
    "ExecutionStatus",
    "LinkClient",
    "WalletProvider",
    "substitute_caller",
]
