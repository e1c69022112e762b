"""Token catalog service.

Provides read-only access to the reserve tokens the pool accepts.
"""

import logging
from typing import Optional

from eth_utils import to_checksum_address

from lendlink.protocol.aave_v3 import POOL_ADDRESS, SEPOLIA_CHAIN_ID, TOKENS, find_token
from lendlink.web.contracts.tokens import TokenInfo, TokenListResponse

logger = logging.getLogger(__name__)


class TokenCatalogService:
    """Service for reserve token metadata."""

    def __init__(self, chain_id: int = SEPOLIA_CHAIN_ID):
        self.chain_id = chain_id

    def get_supported_tokens(self) -> TokenListResponse:
        """Get all tokens in the catalog, ordered by symbol."""
        tokens = [
            TokenInfo(
                symbol=token.symbol,
                address=to_checksum_address(token.address),
                decimals=token.decimals,
            )
            for token in sorted(TOKENS.values(), key=lambda t: t.symbol)
        ]
        return TokenListResponse(
            chain_id=self.chain_id,
            pool=to_checksum_address(POOL_ADDRESS),
            tokens=tokens,
            total=len(tokens),
        )

    def get_token(self, address: str) -> Optional[TokenInfo]:
        """Get a catalog token by address (any case)."""
        token = find_token(address)
        if token is None:
            return None
        return TokenInfo(
            symbol=token.symbol,
            address=to_checksum_address(token.address),
            decimals=token.decimals,
        )
