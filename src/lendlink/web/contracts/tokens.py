"""Token catalog contracts."""

from pydantic import BaseModel, Field


class TokenInfo(BaseModel):
    """A reserve token the pool accepts."""

    symbol: str = Field(..., description="Token symbol (USDC, WETH, etc.)")
    address: str = Field(..., description="Checksummed contract address")
    decimals: int = Field(..., description="Token decimals")


class TokenListResponse(BaseModel):
    """Response containing the supported tokens."""

    success: bool = True
    chain_id: int = Field(..., description="Chain the catalog belongs to")
    pool: str = Field(..., description="Pool contract address")
    tokens: list[TokenInfo] = Field(default_factory=list)
    total: int = Field(default=0, description="Total number of tokens")
