"""Token catalog API endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from lendlink.api.dependencies import get_catalog
from lendlink.web.contracts.tokens import TokenInfo, TokenListResponse
from lendlink.web.services.token_catalog import TokenCatalogService

router = APIRouter(prefix="/tokens", tags=["tokens"])


@router.get("", response_model=TokenListResponse)
async def get_tokens(
    catalog: TokenCatalogService = Depends(get_catalog),
) -> TokenListResponse:
    """Get the reserve tokens links can be created for."""
    return catalog.get_supported_tokens()


@router.get("/{address}", response_model=TokenInfo)
async def get_token(
    address: str,
    catalog: TokenCatalogService = Depends(get_catalog),
) -> TokenInfo:
    """Get a single catalog token by contract address."""
    token = catalog.get_token(address)
    if not token:
        raise HTTPException(status_code=404, detail=f"Token not found: {address}")
    return token
