"""Transaction contracts for link creation and lookup.

Wire format is camelCase to match the browser page; Python attributes
stay snake_case. No signing data ever appears here: the on-behalf-of slot
holds a placeholder that the client replaces with the wallet address.
"""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from lendlink.protocol.aave_v3 import LendingAction

CallParam = Union[str, int]


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TransactionRequest(CamelModel):
    """A validated request to build a pool call."""

    model_config = ConfigDict(frozen=True)

    action: LendingAction = Field(..., description="supply, withdraw, borrow or repay")
    token_address: str = Field(..., description="Checksummed reserve token address")
    amount: str = Field(..., description="Human decimal amount or 'max'")

    @property
    def is_max(self) -> bool:
        return self.amount == "max"


class TransactionPayload(CamelModel):
    """An unsigned pool call ready for client-side submission.

    Write-once: the store keeps it verbatim and the client reads it back.
    """

    model_config = ConfigDict(frozen=True)

    contract_address: str = Field(..., description="Pool contract address")
    function_name: str = Field(..., description="Pool function to call")
    params: list[CallParam] = Field(..., description="Ordered call arguments")
    contract_abi: list[dict] = Field(..., alias="contractABI", description="Pool ABI")
    value: str = Field(default="0", description="Native value in wei")
    created_at: int = Field(..., description="Build time, epoch milliseconds")
    description: str = Field(..., description="Human-readable summary")
    action: LendingAction = Field(..., description="Pool operation")
    requires_approval: bool = Field(..., description="Whether an ERC-20 approval may be needed")
    chain_id: int = Field(..., description="EVM chain ID the call targets")

    @property
    def token_address(self) -> str:
        return str(self.params[0])

    @property
    def amount(self) -> int:
        """Base-unit amount (the max sentinel included)."""
        return int(self.params[1])


class TransactionRecord(CamelModel):
    """A stored link: payload plus confirmation state."""

    id: str
    payload: TransactionPayload
    created_at: datetime
    expires_at: datetime
    success: bool = False
    tx_hash: Optional[str] = None
    approval_tx_hash: Optional[str] = None
    confirmed_at: Optional[datetime] = None


class CreateTransactionResponse(CamelModel):
    """Response for POST /tx/create."""

    success: bool = True
    message: str
    id: str
    url: str


class TransactionDataResponse(CamelModel):
    """Response for GET /tx/data/{id}."""

    success: bool = True
    data: TransactionPayload


class ConfirmTransactionResponse(CamelModel):
    """Response for POST /tx/confirm/{id}."""

    success: bool = True
    message: str = "Transaction marked as successful"


class ErrorResponse(BaseModel):
    """Error envelope shared by every endpoint."""

    success: bool = False
    error: str
    code: Optional[str] = None


class TransactionListResponse(CamelModel):
    """Development listing of active links."""

    success: bool = True
    transactions: list[TransactionRecord] = Field(default_factory=list)
    total: int = 0
