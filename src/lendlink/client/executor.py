"""Client-side execution of a link: approve if needed, then call the pool.

States: idle -> approving (only for approval-gated actions) -> executing
-> success | error. Any failure lands in error with the reason kept in
``flow.error``; ``run()`` may then be called again. A retry reads the
allowance afresh, so an approval that already went through is not sent
twice.

The flow waits on each receipt with no timeout of its own.
"""

import logging
from enum import Enum
from typing import Callable, Optional, Protocol

from lendlink.errors import ExecutionError, FlowBusy, WrongNetwork
from lendlink.protocol.aave_v3 import PLACEHOLDER_ADDRESS
from lendlink.web.contracts.transactions import CallParam, TransactionPayload
from lendlink.web.services.transaction_builder import placeholder_index

logger = logging.getLogger(__name__)


class ExecutionStatus(str, Enum):
    """Where a flow is."""

    IDLE = "idle"
    APPROVING = "approving"
    EXECUTING = "executing"
    SUCCESS = "success"
    ERROR = "error"


class WalletProvider(Protocol):
    """What the executor needs from a wallet. Signing stays in the wallet."""

    address: str

    def chain_id(self) -> int: ...

    def allowance(self, token: str, spender: str) -> int: ...

    def approve(self, token: str, spender: str, amount: int) -> str: ...

    def send_transaction(
        self,
        contract_address: str,
        abi: list[dict],
        function_name: str,
        args: list[CallParam],
    ) -> str: ...

    def wait_for_transaction(self, tx_hash: str) -> None: ...


def substitute_caller(payload: TransactionPayload, address: str) -> list[CallParam]:
    """Call arguments with the placeholder replaced by the wallet address."""
    args = list(payload.params)
    index = placeholder_index(payload.action)
    if str(args[index]).lower() != PLACEHOLDER_ADDRESS:
        raise ExecutionError(
            f"Expected placeholder address at argument {index} of {payload.function_name}"
        )
    args[index] = address
    return args


class ExecutionFlow:
    """Two-step approve-then-act sequence for one payload."""

    def __init__(
        self,
        wallet: WalletProvider,
        payload: TransactionPayload,
        on_change: Optional[Callable[["ExecutionFlow"], None]] = None,
    ):
        self.wallet = wallet
        self.payload = payload
        self.on_change = on_change

        self.status = ExecutionStatus.IDLE
        self.error: Optional[str] = None
        self.tx_hash: Optional[str] = None
        self.approval_tx_hash: Optional[str] = None

    def _set_status(self, status: ExecutionStatus) -> None:
        self.status = status
        logger.debug(f"{self.payload.action.value} flow -> {status.value}")
        if self.on_change:
            self.on_change(self)

    def needs_approval(self) -> bool:
        """True when the pool's allowance is below the call amount."""
        allowance = self.wallet.allowance(
            self.payload.token_address, self.payload.contract_address
        )
        return allowance < self.payload.amount

    def run(self) -> str:
        """Execute the payload and return the main transaction hash.

        Raises:
            FlowBusy: a run is in progress or already succeeded
            WrongNetwork: wallet chain differs from the payload chain
            Exception: whatever the wallet raised; status is then error
        """
        if self.status in (ExecutionStatus.APPROVING, ExecutionStatus.EXECUTING):
            raise FlowBusy(f"Flow is {self.status.value}")
        if self.status == ExecutionStatus.SUCCESS:
            raise FlowBusy("Transaction already completed")

        self.error = None

        try:
            chain_id = self.wallet.chain_id()
            if chain_id != self.payload.chain_id:
                raise WrongNetwork(self.payload.chain_id, chain_id)

            if self.payload.requires_approval:
                self._set_status(ExecutionStatus.APPROVING)
                if self.needs_approval():
                    self.approval_tx_hash = self.wallet.approve(
                        self.payload.token_address,
                        self.payload.contract_address,
                        self.payload.amount,
                    )
                    self.wallet.wait_for_transaction(self.approval_tx_hash)

            self._set_status(ExecutionStatus.EXECUTING)
            self.tx_hash = self.wallet.send_transaction(
                self.payload.contract_address,
                self.payload.contract_abi,
                self.payload.function_name,
                substitute_caller(self.payload, self.wallet.address),
            )
            self.wallet.wait_for_transaction(self.tx_hash)

        except Exception as e:
            self.error = str(e) or type(e).__name__
            logger.error(f"{self.payload.action.value} flow failed: {self.error}")
            self._set_status(ExecutionStatus.ERROR)
            raise

        self._set_status(ExecutionStatus.SUCCESS)
        return self.tx_hash


__all__ = [
    "ExecutionFlow",
    "ExecutionStatus",
    "WalletProvider",
    "substitute_caller",
]
