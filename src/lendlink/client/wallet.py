"""web3.py wallet provider backed by a node-managed account.

Transactions are sent with ``eth_sendTransaction`` so the node (Anvil,
Hardhat, Frame, ...) signs them. No private key passes through here.
"""

import logging
from typing import Optional

from web3 import Web3

from lendlink.errors import ExecutionError
from lendlink.protocol.aave_v3 import ERC20_ABI
from lendlink.web.contracts.transactions import CallParam

logger = logging.getLogger(__name__)


def coerce_args(abi: list[dict], function_name: str, args: list[CallParam]) -> list:
    """Convert JSON call arguments to the Python types web3 encodes.

    Amounts travel as decimal strings; web3 wants int for (u)intN.
    """
    entry = next(
        (item for item in abi if item.get("type") == "function" and item.get("name") == function_name),
        None,
    )
    if entry is None:
        raise ExecutionError(f"Function {function_name} not found in ABI")

    inputs = entry.get("inputs", [])
    if len(inputs) != len(args):
        raise ExecutionError(
            f"{function_name} takes {len(inputs)} arguments, payload has {len(args)}"
        )

    coerced = []
    for param, value in zip(inputs, args):
        abi_type = param["type"]
        if abi_type.startswith(("uint", "int")):
            coerced.append(int(value))
        elif abi_type == "address":
            coerced.append(Web3.to_checksum_address(str(value)))
        else:
            coerced.append(value)
    return coerced


class Web3WalletProvider:
    """WalletProvider over a web3 connection."""

    def __init__(self, w3: Web3, address: str):
        self.w3 = w3
        self.address = Web3.to_checksum_address(address)

    @classmethod
    def from_rpc(cls, rpc_url: str, address: Optional[str] = None) -> "Web3WalletProvider":
        """Connect over HTTP; defaults to the node's first account."""
        w3 = Web3(Web3.HTTPProvider(rpc_url))
        if address is None:
            accounts = w3.eth.accounts
            if not accounts:
                raise ExecutionError(f"Node at {rpc_url} manages no accounts")
            address = accounts[0]
        return cls(w3, address)

    def chain_id(self) -> int:
        return self.w3.eth.chain_id

    def _token(self, token: str):
        return self.w3.eth.contract(address=Web3.to_checksum_address(token), abi=ERC20_ABI)

    def allowance(self, token: str, spender: str) -> int:
        return self._token(token).functions.allowance(
            self.address, Web3.to_checksum_address(spender)
        ).call()

    def approve(self, token: str, spender: str, amount: int) -> str:
        tx_hash = self._token(token).functions.approve(
            Web3.to_checksum_address(spender), amount
        ).transact({"from": self.address})
        logger.info(f"Approval sent: {Web3.to_hex(tx_hash)}")
        return Web3.to_hex(tx_hash)

    def send_transaction(
        self,
        contract_address: str,
        abi: list[dict],
        function_name: str,
        args: list[CallParam],
    ) -> str:
        contract = self.w3.eth.contract(address=Web3.to_checksum_address(contract_address), abi=abi)
        function = getattr(contract.functions, function_name)
        tx_hash = function(*coerce_args(abi, function_name, args)).transact({"from": self.address})
        logger.info(f"{function_name} sent: {Web3.to_hex(tx_hash)}")
        return Web3.to_hex(tx_hash)

    def wait_for_transaction(self, tx_hash: str) -> None:
        receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash)
        if receipt["status"] != 1:
            raise ExecutionError(f"Transaction {tx_hash} reverted")
