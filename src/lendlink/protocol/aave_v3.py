"""Aave V3 deployment on Sepolia: pool contract, ABIs and token catalog.

Only public contract metadata lives here. Nothing in this module touches
keys or the network.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class LendingAction(str, Enum):
    """Pool operations a link can carry."""

    SUPPLY = "supply"
    WITHDRAW = "withdraw"
    BORROW = "borrow"
    REPAY = "repay"


@dataclass(frozen=True)
class TokenConfig:
    """A reserve token listed on the pool."""

    symbol: str
    address: str
    decimals: int


@dataclass(frozen=True)
class ActionConfig:
    """Per-action call metadata."""

    function_name: str
    description_template: str  # formatted with amount and symbol
    requires_approval: bool

    def describe(self, symbol: str, amount: str) -> str:
        return self.description_template.format(amount=amount, symbol=symbol)


# ======================
# Network / Pool
# ======================

SEPOLIA_CHAIN_ID = 11155111

POOL_ADDRESS = "0x6Ae43d3271ff6888e7Fc43Fd7321a503ff738951"
POOL_DATA_PROVIDER_ADDRESS = "0x3e9708d80f7B3e43118013075F7e95CE3AB31F31"

# Slot filled with the connected wallet address right before submission.
PLACEHOLDER_ADDRESS = "0x0000000000000000000000000000000000000000"

# Pool reads this as "entire balance / entire debt".
MAX_UINT256 = 2**256 - 1

VARIABLE_RATE_MODE = 2
REFERRAL_CODE = 0


# ======================
# Token Catalog
# ======================

TOKENS: dict[str, TokenConfig] = {
    "USDC": TokenConfig("USDC", "0x94a9D9AC8a22534E3FaCa9F4e7F2E2cf85d5E4C8", 6),
    "LINK": TokenConfig("LINK", "0xf8Fb3713D459D7C1018BD0A49D19b4C44290EBE5", 18),
    "USDT": TokenConfig("USDT", "0xaA8E23Fb1079EA71e0a56F48a2aA51851D8433D0", 6),
    "DAI": TokenConfig("DAI", "0xFF34B3d4Aee8ddCd6F9AFFFB6Fe49bD371b8a357", 18),
    "WETH": TokenConfig("WETH", "0xC558DBdd856501FCd9aaF1E62eae57A9F0629a3c", 18),
    "WBTC": TokenConfig("WBTC", "0x29f2D40B0605204364af54EC677bD022dA425d03", 8),
    "AAVE": TokenConfig("AAVE", "0x88541670E55cC00bEEFD87eB59EDd1b7C511AC9a", 18),
    "EURS": TokenConfig("EURS", "0x6d906e526a4e2Ca02097BA9d0caA3c382F52278E", 2),
    "GHO": TokenConfig("GHO", "0xc4bF5CbDaBE595361438F8c6a187bDc330539c60", 18),
}

_TOKENS_BY_ADDRESS: dict[str, TokenConfig] = {
    token.address.lower(): token for token in TOKENS.values()
}


def find_token(address: str) -> Optional[TokenConfig]:
    """Look up a catalog token by address, ignoring case."""
    if not address:
        return None
    return _TOKENS_BY_ADDRESS.get(address.lower())


# ======================
# Actions
# ======================

ACTIONS: dict[LendingAction, ActionConfig] = {
    LendingAction.SUPPLY: ActionConfig(
        function_name="supply",
        description_template="Supply {amount} {symbol} to Aave V3",
        requires_approval=True,
    ),
    LendingAction.WITHDRAW: ActionConfig(
        function_name="withdraw",
        description_template="Withdraw {amount} {symbol} from Aave V3",
        requires_approval=False,
    ),
    LendingAction.BORROW: ActionConfig(
        function_name="borrow",
        description_template="Borrow {amount} {symbol} from Aave V3",
        requires_approval=False,
    ),
    LendingAction.REPAY: ActionConfig(
        function_name="repay",
        description_template="Repay {amount} {symbol} to Aave V3",
        requires_approval=True,
    ),
}

# Actions whose amount may be the "max" sentinel.
MAX_AMOUNT_ACTIONS = frozenset({LendingAction.WITHDRAW, LendingAction.REPAY})

# Position of the on-behalf-of / to argument in each call.
PLACEHOLDER_INDEX: dict[LendingAction, int] = {
    LendingAction.SUPPLY: 2,
    LendingAction.WITHDRAW: 2,
    LendingAction.BORROW: 4,
    LendingAction.REPAY: 3,
}


# ======================
# ABIs
# ======================

POOL_ABI: list[dict] = [
    {
        "inputs": [
            {"internalType": "address", "name": "asset", "type": "address"},
            {"internalType": "uint256", "name": "amount", "type": "uint256"},
            {"internalType": "address", "name": "onBehalfOf", "type": "address"},
            {"internalType": "uint16", "name": "referralCode", "type": "uint16"},
        ],
        "name": "supply",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            {"internalType": "address", "name": "asset", "type": "address"},
            {"internalType": "uint256", "name": "amount", "type": "uint256"},
            {"internalType": "address", "name": "to", "type": "address"},
        ],
        "name": "withdraw",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            {"internalType": "address", "name": "asset", "type": "address"},
            {"internalType": "uint256", "name": "amount", "type": "uint256"},
            {"internalType": "uint256", "name": "interestRateMode", "type": "uint256"},
            {"internalType": "uint16", "name": "referralCode", "type": "uint16"},
            {"internalType": "address", "name": "onBehalfOf", "type": "address"},
        ],
        "name": "borrow",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            {"internalType": "address", "name": "asset", "type": "address"},
            {"internalType": "uint256", "name": "amount", "type": "uint256"},
            {"internalType": "uint256", "name": "interestRateMode", "type": "uint256"},
            {"internalType": "address", "name": "onBehalfOf", "type": "address"},
        ],
        "name": "repay",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]

ERC20_ABI: list[dict] = [
    {
        "inputs": [
            {"internalType": "address", "name": "spender", "type": "address"},
            {"internalType": "uint256", "name": "amount", "type": "uint256"},
        ],
        "name": "approve",
        "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            {"internalType": "address", "name": "owner", "type": "address"},
            {"internalType": "address", "name": "spender", "type": "address"},
        ],
        "name": "allowance",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "address", "name": "account", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
]
