"""Transaction builder for preparing unsigned pool calls.

This service builds call parameters for client-side submission.
NO signing or broadcasting happens here - this is non-custodial.

The on-behalf-of / to argument is always PLACEHOLDER_ADDRESS: the server
never learns the wallet address, so the executor writes it into the slot
given by ``placeholder_index`` right before sending.
"""

import logging
import time
from decimal import Decimal, InvalidOperation, localcontext
from typing import Callable

from eth_utils import to_checksum_address

from lendlink.errors import InvalidAmount, UnsupportedAction, UnsupportedToken
from lendlink.protocol.aave_v3 import (
    ACTIONS,
    MAX_UINT256,
    PLACEHOLDER_ADDRESS,
    PLACEHOLDER_INDEX,
    POOL_ABI,
    POOL_ADDRESS,
    REFERRAL_CODE,
    SEPOLIA_CHAIN_ID,
    VARIABLE_RATE_MODE,
    LendingAction,
    TokenConfig,
    find_token,
)
from lendlink.web.contracts.transactions import (
    CallParam,
    TransactionPayload,
    TransactionRequest,
)

logger = logging.getLogger(__name__)


def to_base_units(amount: str, decimals: int) -> int:
    """Scale a human decimal amount to integer base units.

    Digits beyond the token's precision are an error, never rounded.

    Args:
        amount: Decimal string, e.g. "100" or "0.25"
        decimals: Token decimals

    Returns:
        amount * 10**decimals as int

    Raises:
        InvalidAmount: malformed, too precise, or larger than uint256
    """
    try:
        value = Decimal(amount)
    except InvalidOperation:
        raise InvalidAmount(f"Invalid amount format: {amount}")

    if not value.is_finite() or value <= 0:
        raise InvalidAmount("Amount must be positive")

    # uint256 needs up to 78 digits; leave room so scaleb never rounds
    with localcontext() as ctx:
        ctx.prec = max(160, len(value.as_tuple().digits) + decimals)
        scaled = value.scaleb(decimals)

    if scaled != scaled.to_integral_value():
        raise InvalidAmount(f"Amount {amount} has more than {decimals} decimal places")

    units = int(scaled)
    if units > MAX_UINT256:
        raise InvalidAmount("Amount exceeds maximum limit")
    return units


def placeholder_index(action: LendingAction) -> int:
    """Position of the on-behalf-of / to argument for an action."""
    return PLACEHOLDER_INDEX[LendingAction(action)]


def resolve_action(action: str) -> LendingAction:
    try:
        return LendingAction(action)
    except ValueError:
        raise UnsupportedAction(f"Unsupported transaction type: {action}")


class TransactionBuilder:
    """Builds unsigned pool calls for client-side submission.

    This service NEVER:
    - Accesses private keys
    - Signs transactions
    - Broadcasts transactions
    """

    def __init__(
        self,
        chain_id: int = SEPOLIA_CHAIN_ID,
        clock: Callable[[], float] = time.time,
    ):
        self.chain_id = chain_id
        self._clock = clock

    def build_params(
        self,
        action: LendingAction,
        token: TokenConfig,
        amount: str,
    ) -> list[CallParam]:
        """Ordered call arguments for one pool function.

        Args:
            action: Pool operation
            token: Catalog token
            amount: Human decimal string, or "max" for withdraw/repay

        Returns:
            Arguments in the pool function's signature order
        """
        action = resolve_action(action)
        asset = to_checksum_address(token.address)

        if action == LendingAction.SUPPLY:
            return [
                asset,
                str(to_base_units(amount, token.decimals)),
                PLACEHOLDER_ADDRESS,  # onBehalfOf
                REFERRAL_CODE,
            ]

        elif action == LendingAction.WITHDRAW:
            return [
                asset,
                self._amount_or_max(amount, token),
                PLACEHOLDER_ADDRESS,  # to
            ]

        elif action == LendingAction.BORROW:
            return [
                asset,
                str(to_base_units(amount, token.decimals)),
                VARIABLE_RATE_MODE,
                REFERRAL_CODE,
                PLACEHOLDER_ADDRESS,  # onBehalfOf
            ]

        elif action == LendingAction.REPAY:
            return [
                asset,
                self._amount_or_max(amount, token),
                VARIABLE_RATE_MODE,
                PLACEHOLDER_ADDRESS,  # onBehalfOf
            ]

        raise UnsupportedAction(f"Unsupported transaction type: {action}")

    def build(self, request: TransactionRequest) -> TransactionPayload:
        """Build the payload for a validated request.

        Raises:
            UnsupportedAction: action outside supply/withdraw/borrow/repay
            UnsupportedToken: token not in the catalog
            InvalidAmount: amount cannot be scaled
        """
        action = resolve_action(request.action)

        token = find_token(request.token_address)
        if token is None:
            raise UnsupportedToken(f"Unsupported token: {request.token_address}")

        params = self.build_params(action, token, request.amount)
        config = ACTIONS[action]

        payload = TransactionPayload(
            contract_address=POOL_ADDRESS,
            function_name=config.function_name,
            params=params,
            contract_abi=POOL_ABI,
            value="0",
            created_at=int(self._clock() * 1000),
            description=config.describe(token.symbol, request.amount),
            action=action,
            requires_approval=config.requires_approval,
            chain_id=self.chain_id,
        )

        logger.debug(f"Built {action.value} call for {request.amount} {token.symbol}")
        return payload

    @staticmethod
    def _amount_or_max(amount: str, token: TokenConfig) -> str:
        if amount == "max":
            return str(MAX_UINT256)
        return str(to_base_units(amount, token.decimals))
