"""Validation of raw link-creation requests.

Turns a decoded JSON body into a TransactionRequest or raises one of the
typed validation errors. Pure function, no I/O.
"""

from decimal import Decimal, InvalidOperation, localcontext
from typing import Any

from eth_utils import is_address, is_checksum_address, remove_0x_prefix, to_checksum_address

from lendlink.errors import InvalidAction, InvalidAmount, InvalidRequest, UnsupportedToken
from lendlink.protocol.aave_v3 import (
    MAX_AMOUNT_ACTIONS,
    TOKENS,
    LendingAction,
    find_token,
)
from lendlink.web.contracts.transactions import TransactionRequest

MAX_SENTINEL = "max"

# Wide enough for any uint256 amount at 18 decimals
AMOUNT_PRECISION = 160

SUPPORTED_ACTIONS = ", ".join(action.value for action in LendingAction)


def validate_request(raw: Any) -> TransactionRequest:
    """Validate a create request.

    Accepts either the full body ``{"payload": {...}}`` or the inner
    payload. ``transactionType`` is read when ``action`` is absent.

    Raises:
        InvalidRequest: body is not a JSON object
        InvalidAction: unknown action
        UnsupportedToken: bad address or token not in the catalog
        InvalidAmount: missing, malformed or non-positive amount
    """
    if not isinstance(raw, dict):
        raise InvalidRequest("Request body must be a JSON object")

    body = raw.get("payload", raw)
    if not isinstance(body, dict):
        raise InvalidRequest("'payload' must be a JSON object")

    action = parse_action(body.get("action", body.get("transactionType")))
    token_address = parse_token_address(body.get("tokenAddress"))
    amount = parse_amount(body.get("amount"), action)

    return TransactionRequest(action=action, token_address=token_address, amount=amount)


def parse_action(value: Any) -> LendingAction:
    """Normalize an action name."""
    if isinstance(value, str):
        try:
            return LendingAction(value.strip().lower())
        except ValueError:
            pass
    raise InvalidAction(f"Invalid transaction type. Supported: {SUPPORTED_ACTIONS}")


def parse_token_address(value: Any) -> str:
    """Check the address format and catalog membership; return checksum form."""
    if not isinstance(value, str) or not is_address(value):
        raise UnsupportedToken("Invalid token address")

    # Mixed case means EIP-55; single-case input carries no checksum
    hex_body = remove_0x_prefix(value)
    if hex_body != hex_body.lower() and hex_body != hex_body.upper():
        if not is_checksum_address(value):
            raise UnsupportedToken("Invalid token address checksum")

    token = find_token(value)
    if token is None:
        supported = ", ".join(sorted(TOKENS))
        raise UnsupportedToken(f"Unsupported token. Supported: {supported}")

    return to_checksum_address(token.address)


def parse_amount(value: Any, action: LendingAction) -> str:
    """Validate the amount and return its canonical string form."""
    if isinstance(value, str) and value.strip().lower() == MAX_SENTINEL:
        if action not in MAX_AMOUNT_ACTIONS:
            raise InvalidAmount("'max' is only supported for withdraw and repay")
        return MAX_SENTINEL

    # bool is an int subclass; true/false are not amounts
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise InvalidAmount("Invalid amount")

    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidAmount(f"Invalid amount format: {value}")

    if not amount.is_finite() or amount <= 0:
        raise InvalidAmount("Amount must be positive")

    # 2**256 has 78 digits; nothing that long fits the pool's uint256
    if amount.adjusted() >= 78:
        raise InvalidAmount("Amount exceeds maximum limit")

    return format_amount(amount)


def format_amount(amount: Decimal) -> str:
    """Plain decimal notation without trailing zeros ("1e2" -> "100")."""
    with localcontext() as ctx:
        ctx.prec = max(AMOUNT_PRECISION, len(amount.as_tuple().digits))
        return format(amount.normalize(), "f")
