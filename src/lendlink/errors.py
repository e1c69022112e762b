"""Typed errors for link creation, lookup and client-side execution.

Server errors carry the HTTP status they map to; the API layer turns them
into ``{"success": false, "error": ..., "code": ...}`` responses.
"""

from typing import Optional


class LendLinkError(Exception):
    """Base class for all LendLink errors."""

    status_code: int = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    @property
    def code(self) -> str:
        return type(self).__name__


# ======================
# Validation (400)
# ======================


class InvalidRequest(LendLinkError):
    """Body is not the expected JSON shape."""


class InvalidAction(LendLinkError):
    """Action is not one of supply, withdraw, borrow, repay."""


class UnsupportedToken(LendLinkError):
    """Token address is malformed or not in the catalog."""


class InvalidAmount(LendLinkError):
    """Amount is missing, malformed, non-positive or too precise."""


class UnsupportedAction(LendLinkError):
    """Builder has no variant for the requested action."""


class MissingTransactionHash(LendLinkError):
    """Confirmation arrived without a usable txHash."""


# ======================
# Lookup (404)
# ======================


class TransactionNotFound(LendLinkError):
    """Link id is unknown or has expired."""

    status_code = 404

    def __init__(self, tx_id: str):
        self.tx_id = tx_id
        super().__init__("Transaction not found or expired")


# ======================
# Client-side execution
# ======================


class ExecutionError(LendLinkError):
    """Raised by the client executor; never returned by the API."""

    status_code = 500


class WrongNetwork(ExecutionError):
    """Connected wallet is on a different chain than the payload."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Wrong network: expected chain {expected}, wallet is on {actual}")


class FlowBusy(ExecutionError):
    """A run was requested while another one is in progress."""


class ApiError(LendLinkError):
    """Error envelope returned by a LendLink server, seen from the client."""

    def __init__(self, status_code: int, message: str, code: Optional[str] = None):
        self.status_code = status_code
        self.server_code = code
        super().__init__(message)

    @property
    def code(self) -> str:
        return self.server_code or type(self).__name__
