"""Web boundary layer for non-custodial link operations.

SECURITY PRINCIPLES:
1. The server never sees a wallet address or a private key. Payloads
   carry a placeholder in the on-behalf-of / to slot.

2. This layer CAN import from:
   - protocol/ (public contract metadata)
   - ledger/ (link persistence)
   - config (settings)

3. All operations in this layer prepare data for client-side signing.
"""

__all__ = [
    "contracts",
    "services",
    "controllers",
]
