"""Web services for link creation.

SECURITY: These services MUST NOT:
- Access private keys or seed phrases
- Sign or broadcast transactions

These services CAN:
- Validate requests against the token catalog
- Prepare unsigned pool calls for client submission
"""

from lendlink.web.services.token_catalog import TokenCatalogService
from lendlink.web.services.transaction_builder import TransactionBuilder
from lendlink.web.services.validation import validate_request

__all__ = [
    "TokenCatalogService",
    "TransactionBuilder",
    "validate_request",
]
