"""HTTP controllers for web API endpoints.

SECURITY: These controllers MUST NOT:
- Access private keys
- Sign or broadcast transactions

They only build, serve and confirm unsigned calls for client-side signing.
"""

from lendlink.web.controllers.pages import router as pages_router
from lendlink.web.controllers.tokens import router as tokens_router
from lendlink.web.controllers.transactions import router as transactions_router

__all__ = [
    "pages_router",
    "tokens_router",
    "transactions_router",
]
