"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import Receive, Scope, Send

from lendlink import __version__
from lendlink.config import Settings, get_settings
from lendlink.errors import LendLinkError
from lendlink.ledger.database import Database
from lendlink.ledger.store import TransactionStore
from lendlink.web.contracts.transactions import ErrorResponse
from lendlink.web.services.token_catalog import TokenCatalogService
from lendlink.web.services.transaction_builder import TransactionBuilder

logger = logging.getLogger(__name__)

CORS_ALLOW_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_ALLOW_HEADERS = [
    "X-CSRF-Token",
    "X-Requested-With",
    "Accept",
    "Accept-Version",
    "Content-Length",
    "Content-MD5",
    "Content-Type",
    "Date",
    "X-Api-Version",
    "Authorization",
]
CORS_MAX_AGE = 86400


class LinkCORSMiddleware(CORSMiddleware):
    """CORSMiddleware that answers every OPTIONS request with 200 and the fixed headers.

    Any origin may call the API, so requested headers are not vetted, and
    an OPTIONS request without preflight headers is answered the same way.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["method"] == "OPTIONS":
            response = self.preflight_response(Headers(scope=scope))
            await response(scope, receive, send)
            return
        await super().__call__(scope, receive, send)

    def preflight_response(self, request_headers: Headers) -> Response:
        return PlainTextResponse("OK", status_code=200, headers=dict(self.preflight_headers))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    await app.state.database.create_all()
    yield
    # Shutdown
    await app.state.database.dispose()


async def handle_lendlink_error(request: Request, exc: LendLinkError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message, code=exc.code).model_dump(),
    )


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail)).model_dump(),
        headers=getattr(exc, "headers", None),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error="Internal server error").model_dump(),
    )


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Defaults to the cached environment settings
        database: Defaults to a Database on ``settings.database_url``
    """
    settings = settings or get_settings()
    database = database or Database(
        settings.database_url,
        echo=settings.debug and not settings.is_production,
    )

    app = FastAPI(
        title="LendLink API",
        description="Shareable links for unsigned Aave V3 transactions",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.state.settings = settings
    app.state.database = database
    app.state.store = TransactionStore(database, ttl_seconds=settings.tx_ttl_seconds)
    app.state.builder = TransactionBuilder(chain_id=settings.chain_id)
    app.state.catalog = TokenCatalogService(chain_id=settings.chain_id)

    # CORS middleware
    app.add_middleware(
        LinkCORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=CORS_ALLOW_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
        max_age=CORS_MAX_AGE,
    )

    app.add_exception_handler(LendLinkError, handle_lendlink_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)

    # Register routes
    from lendlink.api.routes import health
    from lendlink.web.controllers import pages_router, tokens_router, transactions_router

    app.include_router(health.router, tags=["Health"])
    app.include_router(transactions_router)
    app.include_router(tokens_router)
    app.include_router(pages_router)

    return app
