"""Request-scoped access to the handles built in ``create_app``."""

from fastapi import Request

from lendlink.config import Settings
from lendlink.ledger.store import TransactionStore
from lendlink.web.services.token_catalog import TokenCatalogService
from lendlink.web.services.transaction_builder import TransactionBuilder


def get_store(request: Request) -> TransactionStore:
    return request.app.state.store


def get_builder(request: Request) -> TransactionBuilder:
    return request.app.state.builder


def get_catalog(request: Request) -> TokenCatalogService:
    return request.app.state.catalog


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
