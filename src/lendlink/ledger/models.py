"""SQLAlchemy models for stored transaction links."""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class TransactionLink(Base):
    """A built pool call behind a shareable link.

    payload is written once at creation. Only the confirmation columns
    change afterwards. Expired rows stay until purged.
    """

    __tablename__ = "transaction_links"

    id: Mapped[str] = mapped_column(String(16), primary_key=True)
    action: Mapped[str] = mapped_column(String(16), nullable=False)
    payload: Mapped[str] = mapped_column(Text, nullable=False)  # JSON, camelCase keys
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )

    # Confirmation
    success: Mapped[bool] = mapped_column(default=False, nullable=False)
    tx_hash: Mapped[Optional[str]] = mapped_column(String(66), nullable=True, index=True)
    approval_tx_hash: Mapped[Optional[str]] = mapped_column(String(66), nullable=True)
    confirmed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
