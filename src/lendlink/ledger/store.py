"""Transient store for built transaction links.

Expiry is checked when a link is read; nothing is deleted on read, so
expired rows remain for audit until ``purge_expired`` runs.
"""

import logging
import secrets
import string
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from sqlalchemy import delete, func, select

from lendlink.ledger.database import Database
from lendlink.ledger.models import TransactionLink
from lendlink.web.contracts.transactions import TransactionPayload, TransactionRecord

logger = logging.getLogger(__name__)

ID_ALPHABET = string.ascii_lowercase + string.digits
ID_LENGTH = 8
DEFAULT_TTL_SECONDS = 900


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_id() -> str:
    """Short random link id (36**8 possibilities)."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is written in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_record(link: TransactionLink) -> TransactionRecord:
    return TransactionRecord(
        id=link.id,
        payload=TransactionPayload.model_validate_json(link.payload),
        created_at=_as_utc(link.created_at),
        expires_at=_as_utc(link.expires_at),
        success=link.success,
        tx_hash=link.tx_hash,
        approval_tx_hash=link.approval_tx_hash,
        confirmed_at=_as_utc(link.confirmed_at) if link.confirmed_at else None,
    )


class TransactionStore:
    """Key-value persistence of payloads with a fixed expiry window."""

    def __init__(
        self,
        database: Database,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.database = database
        self.ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock

    def _is_expired(self, link: TransactionLink, now: datetime) -> bool:
        return _as_utc(link.expires_at) <= now

    async def put(self, payload: TransactionPayload) -> str:
        """Persist a payload and return its new link id."""
        now = self._clock()

        async with self.database.session() as session:
            tx_id = generate_id()
            while await session.get(TransactionLink, tx_id) is not None:
                tx_id = generate_id()

            session.add(
                TransactionLink(
                    id=tx_id,
                    action=payload.action.value,
                    payload=payload.model_dump_json(by_alias=True),
                    created_at=now,
                    expires_at=now + self.ttl,
                    success=False,
                )
            )

        logger.info(f"Stored {payload.action.value} link {tx_id}")
        return tx_id

    async def get(self, tx_id: str) -> Optional[TransactionRecord]:
        """Get a link, or None if unknown or expired."""
        async with self.database.session() as session:
            link = await session.get(TransactionLink, tx_id)
            if link is None or self._is_expired(link, self._clock()):
                return None
            return _to_record(link)

    async def mark_confirmed(
        self,
        tx_id: str,
        tx_hash: str,
        approval_tx_hash: Optional[str] = None,
    ) -> bool:
        """Record the submitted hashes.

        Returns:
            False if the id is unknown, True otherwise. A second call
            overwrites the hashes from the first.
        """
        async with self.database.session() as session:
            link = await session.get(TransactionLink, tx_id)
            if link is None:
                return False

            link.success = True
            link.tx_hash = tx_hash
            link.approval_tx_hash = approval_tx_hash
            link.confirmed_at = self._clock()

        logger.info(f"Link {tx_id} confirmed: {tx_hash}")
        return True

    async def delete(self, tx_id: str) -> bool:
        """Remove a link regardless of expiry."""
        async with self.database.session() as session:
            link = await session.get(TransactionLink, tx_id)
            if link is None:
                return False
            await session.delete(link)
        return True

    async def count_expired(self) -> int:
        """Number of rows purge_expired would remove now."""
        now = self._clock()
        async with self.database.session() as session:
            result = await session.execute(
                select(func.count()).select_from(TransactionLink).where(TransactionLink.expires_at <= now)
            )
            return result.scalar_one()

    async def purge_expired(self) -> int:

        """Physically delete expired links. Returns rows removed."""
        now = self._clock()
        async with self.database.session() as session:
            result = await session.execute(
                delete(TransactionLink).where(TransactionLink.expires_at <= now)
            )
            count = result.rowcount or 0

        if count:
            logger.info(f"Purged {count} expired links")
        return count

    async def list_active(self) -> list[TransactionRecord]:
        """All unexpired links, newest first."""
        now = self._clock()
        async with self.database.session() as session:
            stmt = (
                select(TransactionLink)
                .where(TransactionLink.expires_at > now)
                .order_by(TransactionLink.created_at.desc())
            )
            result = await session.execute(stmt)
            return [_to_record(link) for link in result.scalars().all()]

    async def clear_active(self) -> int:
        """Delete every unexpired link. Returns rows removed."""
        now = self._clock()
        async with self.database.session() as session:
            result = await session.execute(
                delete(TransactionLink).where(TransactionLink.expires_at > now)
            )
            return result.rowcount or 0
