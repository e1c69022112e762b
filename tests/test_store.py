"""Tests for the transient transaction store."""

from datetime import timedelta

import pytest

from lendlink.ledger.models import TransactionLink
from lendlink.ledger.store import ID_ALPHABET, ID_LENGTH, TransactionStore, generate_id
from lendlink.web.services.transaction_builder import TransactionBuilder
from lendlink.web.services.validation import validate_request

from tests.conftest import APPROVAL_HASH, TX_HASH, USDC, WETH


def make_payload(action="supply", token=USDC, amount="100"):
    request = validate_request({"payload": {"action": action, "tokenAddress": token, "amount": amount}})
    return TransactionBuilder().build(request)


class TestIds:
    def test_generated_ids_use_short_alphabet(self):
        for _ in range(50):
            tx_id = generate_id()
            assert len(tx_id) == ID_LENGTH
            assert set(tx_id) <= set(ID_ALPHABET)

    def test_ids_are_random(self):
        assert len({generate_id() for _ in range(200)}) == 200


class TestPutGet:
    """Tests for put/get and read-time expiry."""

    @pytest.mark.asyncio
    async def test_round_trip(self, store):
        payload = make_payload()
        tx_id = await store.put(payload)

        record = await store.get(tx_id)

        assert record is not None
        assert record.id == tx_id
        assert record.payload == payload
        assert record.payload.model_dump() == payload.model_dump()
        assert record.success is False
        assert record.tx_hash is None
        assert record.approval_tx_hash is None

    @pytest.mark.asyncio
    async def test_expiry_window(self, store, clock):
        tx_id = await store.put(make_payload())
        record = await store.get(tx_id)

        assert record.created_at == clock.now
        assert record.expires_at - record.created_at == timedelta(seconds=900)

    @pytest.mark.asyncio
    async def test_readable_until_expiry(self, store, clock):
        tx_id = await store.put(make_payload())

        clock.advance(899)
        assert await store.get(tx_id) is not None

        clock.advance(1)
        assert await store.get(tx_id) is None

    @pytest.mark.asyncio
    async def test_expired_row_is_kept(self, store, database, clock):
        tx_id = await store.put(make_payload())
        clock.advance(3600)

        assert await store.get(tx_id) is None

        async with database.session() as session:
            assert await session.get(TransactionLink, tx_id) is not None

    @pytest.mark.asyncio
    async def test_unknown_id(self, store):
        assert await store.get("missing1") is None

    @pytest.mark.asyncio
    async def test_custom_ttl(self, database, clock):
        short_store = TransactionStore(database, ttl_seconds=60, clock=clock)
        tx_id = await short_store.put(make_payload())

        clock.advance(61)
        assert await short_store.get(tx_id) is None


class TestConfirmation:
    """Tests for mark_confirmed."""

    @pytest.mark.asyncio
    async def test_confirm_sets_hashes(self, store):
        payload = make_payload()
        tx_id = await store.put(payload)

        assert await store.mark_confirmed(tx_id, TX_HASH, APPROVAL_HASH) is True

        record = await store.get(tx_id)
        assert record.success is True
        assert record.tx_hash == TX_HASH
        assert record.approval_tx_hash == APPROVAL_HASH
        assert record.confirmed_at is not None
        # payload is untouched
        assert record.payload == payload

    @pytest.mark.asyncio
    async def test_unknown_id_returns_false_and_creates_nothing(self, store, database):
        assert await store.mark_confirmed("nope1234", TX_HASH) is False

        async with database.session() as session:
            assert await session.get(TransactionLink, "nope1234") is None

    @pytest.mark.asyncio
    async def test_reconfirm_overwrites(self, store):
        tx_id = await store.put(make_payload())
        await store.mark_confirmed(tx_id, TX_HASH, APPROVAL_HASH)

        other = "0x" + "ef" * 32
        assert await store.mark_confirmed(tx_id, other) is True

        record = await store.get(tx_id)
        assert record.tx_hash == other
        assert record.approval_tx_hash is None

    @pytest.mark.asyncio
    async def test_confirm_after_expiry_still_recorded(self, store, database, clock):
        tx_id = await store.put(make_payload())
        clock.advance(1000)

        assert await store.mark_confirmed(tx_id, TX_HASH) is True

        async with database.session() as session:
            link = await session.get(TransactionLink, tx_id)
            assert link.success is True
            assert link.tx_hash == TX_HASH


class TestHousekeeping:
    """Tests for delete, purge and listing."""

    @pytest.mark.asyncio
    async def test_purge_removes_only_expired(self, store, clock):
        old_id = await store.put(make_payload())
        clock.advance(600)
        new_id = await store.put(make_payload("borrow", WETH, "1"))
        clock.advance(400)

        assert await store.count_expired() == 1
        assert await store.purge_expired() == 1
        assert await store.count_expired() == 0
        assert await store.get(new_id) is not None
        assert await store.delete(old_id) is False

    @pytest.mark.asyncio
    async def test_delete(self, store):
        tx_id = await store.put(make_payload())

        assert await store.delete(tx_id) is True
        assert await store.get(tx_id) is None
        assert await store.delete(tx_id) is False

    @pytest.mark.asyncio
    async def test_list_active_newest_first(self, store, clock):
        first = await store.put(make_payload())
        clock.advance(10)
        second = await store.put(make_payload("borrow", WETH, "1"))
        clock.advance(10)
        third = await store.put(make_payload())
        clock.advance(885)  # only the first has expired

        records = await store.list_active()

        assert [r.id for r in records] == [third, second]
        assert first not in [r.id for r in records]

    @pytest.mark.asyncio
    async def test_clear_active(self, store, clock):
        await store.put(make_payload())
        await store.put(make_payload())

        assert await store.clear_active() == 2
        assert await store.list_active() == []
