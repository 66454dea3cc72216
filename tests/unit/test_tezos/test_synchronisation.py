#!/usr/bin/env python3
"""
Unit Tests for Tezos Account Synchronisation

Runs get_account_shape and fetch_all_transactions against an AsyncMock
TzKT client serving synthetic pages.
"""

import asyncio
from dataclasses import replace
from unittest.mock import AsyncMock, MagicMock

import pytest

from tezsync.core.amount import Amount
from tezsync.core.models import OperationType
from tezsync.tezos.api import IndexerError
from tezsync.tezos.models import TzktAccount, TzktOperation
from tezsync.tezos.synchronisation import (
    AccountShapeInfo,
    UnsupportedAccountError,
    fetch_all_transactions,
    get_account_shape,
)
from tests.fixtures.tzkt_samples import (
    ADDRESS,
    make_account,
    make_delegation,
    make_token_account,
    make_transaction,
)

ACCOUNT_ID = f"tezos:{ADDRESS}"


def _pages(*pages):
    """Operation pages as TzktOperation lists, followed by an empty page."""
    return [[TzktOperation.from_dict(item) for item in page] for page in pages] + [[]]


def make_client(account=None, block_count=100, pages=None):
    client = MagicMock()
    client.get_account_by_address = AsyncMock(
        return_value=TzktAccount.from_dict(account or make_account(balance=1_000))
    )
    client.get_block_count = AsyncMock(return_value=block_count)
    client.get_account_operations = AsyncMock(side_effect=pages if pages is not None else [[]])
    return client


@pytest.mark.unit
class TestFetchAllTransactions:
    """Test history paging through the client."""

    @pytest.mark.asyncio
    async def test_follows_last_id_cursor(self):
        first = [make_transaction(sender=ADDRESS, target="tz1Bob", amount=1) for _ in range(2)]
        second = [make_transaction(sender="tz1Bob", target=ADDRESS, amount=2)]
        client = make_client(pages=_pages(first, second))

        txs = await fetch_all_transactions(client, ADDRESS)

        assert [tx.id for tx in txs] == [first[0]["id"], first[1]["id"], second[0]["id"]]
        cursors = [call.kwargs["last_id"] for call in client.get_account_operations.call_args_list]
        assert cursors == [None, first[1]["id"], second[0]["id"]]

    @pytest.mark.asyncio
    async def test_endless_history_stops_after_twenty_pages(self):
        client = make_client()
        client.get_account_operations = AsyncMock(
            side_effect=lambda address, last_id=None: [
                TzktOperation.from_dict(make_transaction(sender=ADDRESS, target="tz1Bob", amount=1))
            ]
        )

        txs = await fetch_all_transactions(client, ADDRESS)

        assert client.get_account_operations.await_count == 20
        assert len(txs) == 20

    @pytest.mark.asyncio
    async def test_missing_id_stops_paging(self):
        page = [make_transaction(sender=ADDRESS, target="tz1Bob", amount=1)]
        page[0]["id"] = None
        client = make_client(pages=_pages(page, page))

        txs = await fetch_all_transactions(client, ADDRESS)

        assert len(txs) == 1
        assert client.get_account_operations.await_count == 1


@pytest.mark.unit
class TestGetAccountShape:
    """Test AccountShape assembly."""

    @pytest.mark.asyncio
    async def test_empty_account_short_circuits(self):
        client = make_client(account=make_account(type="empty"), block_count=321)

        shape = await get_account_shape(client, AccountShapeInfo(ADDRESS, ACCOUNT_ID))

        assert shape.is_empty
        assert shape.block_height == 321
        assert shape.last_sync_date is not None
        client.get_account_operations.assert_not_called()

    @pytest.mark.asyncio
    async def test_unsupported_account_type_raises(self):
        client = make_client(account=make_account(type="contract"))

        with pytest.raises(UnsupportedAccountError):
            await get_account_shape(client, AccountShapeInfo(ADDRESS, ACCOUNT_ID))

    @pytest.mark.asyncio
    async def test_account_and_block_count_are_fetched_concurrently(self):
        both_started = asyncio.Event()
        started = []

        async def wait_for_both(*args):
            started.append(args)
            if len(started) == 2:
                both_started.set()
            await asyncio.wait_for(both_started.wait(), timeout=1)

        client = make_client()
        account = client.get_account_by_address.return_value

        async def get_account(address):
            await wait_for_both(address)
            return account

        async def get_block_count():
            await wait_for_both()
            return 7

        client.get_account_by_address = AsyncMock(side_effect=get_account)
        client.get_block_count = AsyncMock(side_effect=get_block_count)

        shape = await get_account_shape(client, AccountShapeInfo(ADDRESS, ACCOUNT_ID))

        assert shape.block_height == 7

    @pytest.mark.asyncio
    async def test_first_sync_builds_full_shape(self):
        pages = _pages(
            [
                make_transaction(sender=ADDRESS, target="tz1Bob", amount=100, baker_fee=1),
                make_transaction(sender="tz1Bob", target=ADDRESS, amount=50),
                make_delegation(new_delegate=None),
                make_transaction(sender="tz1Bob", target="tz1Carol", amount=1),
                {"type": "endorsement", "id": 1, "hash": "ooE"},
            ]
        )
        client = make_client(account=make_account(balance=5_000, revealed=True), block_count=99, pages=pages)

        shape = await get_account_shape(client, AccountShapeInfo(ADDRESS, ACCOUNT_ID))

        assert shape.block_height == 99
        assert shape.balance == Amount.from_mutez(5_000)
        assert shape.spendable_balance == shape.balance
        assert shape.tezos_resources.revealed is True
        assert shape.sub_accounts == []

        by_type = {op.type: op for op in shape.operations}
        assert set(by_type) == {OperationType.OUT, OperationType.IN, OperationType.UNDELEGATE}
        assert by_type[OperationType.OUT].value == Amount.from_mutez(101)
        assert by_type[OperationType.IN].value == Amount.from_mutez(50)
        assert by_type[OperationType.UNDELEGATE].recipients == [""]

        dates = [op.date for op in shape.operations]
        assert dates == sorted(dates, reverse=True)

    @pytest.mark.asyncio
    async def test_incremental_sync_keeps_stable_operations(self):
        history = [
            make_transaction(sender=ADDRESS, target="tz1Bob", amount=100, baker_fee=1),
            make_transaction(sender="tz1Bob", target=ADDRESS, amount=50),
        ]
        first = await get_account_shape(
            make_client(pages=_pages(history)), AccountShapeInfo(ADDRESS, ACCOUNT_ID)
        )

        newer = make_transaction(sender="tz1Bob", target=ADDRESS, amount=7)
        second = await get_account_shape(
            make_client(pages=_pages(history + [newer])),
            AccountShapeInfo(ADDRESS, ACCOUNT_ID, initial_account=first),
        )

        assert len(second.operations) == 3
        assert second.operations[0].hash == newer["hash"]
        assert second.operations[1] is first.operations[0]
        assert second.operations[2] is first.operations[1]

    @pytest.mark.asyncio
    async def test_unchanged_history_reuses_stable_list(self):
        history = [make_transaction(sender="tz1Bob", target=ADDRESS, amount=50)]
        first = await get_account_shape(
            make_client(pages=_pages(history)), AccountShapeInfo(ADDRESS, ACCOUNT_ID)
        )

        second = await get_account_shape(
            make_client(pages=_pages(history)),
            AccountShapeInfo(ADDRESS, ACCOUNT_ID, initial_account=first),
        )

        assert second.operations is first.operations
        assert second.sub_accounts is first.sub_accounts

    @pytest.mark.asyncio
    async def test_derived_sub_accounts_are_reconciled(self):
        token = make_token_account("KT1Token")
        derive = MagicMock(side_effect=lambda info, ops: [replace(token)])

        first = await get_account_shape(
            make_client(), AccountShapeInfo(ADDRESS, ACCOUNT_ID), derive_sub_accounts=derive
        )
        second = await get_account_shape(
            make_client(),
            AccountShapeInfo(ADDRESS, ACCOUNT_ID, initial_account=first),
            derive_sub_accounts=derive,
        )

        assert second.sub_accounts is first.sub_accounts
        assert second.sub_account_changes == []
        assert derive.call_count == 2

    @pytest.mark.asyncio
    async def test_sub_account_changes_are_reported_on_the_shape(self):
        first = await get_account_shape(
            make_client(),
            AccountShapeInfo(ADDRESS, ACCOUNT_ID),
            derive_sub_accounts=lambda info, ops: [make_token_account("KT1Token")],
        )
        second = await get_account_shape(
            make_client(),
            AccountShapeInfo(ADDRESS, ACCOUNT_ID, initial_account=first),
            derive_sub_accounts=lambda info, ops: [make_token_account("KT1Token", balance=5)],
        )

        token_id = f"tezos:{ADDRESS}+KT1Token"
        assert second.sub_account_changes == [
            f"field balance changed for {token_id}",
            f"field spendable_balance changed for {token_id}",
        ]
        assert second.sub_accounts is not first.sub_accounts
        assert "sub_account_changes" not in second.to_dict()

    @pytest.mark.asyncio
    async def test_failed_sync_leaves_previous_shape_untouched(self):
        history = [make_transaction(sender="tz1Bob", target=ADDRESS, amount=50)]
        previous = await get_account_shape(
            make_client(pages=_pages(history)), AccountShapeInfo(ADDRESS, ACCOUNT_ID)
        )
        operations_before = list(previous.operations)

        client = make_client()
        client.get_account_operations = AsyncMock(side_effect=IndexerError("indexer down"))

        with pytest.raises(IndexerError):
            await get_account_shape(client, AccountShapeInfo(ADDRESS, ACCOUNT_ID, initial_account=previous))

        assert previous.operations == operations_before
