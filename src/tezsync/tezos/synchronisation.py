#!/usr/bin/env python3
"""
Tezos Account Synchronisation

Builds a fresh AccountShape for a Tezos account from the TzKT indexer:

1. Fetch account metadata and block count concurrently
2. Short-circuit for empty accounts
3. Page through the full operation history
4. Classify, merge with the stable operations, reconcile sub-accounts

Inputs (the previous shape) are never mutated. Any failure propagates and
leaves the caller with its previous shape.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

from ..core.amount import Amount
from ..core.merge import merge_operations
from ..core.models import AccountShape, TezosResources, TokenAccount
from ..core.pagination import MAX_PAGES, fetch_all_pages
from ..core.reconcile import reconcile_sub_accounts
from .api import TzktClient
from .classifier import classify_all
from .models import TzktOperation

logger = logging.getLogger(__name__)


class UnsupportedAccountError(Exception):
    """Raised when the indexer reports an account type sync does not model."""


@dataclass(frozen=True)
class AccountShapeInfo:
    """What the caller knows about the account being synchronised."""

    address: str
    account_id: str
    initial_account: AccountShape | None = None


SubAccountDeriver = Callable[[AccountShapeInfo, list[TzktOperation]], list[TokenAccount]]


async def fetch_all_transactions(
    client: TzktClient,
    address: str,
    last_id: int | None = None,
    max_pages: int = MAX_PAGES,
) -> list[TzktOperation]:
    """
    Fetch the operation history of an address, oldest first.

    Stops on an empty page, a page whose last item has no id, or after
    ``max_pages`` requests. A history cut at the page limit is best-effort.
    Transport errors propagate.
    """

    async def fetch_page(cursor: int | None) -> list[TzktOperation]:
        return await client.get_account_operations(address, last_id=cursor)

    collection = await fetch_all_pages(
        fetch_page,
        lambda tx: tx.id,
        start_cursor=last_id,
        max_pages=max_pages,
    )
    if collection.truncated:
        logger.warning(f"Operation history of {address} truncated at {collection.pages_fetched} pages")

    logger.debug(f"Fetched {len(collection.items)} operations for {address} in {collection.pages_fetched} pages")
    return collection.items


async def get_account_shape(
    client: TzktClient,
    info: AccountShapeInfo,
    derive_sub_accounts: SubAccountDeriver | None = None,
) -> AccountShape:
    """
    Synchronise one Tezos account.

    Args:
        client: TzKT indexer client
        info: Address, account id and the previously adopted shape, if any
        derive_sub_accounts: Optional hook computing token sub-accounts from
                             the raw history; Tezos derives none by default

    Returns:
        A new AccountShape

    Raises:
        UnsupportedAccountError: If the indexer reports a non-user account
        IndexerError: On transport failures
    """
    address = info.address

    api_account, block_height = await asyncio.gather(
        client.get_account_by_address(address),
        client.get_block_count(),
    )

    if api_account.type == "empty":
        logger.info(f"Account {address} is empty at block {block_height}")
        return AccountShape(block_height=block_height, last_sync_date=datetime.now(timezone.utc))

    if api_account.type != "user":
        raise UnsupportedAccountError(f"unsupported account of type {api_account.type!r}: {address}")

    initial_account = info.initial_account
    stable_operations = initial_account.operations if initial_account else None
    if stable_operations is None:
        stable_operations = []
    previous_sub_accounts = initial_account.sub_accounts if initial_account else None

    raw_operations = await fetch_all_transactions(client, address)
    new_operations = classify_all(address, info.account_id, raw_operations)
    operations = merge_operations(stable_operations, new_operations)

    derived = derive_sub_accounts(info, raw_operations) if derive_sub_accounts else []
    reconciliation = reconcile_sub_accounts(derived, previous_sub_accounts)

    balance = Amount.from_mutez(api_account.balance)

    logger.info(
        f"Synced {address}: {len(raw_operations)} fetched, {len(new_operations)} classified, "
        f"{len(operations)} total operations at block {block_height}"
    )

    return AccountShape(
        block_height=block_height,
        last_sync_date=datetime.now(timezone.utc),
        operations=operations,
        balance=balance,
        sub_accounts=reconciliation.sub_accounts,
        spendable_balance=balance,
        tezos_resources=TezosResources(revealed=api_account.revealed),
        sub_account_changes=reconciliation.changes,
    )
