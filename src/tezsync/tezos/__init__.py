"""
Tezos Account Family

Synchronisation of Tezos accounts from the TzKT indexer.

Key Components:
- api: TzKT REST client
- models: Raw TzKT account and operation records
- classifier: Raw operation to canonical Operation
- synchronisation: History paging and AccountShape assembly
- datastore: JSON snapshots of adopted shapes (used by the CLI)
"""

from .api import IndexerError, TzktClient
from .classifier import classify, classify_all, compute_fee
from .datastore import AccountSnapshotStore, SnapshotError
from .models import TzktAccount, TzktOperation, TzktOperationKind
from .synchronisation import (
    AccountShapeInfo,
    UnsupportedAccountError,
    fetch_all_transactions,
    get_account_shape,
)

__all__ = [
    "AccountShapeInfo",
    "AccountSnapshotStore",
    "IndexerError",
    "SnapshotError",
    "TzktAccount",
    "TzktClient",
    "TzktOperation",
    "TzktOperationKind",
    "UnsupportedAccountError",
    "classify",
    "classify_all",
    "compute_fee",
    "fetch_all_transactions",
    "get_account_shape",
]
