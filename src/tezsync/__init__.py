"""
tezsync - Incremental Tezos Account Synchronisation

Synchronises a Tezos account's operation history from the TzKT indexer into
canonical operation records, merging with previously accepted operations and
reconciling token sub-accounts so unchanged entries keep their identity.

Domain Packages:
- core: Amount primitive, canonical models, merger, reconciler, pagination, configuration
- tezos: TzKT client, operation classifier and account shape builder
- cli: Command-line interface

Example Usage:
    from tezsync.tezos import AccountShapeInfo, TzktClient, get_account_shape

    async with TzktClient() as client:
        shape = await get_account_shape(client, AccountShapeInfo("tz1...", "tezos:tz1..."))
"""

__version__ = "0.1.0"
__author__ = "tezsync contributors"

from .core.amount import Amount
from .core.config import Environment, get_config
from .core.models import AccountShape, Operation, OperationType, TokenAccount

__all__ = [
    "AccountShape",
    "Amount",
    "Environment",
    "Operation",
    "OperationType",
    "TokenAccount",
    "get_config",
]
