#!/usr/bin/env python3
"""
Tezos Operation Classifier

Turns a raw TzKT operation into a canonical Operation for one account, or
discards it when it is not interesting for that account.

Classification rules:
- transaction: IN/OUT depending on the account's side; self transfers,
  zero-amount transfers and transfers where the account is only the
  initiator are FEES
- delegation: DELEGATE, or UNDELEGATE when no new delegate is set
- reveal: REVEAL
- migration: IN or OUT by the sign of the balance change
- origination: CREATE, valued at the originated contract's balance
- activation: IN, valued at the activated balance

Every type except IN reports ``value`` as principal plus fee. IN operations
with a zero value are discarded. Unsupported kinds and transactions that do
not involve the account are logged and discarded, never raised.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..core.amount import Amount
from ..core.models import Operation, OperationType, encode_operation_id
from .models import TzktOperation, TzktOperationKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Classification:
    """Type, principal and parties decided for one raw operation."""

    type: OperationType
    principal: Amount | None
    senders: list[str]
    recipients: list[str]


def _classify_transaction(address: str, tx: TzktOperation) -> Classification | None:
    initiator, sender, target = tx.initiator, tx.sender, tx.target
    if address not in (initiator, sender, target):
        logger.warning(f"Found transaction unrelated to account {address}: {tx.hash}")
        return None

    senders = [sender or initiator or ""]
    recipients = [target or ""]

    is_self_transfer = sender == address and target == address
    is_initiator_only = sender != address and target != address
    if is_self_transfer or is_initiator_only:
        # The account only pays fees
        return Classification(OperationType.FEES, None, senders, recipients)

    op_type = OperationType.IN if target == address else OperationType.OUT
    principal = None
    if not tx.has_failed:
        principal = Amount.from_mutez(tx.amount)
        if principal.is_zero():
            op_type = OperationType.FEES
    return Classification(op_type, principal, senders, recipients)


def _classify_delegation(address: str, tx: TzktOperation) -> Classification:
    op_type = OperationType.DELEGATE if tx.new_delegate else OperationType.UNDELEGATE
    # Recipient is the new delegate, or "" for an undelegation
    return Classification(op_type, None, [address], [tx.new_delegate or ""])


def _classify_reveal(address: str, tx: TzktOperation) -> Classification:
    return Classification(OperationType.REVEAL, None, [address], [address])


def _classify_migration(address: str, tx: TzktOperation) -> Classification:
    change = Amount.from_mutez(tx.balance_change)
    op_type = OperationType.OUT if change.is_negative() else OperationType.IN
    return Classification(op_type, change.abs(), [address], [address])


def _classify_origination(address: str, tx: TzktOperation) -> Classification:
    return Classification(
        OperationType.CREATE,
        Amount.from_mutez(tx.contract_balance),
        [address],
        [tx.originated_contract or ""],
    )


def _classify_activation(address: str, tx: TzktOperation) -> Classification:
    return Classification(OperationType.IN, Amount.from_mutez(tx.balance), [address], [address])


_CLASSIFIERS: dict[TzktOperationKind, Callable[[str, TzktOperation], Classification | None]] = {
    TzktOperationKind.TRANSACTION: _classify_transaction,
    TzktOperationKind.DELEGATION: _classify_delegation,
    TzktOperationKind.REVEAL: _classify_reveal,
    TzktOperationKind.MIGRATION: _classify_migration,
    TzktOperationKind.ORIGINATION: _classify_origination,
    TzktOperationKind.ACTIVATION: _classify_activation,
}


def compute_fee(tx: TzktOperation) -> Amount:
    """
    Total fee paid by the account for a raw operation.

    The baker fee is always paid; allocation and storage fees only apply to
    operations that were applied.
    """
    fee = Amount.from_mutez(tx.baker_fee)
    if not tx.has_failed:
        fee = fee + Amount.from_mutez(tx.allocation_fee) + Amount.from_mutez(tx.storage_fee)
    return fee


def parse_timestamp(timestamp: Any) -> datetime:
    """Parse a TzKT ISO-8601 timestamp ("2021-01-01T00:00:00Z")."""
    if not timestamp:
        raise ValueError("Operation has no timestamp")
    if not isinstance(timestamp, str):
        raise ValueError(f"Invalid timestamp: {timestamp!r}")
    return datetime.fromisoformat(timestamp.replace("Z", "+00:00"))


def classify(address: str, account_id: str, tx: TzktOperation) -> Operation | None:
    """
    Classify a raw TzKT operation for the given account.

    Args:
        address: The account's Tezos address
        account_id: Identifier of the account the operation belongs to
        tx: Raw operation from the indexer

    Returns:
        The canonical Operation, or None if the operation is discarded
    """
    kind = tx.kind
    if kind is None:
        logger.warning(f"Unsupported operation type {tx.type!r}: {tx.hash}")
        return None

    try:
        classification = _CLASSIFIERS[kind](address, tx)
        if classification is None:
            return None

        op_type = classification.type
        value = classification.principal if classification.principal is not None else Amount.zero()
        if op_type == OperationType.IN and value.is_zero():
            logger.debug(f"Skipping zero-value incoming operation {tx.hash}")
            return None

        fee = compute_fee(tx)
        date = parse_timestamp(tx.timestamp)
    except ValueError as e:
        logger.warning(f"Discarding malformed operation {tx.hash}: {e}")
        return None

    if op_type != OperationType.IN:
        value = value + fee

    return Operation(
        id=encode_operation_id(account_id, tx.hash, op_type),
        hash=tx.hash,
        type=op_type,
        value=value,
        fee=fee,
        senders=classification.senders,
        recipients=classification.recipients,
        block_height=tx.level,
        block_hash=tx.block,
        account_id=account_id,
        date=date,
        has_failed=tx.has_failed,
        extra={},
    )


def classify_all(address: str, account_id: str, txs: list[TzktOperation]) -> list[Operation]:
    """Classify a batch of raw operations, dropping discarded ones."""
    operations = []
    for tx in txs:
        op = classify(address, account_id, tx)
        if op is not None:
            operations.append(op)
    return operations
