#!/usr/bin/env python3
"""
Core Data Models for tezsync

Canonical, chain-independent records produced by synchronisation: operations,
token sub-accounts and the account shape handed back to the caller.
All models are frozen; a new sync always produces new objects.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from .amount import Amount


class OperationType(Enum):
    """Closed set of canonical operation types."""

    IN = "IN"
    OUT = "OUT"
    FEES = "FEES"
    DELEGATE = "DELEGATE"
    UNDELEGATE = "UNDELEGATE"
    REVEAL = "REVEAL"
    CREATE = "CREATE"


def encode_operation_id(account_id: str, hash: str, type: OperationType) -> str:
    """
    Build the deterministic operation id used for merge deduplication.

    Example:
        encode_operation_id("tz1abc", "oo5X", OperationType.OUT) -> "tz1abc-oo5X-OUT"
    """
    return f"{account_id}-{hash}-{type.value}"


def decode_operation_id(operation_id: str) -> tuple[str, str, OperationType]:
    """
    Split an operation id back into (account_id, hash, type).

    Splits from the right so account ids containing '-' are preserved.

    Raises:
        ValueError: If the id does not have the expected shape
    """
    parts = operation_id.rsplit("-", 2)
    if len(parts) != 3:
        raise ValueError(f"Malformed operation id: {operation_id!r}")
    account_id, hash, type_value = parts
    return account_id, hash, OperationType(type_value)


def _parse_datetime(value: str | None) -> datetime | None:
    if value is None:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass(frozen=True)
class Operation:
    """
    Canonical operation record.

    ``value`` is the full debit (principal + fee) for every type except IN,
    where it is the credited principal and ``fee`` is reported separately.
    """

    id: str
    hash: str
    type: OperationType
    value: Amount
    fee: Amount
    senders: list[str]
    recipients: list[str]
    block_height: int | None
    block_hash: str | None
    account_id: str
    date: datetime
    has_failed: bool = False
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "hash": self.hash,
            "type": self.type.value,
            "value": str(self.value.to_mutez()),
            "fee": str(self.fee.to_mutez()),
            "senders": list(self.senders),
            "recipients": list(self.recipients),
            "block_height": self.block_height,
            "block_hash": self.block_hash,
            "account_id": self.account_id,
            "date": self.date.isoformat(),
            "has_failed": self.has_failed,
            "extra": dict(self.extra),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Operation":
        """Create Operation from dictionary."""
        return cls(
            id=data["id"],
            hash=data["hash"],
            type=OperationType(data["type"]),
            value=Amount.from_mutez(data["value"]),
            fee=Amount.from_mutez(data["fee"]),
            senders=list(data.get("senders", [])),
            recipients=list(data.get("recipients", [])),
            block_height=data.get("block_height"),
            block_hash=data.get("block_hash"),
            account_id=data["account_id"],
            date=_parse_datetime(data["date"]),
            has_failed=data.get("has_failed", False),
            extra=data.get("extra", {}),
        )


@dataclass(frozen=True)
class TokenAccount:
    """
    Derived sub-account holding a token balance under a main account.

    The declared fields are what reconciliation compares between syncs.
    """

    id: str
    parent_id: str
    token_id: str
    balance: Amount
    spendable_balance: Amount
    operations_count: int = 0
    creation_date: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "parent_id": self.parent_id,
            "token_id": self.token_id,
            "balance": str(self.balance.to_mutez()),
            "spendable_balance": str(self.spendable_balance.to_mutez()),
            "operations_count": self.operations_count,
            "creation_date": self.creation_date.isoformat() if self.creation_date else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TokenAccount":
        """Create TokenAccount from dictionary."""
        return cls(
            id=data["id"],
            parent_id=data["parent_id"],
            token_id=data["token_id"],
            balance=Amount.from_mutez(data["balance"]),
            spendable_balance=Amount.from_mutez(data["spendable_balance"]),
            operations_count=data.get("operations_count", 0),
            creation_date=_parse_datetime(data.get("creation_date")),
        )


@dataclass(frozen=True)
class TezosResources:
    """Tezos-specific account state carried on the shape."""

    revealed: bool = False


@dataclass(frozen=True)
class AccountShape:
    """
    Synchronised view of an account, created fresh on every sync.

    For an account the indexer reports as empty only ``block_height`` and
    ``last_sync_date`` are set; every other field is None.

    ``sub_account_changes`` lists what reconciliation noted during the sync
    that built this shape. It is not persisted and not compared.
    """

    block_height: int
    last_sync_date: datetime
    operations: list[Operation] | None = None
    balance: Amount | None = None
    sub_accounts: list[TokenAccount] | None = None
    spendable_balance: Amount | None = None
    tezos_resources: TezosResources | None = None
    sub_account_changes: list[str] = field(default_factory=list, compare=False)

    @property
    def is_empty(self) -> bool:
        """True for the short-circuit shape of an empty account."""
        return self.operations is None

    @property
    def operation_count(self) -> int:
        return len(self.operations or [])

    def to_dict(self) -> dict[str, Any]:
        """Convert shape to dict for JSON serialization."""
        return {
            "block_height": self.block_height,
            "last_sync_date": self.last_sync_date.isoformat(),
            "operations": (
                [op.to_dict() for op in self.operations] if self.operations is not None else None
            ),
            "balance": str(self.balance.to_mutez()) if self.balance is not None else None,
            "sub_accounts": (
                [ta.to_dict() for ta in self.sub_accounts] if self.sub_accounts is not None else None
            ),
            "spendable_balance": (
                str(self.spendable_balance.to_mutez()) if self.spendable_balance is not None else None
            ),
            "tezos_resources": (
                {"revealed": self.tezos_resources.revealed} if self.tezos_resources is not None else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AccountShape":
        """Create AccountShape from dictionary."""
        operations = data.get("operations")
        sub_accounts = data.get("sub_accounts")
        resources = data.get("tezos_resources")
        balance = data.get("balance")
        spendable_balance = data.get("spendable_balance")
        return cls(
            block_height=data["block_height"],
            last_sync_date=_parse_datetime(data["last_sync_date"]),
            operations=[Operation.from_dict(op) for op in operations] if operations is not None else None,
            balance=Amount.from_mutez(balance) if balance is not None else None,
            sub_accounts=(
                [TokenAccount.from_dict(ta) for ta in sub_accounts] if sub_accounts is not None else None
            ),
            spendable_balance=Amount.from_mutez(spendable_balance) if spendable_balance is not None else None,
            tezos_resources=TezosResources(**resources) if resources is not None else None,
        )
